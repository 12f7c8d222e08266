from dataclasses import dataclass
from sqlalchemy import Column, String, DateTime, ForeignKey, Enum, UniqueConstraint
from datetime import datetime
from vidtube.database import Base, generate_id
import enum


class LikeTargetType(str, enum.Enum):
    video = "video"
    comment = "comment"
    tweet = "tweet"


@dataclass(frozen=True)
class LikeTarget:
    """The single entity a Like points at."""

    kind: LikeTargetType
    target_id: str

    def __post_init__(self):
        object.__setattr__(self, "kind", LikeTargetType(self.kind))


class Like(Base):
    __tablename__ = "Likes"
    __table_args__ = (
        UniqueConstraint("targetType", "targetId", "likedBy", name="uq_like_target_user"),
    )

    id = Column(String(32), primary_key=True, default=generate_id)
    targetType = Column(Enum(LikeTargetType), nullable=False)
    targetId = Column(String(32), nullable=False, index=True)
    likedBy = Column(String(32), ForeignKey("Users.id", ondelete="CASCADE"), nullable=False, index=True)
    createdAt = Column(DateTime, nullable=False, default=datetime.utcnow)

    @classmethod
    def for_target(cls, target: LikeTarget, user_id: str) -> "Like":
        return cls(targetType=target.kind, targetId=target.target_id, likedBy=user_id)

    @property
    def target(self) -> LikeTarget:
        return LikeTarget(self.targetType, self.targetId)
