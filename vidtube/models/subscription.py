from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from vidtube.database import Base, generate_id


class Subscription(Base):
    __tablename__ = "Subscriptions"
    __table_args__ = (
        UniqueConstraint("subscriberId", "channelId", name="uq_subscription_pair"),
        CheckConstraint("subscriberId <> channelId", name="ck_subscription_not_self"),
    )

    id = Column(String(32), primary_key=True, default=generate_id)
    subscriberId = Column(String(32), ForeignKey("Users.id", ondelete="CASCADE"), nullable=False, index=True)
    channelId = Column(String(32), ForeignKey("Users.id", ondelete="CASCADE"), nullable=False, index=True)
    createdAt = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    subscriber = relationship("User", foreign_keys=[subscriberId])
    channel = relationship("User", foreign_keys=[channelId])
