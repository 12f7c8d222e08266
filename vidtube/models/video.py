from sqlalchemy import Column, Integer, Float, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from vidtube.database import Base, generate_id


class Video(Base):
    __tablename__ = "Videos"

    id = Column(String(32), primary_key=True, default=generate_id)
    ownerId = Column(String(32), ForeignKey("Users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(120), nullable=False)
    description = Column(String(5000), nullable=False)
    videoFile = Column(String(500), nullable=False)
    videoFilePublicId = Column(String(255), nullable=False)
    thumbnail = Column(String(500), nullable=False)
    thumbnailPublicId = Column(String(255), nullable=False)
    duration = Column(Float, nullable=False, default=0)
    views = Column(Integer, nullable=False, default=0)
    isPublished = Column(Boolean, nullable=False, default=True)
    createdAt = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updatedAt = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("User", back_populates="videos")
