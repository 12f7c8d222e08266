from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from vidtube.database import Base, generate_id


class User(Base):
    __tablename__ = "Users"

    id = Column(String(32), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    fullName = Column(String(255))
    avatar = Column(String(500))
    coverImage = Column(String(500))
    createdAt = Column(DateTime, nullable=False, default=datetime.utcnow)
    updatedAt = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    videos = relationship("Video", back_populates="owner")
    comments = relationship("Comment", back_populates="owner")
    tweets = relationship("Tweet", back_populates="owner")
