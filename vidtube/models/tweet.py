from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from vidtube.database import Base, generate_id


class Tweet(Base):
    __tablename__ = "Tweets"

    id = Column(String(32), primary_key=True, default=generate_id)
    ownerId = Column(String(32), ForeignKey("Users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(String(1000), nullable=False)
    createdAt = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updatedAt = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("User", back_populates="tweets")
