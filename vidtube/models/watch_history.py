from sqlalchemy import Column, String, DateTime, ForeignKey
from datetime import datetime
from vidtube.database import Base


class WatchHistory(Base):
    __tablename__ = "WatchHistory"

    userId = Column(String(32), ForeignKey("Users.id", ondelete="CASCADE"), primary_key=True)
    videoId = Column(String(32), ForeignKey("Videos.id", ondelete="CASCADE"), primary_key=True, index=True)
    watchedAt = Column(DateTime, nullable=False, default=datetime.utcnow)
