from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class UserSummary(BaseModel):
    id: str
    username: str
    fullName: Optional[str] = None
    avatar: Optional[str] = None

    class Config:
        from_attributes = True


class ChannelSummary(UserSummary):
    subscribersCount: int = 0
    isSubscribed: bool = False


class UserResponse(UserSummary):
    email: str
    coverImage: Optional[str] = None
    createdAt: datetime
