from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from vidtube.models.like import LikeTargetType
from vidtube.schemas.user import UserSummary
from vidtube.schemas.video import VideoSummary


class LikeResponse(BaseModel):
    id: str
    targetType: LikeTargetType
    targetId: str
    likedBy: str
    createdAt: datetime

    class Config:
        from_attributes = True


class LikeToggleResult(BaseModel):
    liked: bool
    like: Optional[LikeResponse] = None


class LikedVideos(BaseModel):
    totalVideos: int
    videos: List[VideoSummary]


class LikedByUsers(BaseModel):
    users: List[UserSummary]
