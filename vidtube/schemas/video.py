from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from vidtube.schemas.user import UserSummary, ChannelSummary
from vidtube.schemas.comment import CommentResponse


class VideoResponse(BaseModel):
    id: str
    ownerId: str
    title: str
    description: str
    videoFile: str
    thumbnail: str
    duration: float
    views: int
    isPublished: bool
    createdAt: datetime
    updatedAt: datetime

    class Config:
        from_attributes = True


class VideoListItem(BaseModel):
    id: str
    videoFile: str
    thumbnail: str
    title: str
    description: str
    views: int
    duration: float
    isPublished: bool
    createdAt: datetime
    owner: UserSummary

    class Config:
        from_attributes = True


class VideoDetail(BaseModel):
    id: str
    videoFile: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    createdAt: datetime
    owner: ChannelSummary
    comments: List[CommentResponse] = []
    likesCount: int = 0
    isLiked: bool = False


class VideoSummary(BaseModel):
    id: str
    title: str
    thumbnail: str
    views: int
    owner: UserSummary

    class Config:
        from_attributes = True


class VideoUpdateResult(BaseModel):
    video: VideoResponse
    notices: List[str] = []


class VideoCleanup(BaseModel):
    commentLikes: Optional[int] = None
    comments: Optional[int] = None
    likes: Optional[int] = None
    watchHistory: Optional[int] = None


class VideoDeleteResult(BaseModel):
    deletedVideo: VideoResponse
    cleanup: VideoCleanup
    deleteVideoFile: bool = False
    deleteThumbnail: bool = False
