from pydantic import BaseModel, Field
from datetime import datetime
from vidtube.schemas.user import UserSummary


class CommentBase(BaseModel):
    content: str = Field(..., min_length=1, max_length=1000)


class CommentCreate(CommentBase):
    pass


class CommentUpdate(CommentBase):
    pass


class CommentResponse(BaseModel):
    id: str
    videoId: str
    ownerId: str
    content: str
    createdAt: datetime
    updatedAt: datetime

    class Config:
        from_attributes = True


class CommentWithLikes(CommentResponse):
    owner: UserSummary
    likesCount: int = 0
