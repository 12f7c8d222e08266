from pydantic import BaseModel, Field
from datetime import datetime
from vidtube.schemas.user import UserSummary


class TweetBase(BaseModel):
    content: str = Field(..., min_length=1, max_length=1000)


class TweetCreate(TweetBase):
    pass


class TweetUpdate(TweetBase):
    pass


class TweetResponse(BaseModel):
    id: str
    ownerId: str
    content: str
    createdAt: datetime
    updatedAt: datetime

    class Config:
        from_attributes = True


class TweetWithLikes(TweetResponse):
    owner: UserSummary
    likesCount: int = 0
