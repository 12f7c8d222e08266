from pydantic import BaseModel
from typing import List
from vidtube.schemas.user import UserSummary


class SubscriptionToggleResult(BaseModel):
    subscribed: bool
    subscribersCount: int


class ChannelSubscribers(BaseModel):
    subscribers: List[UserSummary]
    subscribersCount: int


class SubscribedChannels(BaseModel):
    channels: List[UserSummary]
    channelsCount: int
