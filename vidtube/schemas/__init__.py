from vidtube.schemas.common import ApiResponse
from vidtube.schemas.user import UserSummary, ChannelSummary, UserResponse
from vidtube.schemas.video import (
    VideoResponse, VideoListItem, VideoDetail, VideoSummary,
    VideoUpdateResult, VideoCleanup, VideoDeleteResult
)
from vidtube.schemas.comment import CommentCreate, CommentUpdate, CommentResponse, CommentWithLikes
from vidtube.schemas.tweet import TweetCreate, TweetUpdate, TweetResponse, TweetWithLikes
from vidtube.schemas.like import LikeResponse, LikeToggleResult, LikedVideos, LikedByUsers
from vidtube.schemas.subscription import SubscriptionToggleResult, ChannelSubscribers, SubscribedChannels

__all__ = [
    "ApiResponse",
    "UserSummary", "ChannelSummary", "UserResponse",
    "VideoResponse", "VideoListItem", "VideoDetail", "VideoSummary",
    "VideoUpdateResult", "VideoCleanup", "VideoDeleteResult",
    "CommentCreate", "CommentUpdate", "CommentResponse", "CommentWithLikes",
    "TweetCreate", "TweetUpdate", "TweetResponse", "TweetWithLikes",
    "LikeResponse", "LikeToggleResult", "LikedVideos", "LikedByUsers",
    "SubscriptionToggleResult", "ChannelSubscribers", "SubscribedChannels"
]
