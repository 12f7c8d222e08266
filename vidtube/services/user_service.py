from typing import List

from sqlalchemy import desc
from sqlalchemy.orm import Session

from vidtube.models.user import User
from vidtube.models.video import Video
from vidtube.models.watch_history import WatchHistory
from vidtube.schemas.video import VideoSummary


def get_watch_history(db: Session, user: User) -> List[VideoSummary]:
    """Videos the user has opened, most recently watched first."""
    rows = db.query(Video, User).join(
        WatchHistory, WatchHistory.videoId == Video.id
    ).join(User, Video.ownerId == User.id).filter(
        WatchHistory.userId == user.id
    ).order_by(desc(WatchHistory.watchedAt), desc(Video.id)).all()

    return [VideoSummary.model_validate(video) for video, _owner in rows]
