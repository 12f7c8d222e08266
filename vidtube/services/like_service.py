"""
Like toggling and like-based listings

A like is keyed by (targetType, targetId, likedBy) and the table carries a
unique constraint on that triple. Toggling deletes a matching row if there is
one and inserts otherwise; losing an insert race to a concurrent toggle shows
up as an IntegrityError and is reported as "liked".
"""
from typing import List

import structlog
from sqlalchemy import and_, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vidtube.core.errors import NotFoundError
from vidtube.models.comment import Comment
from vidtube.models.like import Like, LikeTarget, LikeTargetType
from vidtube.models.tweet import Tweet
from vidtube.models.user import User
from vidtube.models.video import Video
from vidtube.schemas.like import LikedByUsers, LikedVideos, LikeResponse, LikeToggleResult
from vidtube.schemas.user import UserSummary
from vidtube.schemas.video import VideoSummary
from vidtube.services.queries import get_or_404

logger = structlog.get_logger(__name__)

TARGET_MODELS = {
    LikeTargetType.video: (Video, "Video"),
    LikeTargetType.comment: (Comment, "Comment"),
    LikeTargetType.tweet: (Tweet, "Tweet"),
}


def _matching(db: Session, target: LikeTarget, user_id: str):
    return db.query(Like).filter(
        Like.targetType == target.kind,
        Like.targetId == target.target_id,
        Like.likedBy == user_id
    )


def toggle_like(db: Session, target: LikeTarget, user: User) -> LikeToggleResult:
    model, label = TARGET_MODELS[target.kind]
    get_or_404(db, model, target.target_id, label)

    removed = _matching(db, target, user.id).delete(synchronize_session=False)
    if removed:
        db.commit()
        logger.info("like_removed", target_type=target.kind.value, target_id=target.target_id, user_id=user.id)
        return LikeToggleResult(liked=False)

    db_like = Like.for_target(target, user.id)
    db.add(db_like)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent toggle created the same like first
        db.rollback()
        existing = _matching(db, target, user.id).first()
        return LikeToggleResult(
            liked=True,
            like=LikeResponse.model_validate(existing) if existing else None
        )
    db.refresh(db_like)

    logger.info("like_added", target_type=target.kind.value, target_id=target.target_id, user_id=user.id)
    return LikeToggleResult(liked=True, like=LikeResponse.model_validate(db_like))


def get_liked_videos(db: Session, user: User) -> LikedVideos:
    rows = db.query(Video, User).join(
        Like, and_(Like.targetType == LikeTargetType.video, Like.targetId == Video.id)
    ).join(User, Video.ownerId == User.id).filter(
        Like.likedBy == user.id
    ).order_by(desc(Like.createdAt), desc(Like.id)).all()

    if not rows:
        raise NotFoundError("Liked videos not found")

    videos = [VideoSummary.model_validate(video) for video, _owner in rows]
    return LikedVideos(totalVideos=len(videos), videos=videos)


def get_users_who_liked_video(db: Session, video_id: str) -> LikedByUsers:
    get_or_404(db, Video, video_id, "Video")

    users = db.query(User).join(Like, Like.likedBy == User.id).filter(
        Like.targetType == LikeTargetType.video,
        Like.targetId == video_id
    ).order_by(Like.createdAt, Like.id).all()

    return LikedByUsers(users=[UserSummary.model_validate(u) for u in users])
