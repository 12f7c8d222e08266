"""
Video listing, detail composition, publishing, update and cascading delete
"""
from dataclasses import dataclass
from typing import Callable, List, Optional

import structlog
from sqlalchemy import asc, desc, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from vidtube.core.config import Settings
from vidtube.core.errors import ExternalServiceError, NotFoundError, ValidationError
from vidtube.models.comment import Comment
from vidtube.models.like import Like, LikeTarget, LikeTargetType
from vidtube.models.user import User
from vidtube.models.video import Video
from vidtube.models.watch_history import WatchHistory
from vidtube.schemas.comment import CommentResponse
from vidtube.schemas.user import ChannelSummary
from vidtube.schemas.video import (
    VideoCleanup, VideoDeleteResult, VideoDetail, VideoListItem,
    VideoResponse, VideoUpdateResult
)
from vidtube.services.media_store import IMAGE, VIDEO, MediaStore
from vidtube.services.queries import (
    count_likes, count_subscribers, ensure_owner, get_or_404,
    has_liked, is_subscribed, page_bounds
)
from vidtube.utils.validators import (
    require_text, validate_file_extension, validate_file_size, validate_id
)

logger = structlog.get_logger(__name__)

SORTABLE_FIELDS = frozenset(column.name for column in Video.__table__.columns)


@dataclass
class MediaUpload:
    filename: str
    content: bytes


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def list_videos(
    db: Session,
    page: int = 1,
    limit: int = 10,
    query: Optional[str] = None,
    sort_by: str = "createdAt",
    sort_type: str = "desc",
    user_id: Optional[str] = None,
    filter_by_user: bool = True,
) -> List[VideoListItem]:
    offset, limit = page_bounds(page, limit)
    if sort_by not in SORTABLE_FIELDS:
        raise ValidationError(f"Cannot sort videos by '{sort_by}'")
    if sort_type not in ("asc", "desc"):
        raise ValidationError("sortType must be 'asc' or 'desc'")

    q = db.query(Video, User).join(User, Video.ownerId == User.id)

    if query and query.strip():
        pattern = f"%{_escape_like(query.strip())}%"
        q = q.filter(or_(
            Video.title.ilike(pattern, escape="\\"),
            Video.description.ilike(pattern, escape="\\")
        ))

    if user_id and filter_by_user:
        validate_id(user_id, "user")
        q = q.filter(Video.ownerId == user_id)

    column = getattr(Video, sort_by)
    order = asc if sort_type == "asc" else desc
    # id breaks ties so consecutive pages never overlap
    rows = q.order_by(order(column), order(Video.id)).offset(offset).limit(limit).all()

    if not rows:
        raise NotFoundError("No videos found")

    return [VideoListItem.model_validate(video) for video, _owner in rows]


def _has_watched(db: Session, video_id: str, user_id: str) -> bool:
    return db.query(WatchHistory.videoId).filter(
        WatchHistory.userId == user_id,
        WatchHistory.videoId == video_id
    ).first() is not None


def record_view(db: Session, video_id: str, user_id: str) -> bool:
    """
    Count a view the first time a user opens a video.

    The watch history row and the view increment commit together; the
    composite primary key on WatchHistory rejects a concurrent duplicate
    visit, which then skips the increment.
    """
    if _has_watched(db, video_id, user_id):
        return False

    db.add(WatchHistory(userId=user_id, videoId=video_id))
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        return False

    db.query(Video).filter(Video.id == video_id).update(
        {Video.views: Video.views + 1}, synchronize_session=False
    )
    db.commit()
    logger.info("video_view_recorded", video_id=video_id, user_id=user_id)
    return True


def get_video_detail(db: Session, video_id: str, viewer: Optional[User] = None) -> VideoDetail:
    video = get_or_404(db, Video, video_id, "Video")
    viewer_id = viewer.id if viewer is not None else None

    if viewer_id is not None:
        record_view(db, video.id, viewer_id)

    target = LikeTarget(LikeTargetType.video, video.id)
    owner = video.owner
    owner_summary = ChannelSummary.model_validate(owner)
    owner_summary.subscribersCount = count_subscribers(db, owner.id)
    owner_summary.isSubscribed = is_subscribed(db, owner.id, viewer_id)

    comments = db.query(Comment).filter(
        Comment.videoId == video.id
    ).order_by(desc(Comment.createdAt), desc(Comment.id)).all()

    return VideoDetail(
        id=video.id,
        videoFile=video.videoFile,
        thumbnail=video.thumbnail,
        title=video.title,
        description=video.description,
        duration=video.duration,
        views=video.views,
        createdAt=video.createdAt,
        owner=owner_summary,
        comments=[CommentResponse.model_validate(c) for c in comments],
        likesCount=count_likes(db, target),
        isLiked=has_liked(db, target, viewer_id),
    )


def _check_upload(upload: Optional[MediaUpload], label: str, allowed_extensions, max_size: int) -> MediaUpload:
    if upload is None or not upload.filename:
        raise ValidationError(f"{label} is required")
    if not validate_file_extension(upload.filename, allowed_extensions):
        raise ValidationError(
            f"{label} type not allowed. Allowed types: {', '.join(allowed_extensions)}"
        )
    if not validate_file_size(len(upload.content), max_size):
        raise ValidationError(
            f"{label} size must be between 1 byte and {max_size / (1024 * 1024):.1f}MB"
        )
    return upload


def _discard_blob(store: MediaStore, public_id: str) -> bool:
    try:
        store.delete(public_id)
    except ExternalServiceError as e:
        logger.warning("media_delete_failed", public_id=public_id, error=e.message)
        return False
    return True


def publish_video(
    db: Session,
    store: MediaStore,
    settings: Settings,
    owner: User,
    title: Optional[str],
    description: Optional[str],
    video_file: Optional[MediaUpload],
    thumbnail: Optional[MediaUpload],
) -> VideoResponse:
    title = require_text(title, "Title")
    description = require_text(description, "Description")
    _check_upload(video_file, "Video file", settings.ALLOWED_VIDEO_EXTENSIONS, settings.MAX_VIDEO_SIZE)
    _check_upload(thumbnail, "Thumbnail", settings.ALLOWED_IMAGE_EXTENSIONS, settings.MAX_IMAGE_SIZE)

    stored_video = store.upload(video_file.content, video_file.filename, VIDEO)
    try:
        stored_thumbnail = store.upload(thumbnail.content, thumbnail.filename, IMAGE)
    except Exception:
        _discard_blob(store, stored_video.public_id)
        raise

    db_video = Video(
        ownerId=owner.id,
        title=title,
        description=description,
        videoFile=stored_video.url,
        videoFilePublicId=stored_video.public_id,
        thumbnail=stored_thumbnail.url,
        thumbnailPublicId=stored_thumbnail.public_id,
        duration=stored_video.duration or 0,
    )
    db.add(db_video)
    try:
        db.commit()
    except SQLAlchemyError:
        # Cleanup uploaded media if the record could not be saved
        db.rollback()
        _discard_blob(store, stored_video.public_id)
        _discard_blob(store, stored_thumbnail.public_id)
        raise
    db.refresh(db_video)

    logger.info("video_published", video_id=db_video.id, owner_id=owner.id)
    return VideoResponse.model_validate(db_video)


def update_video(
    db: Session,
    store: MediaStore,
    settings: Settings,
    video_id: str,
    user: User,
    title: Optional[str] = None,
    description: Optional[str] = None,
    thumbnail: Optional[MediaUpload] = None,
) -> VideoUpdateResult:
    video = get_or_404(db, Video, video_id, "Video")
    ensure_owner(video, user, "update", "video")

    if title is None and description is None and thumbnail is None:
        raise ValidationError("Provide a title, description or thumbnail to update")
    if title is not None:
        title = require_text(title, "Title")
    if description is not None:
        description = require_text(description, "Description")
    if thumbnail is not None:
        _check_upload(thumbnail, "Thumbnail", settings.ALLOWED_IMAGE_EXTENSIONS, settings.MAX_IMAGE_SIZE)

    old_thumbnail_id = None
    new_thumbnail_id = None
    if thumbnail is not None:
        stored = store.upload(thumbnail.content, thumbnail.filename, IMAGE)
        old_thumbnail_id = video.thumbnailPublicId
        new_thumbnail_id = stored.public_id
        video.thumbnail = stored.url
        video.thumbnailPublicId = stored.public_id
    if title is not None:
        video.title = title
    if description is not None:
        video.description = description

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        if new_thumbnail_id:
            _discard_blob(store, new_thumbnail_id)
        raise
    db.refresh(video)

    notices = []
    if old_thumbnail_id and not _discard_blob(store, old_thumbnail_id):
        notices.append("Video updated, but the previous thumbnail could not be deleted")

    return VideoUpdateResult(video=VideoResponse.model_validate(video), notices=notices)


def _cleanup_step(db: Session, step: str, video_id: str, action: Callable[[], int]) -> Optional[int]:
    try:
        removed = action()
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("video_cleanup_failed", step=step, video_id=video_id, error=str(e))
        return None
    return removed


def _delete_comment_likes(db: Session, comment_ids: List[str]) -> int:
    if not comment_ids:
        return 0
    return db.query(Like).filter(
        Like.targetType == LikeTargetType.comment,
        Like.targetId.in_(comment_ids)
    ).delete(synchronize_session=False)


def _delete_comments(db: Session, video_id: str) -> int:
    return db.query(Comment).filter(Comment.videoId == video_id).delete(synchronize_session=False)


def _delete_video_likes(db: Session, video_id: str) -> int:
    return db.query(Like).filter(
        Like.targetType == LikeTargetType.video,
        Like.targetId == video_id
    ).delete(synchronize_session=False)


def _delete_watch_history(db: Session, video_id: str) -> int:
    return db.query(WatchHistory).filter(WatchHistory.videoId == video_id).delete(synchronize_session=False)


def delete_video(db: Session, store: MediaStore, video_id: str, user: User) -> VideoDeleteResult:
    video = get_or_404(db, Video, video_id, "Video")
    ensure_owner(video, user, "delete", "video")

    deleted_video = VideoResponse.model_validate(video)
    video_file_id = video.videoFilePublicId
    thumbnail_id = video.thumbnailPublicId
    comment_ids = [comment_id for (comment_id,) in db.query(Comment.id).filter(Comment.videoId == video_id)]

    db.delete(video)
    db.commit()
    logger.info("video_deleted", video_id=video_id, owner_id=user.id)

    cleanup = VideoCleanup(
        commentLikes=_cleanup_step(db, "commentLikes", video_id, lambda: _delete_comment_likes(db, comment_ids)),
        comments=_cleanup_step(db, "comments", video_id, lambda: _delete_comments(db, video_id)),
        likes=_cleanup_step(db, "likes", video_id, lambda: _delete_video_likes(db, video_id)),
        watchHistory=_cleanup_step(db, "watchHistory", video_id, lambda: _delete_watch_history(db, video_id)),
    )

    return VideoDeleteResult(
        deletedVideo=deleted_video,
        cleanup=cleanup,
        deleteVideoFile=_discard_blob(store, video_file_id),
        deleteThumbnail=_discard_blob(store, thumbnail_id),
    )
