from typing import List

import structlog
from sqlalchemy import desc
from sqlalchemy.orm import Session

from vidtube.core.errors import NotFoundError
from vidtube.models.comment import Comment
from vidtube.models.like import Like, LikeTarget, LikeTargetType
from vidtube.models.user import User
from vidtube.models.video import Video
from vidtube.schemas.comment import CommentResponse, CommentWithLikes
from vidtube.services.queries import count_likes, ensure_owner, get_or_404, like_counts, page_bounds
from vidtube.utils.validators import require_text, validate_id

logger = structlog.get_logger(__name__)


def list_video_comments(db: Session, video_id: str, page: int = 1, limit: int = 10) -> List[CommentWithLikes]:
    """Newest comments first; like counts are computed for the requested page only."""
    validate_id(video_id, "video")
    offset, limit = page_bounds(page, limit)

    rows = db.query(Comment, User).join(User, Comment.ownerId == User.id).filter(
        Comment.videoId == video_id
    ).order_by(desc(Comment.createdAt), desc(Comment.id)).offset(offset).limit(limit).all()

    if not rows:
        raise NotFoundError("No comments found")

    counts = like_counts(db, LikeTargetType.comment, [comment.id for comment, _owner in rows])
    comments = []
    for comment, _owner in rows:
        item = CommentWithLikes.model_validate(comment)
        item.likesCount = counts.get(comment.id, 0)
        comments.append(item)
    return comments


def get_comment(db: Session, comment_id: str) -> CommentWithLikes:
    comment = get_or_404(db, Comment, comment_id, "Comment")
    item = CommentWithLikes.model_validate(comment)
    item.likesCount = count_likes(db, LikeTarget(LikeTargetType.comment, comment.id))
    return item


def add_comment(db: Session, video_id: str, user: User, content: str) -> CommentResponse:
    content = require_text(content, "Comment")
    get_or_404(db, Video, video_id, "Video")

    db_comment = Comment(
        videoId=video_id,
        ownerId=user.id,
        content=content
    )
    db.add(db_comment)
    db.commit()
    db.refresh(db_comment)

    return CommentResponse.model_validate(db_comment)


def update_comment(db: Session, comment_id: str, user: User, content: str) -> CommentResponse:
    content = require_text(content, "Comment")
    comment = get_or_404(db, Comment, comment_id, "Comment")
    ensure_owner(comment, user, "update", "comment")

    comment.content = content
    db.commit()
    db.refresh(comment)

    return CommentResponse.model_validate(comment)


def delete_comment(db: Session, comment_id: str, user: User) -> None:
    comment = get_or_404(db, Comment, comment_id, "Comment")
    ensure_owner(comment, user, "delete", "comment")

    db.query(Like).filter(
        Like.targetType == LikeTargetType.comment,
        Like.targetId == comment.id
    ).delete(synchronize_session=False)
    db.delete(comment)
    db.commit()
    logger.info("comment_deleted", comment_id=comment_id, owner_id=user.id)
