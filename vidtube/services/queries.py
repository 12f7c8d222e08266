"""
Query helpers shared by the services: lookups, ownership and derived counts
"""
from typing import Dict, Iterable, Optional, Type

from sqlalchemy import func
from sqlalchemy.orm import Session

from vidtube.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from vidtube.models.like import Like, LikeTarget, LikeTargetType
from vidtube.models.subscription import Subscription
from vidtube.models.user import User
from vidtube.utils.validators import validate_id


def get_or_404(db: Session, model: Type, entity_id: str, label: str):
    validate_id(entity_id, label.lower())
    entity = db.get(model, entity_id)
    if entity is None:
        raise NotFoundError(f"{label} not found")
    return entity


def ensure_owner(entity, user: User, action: str, label: str) -> None:
    if entity.ownerId != user.id:
        raise PermissionDeniedError(f"You do not have permission to {action} this {label}")


def page_bounds(page: int, limit: int):
    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be positive integers")
    return (page - 1) * limit, limit


def count_likes(db: Session, target: LikeTarget) -> int:
    return db.query(func.count(Like.id)).filter(
        Like.targetType == target.kind,
        Like.targetId == target.target_id
    ).scalar()


def has_liked(db: Session, target: LikeTarget, user_id: Optional[str]) -> bool:
    if user_id is None:
        return False
    return db.query(Like.id).filter(
        Like.targetType == target.kind,
        Like.targetId == target.target_id,
        Like.likedBy == user_id
    ).first() is not None


def like_counts(db: Session, kind: LikeTargetType, target_ids: Iterable[str]) -> Dict[str, int]:
    """Like count per target id; ids without likes are absent from the map."""
    target_ids = list(target_ids)
    if not target_ids:
        return {}
    rows = db.query(Like.targetId, func.count(Like.id)).filter(
        Like.targetType == kind,
        Like.targetId.in_(target_ids)
    ).group_by(Like.targetId).all()
    return {target_id: count for target_id, count in rows}


def count_subscribers(db: Session, channel_id: str) -> int:
    return db.query(func.count(Subscription.id)).filter(
        Subscription.channelId == channel_id
    ).scalar()


def is_subscribed(db: Session, channel_id: str, subscriber_id: Optional[str]) -> bool:
    if subscriber_id is None:
        return False
    return db.query(Subscription.id).filter(
        Subscription.channelId == channel_id,
        Subscription.subscriberId == subscriber_id
    ).first() is not None
