import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vidtube.core.errors import ValidationError
from vidtube.models.subscription import Subscription
from vidtube.models.user import User
from vidtube.schemas.subscription import ChannelSubscribers, SubscribedChannels, SubscriptionToggleResult
from vidtube.schemas.user import UserSummary
from vidtube.services.queries import count_subscribers, get_or_404
from vidtube.utils.validators import validate_id

logger = structlog.get_logger(__name__)


def _matching(db: Session, subscriber_id: str, channel_id: str):
    return db.query(Subscription).filter(
        Subscription.subscriberId == subscriber_id,
        Subscription.channelId == channel_id
    )


def toggle_subscription(db: Session, channel_id: str, user: User) -> SubscriptionToggleResult:
    validate_id(channel_id, "channel")
    if channel_id == user.id:
        raise ValidationError("Cannot subscribe to your own channel")
    get_or_404(db, User, channel_id, "Channel")

    removed = _matching(db, user.id, channel_id).delete(synchronize_session=False)

    if removed:
        db.commit()
        subscribed = False
    else:
        db.add(Subscription(subscriberId=user.id, channelId=channel_id))
        try:
            db.commit()
        except IntegrityError:
            # Subscribed by a concurrent request
            db.rollback()
        subscribed = True

    logger.info("subscription_toggled", channel_id=channel_id, subscriber_id=user.id, subscribed=subscribed)
    return SubscriptionToggleResult(
        subscribed=subscribed,
        subscribersCount=count_subscribers(db, channel_id)
    )


def get_channel_subscribers(db: Session, channel_id: str) -> ChannelSubscribers:
    get_or_404(db, User, channel_id, "Channel")

    subscribers = db.query(User).join(Subscription, Subscription.subscriberId == User.id).filter(
        Subscription.channelId == channel_id
    ).order_by(Subscription.createdAt, Subscription.id).all()

    return ChannelSubscribers(
        subscribers=[UserSummary.model_validate(u) for u in subscribers],
        subscribersCount=len(subscribers)
    )


def get_subscribed_channels(db: Session, subscriber_id: str) -> SubscribedChannels:
    get_or_404(db, User, subscriber_id, "Subscriber")

    channels = db.query(User).join(Subscription, Subscription.channelId == User.id).filter(
        Subscription.subscriberId == subscriber_id
    ).order_by(Subscription.createdAt, Subscription.id).all()

    return SubscribedChannels(
        channels=[UserSummary.model_validate(u) for u in channels],
        channelsCount=len(channels)
    )
