from typing import List

import structlog
from sqlalchemy import asc
from sqlalchemy.orm import Session

from vidtube.core.errors import NotFoundError
from vidtube.models.like import Like, LikeTarget, LikeTargetType
from vidtube.models.tweet import Tweet
from vidtube.models.user import User
from vidtube.schemas.tweet import TweetResponse, TweetWithLikes
from vidtube.services.queries import count_likes, ensure_owner, get_or_404, like_counts
from vidtube.utils.validators import require_text, validate_id

logger = structlog.get_logger(__name__)


def create_tweet(db: Session, user: User, content: str) -> TweetResponse:
    content = require_text(content, "Tweet")

    db_tweet = Tweet(ownerId=user.id, content=content)
    db.add(db_tweet)
    db.commit()
    db.refresh(db_tweet)

    return TweetResponse.model_validate(db_tweet)


def list_user_tweets(db: Session, user_id: str) -> List[TweetWithLikes]:
    validate_id(user_id, "user")

    rows = db.query(Tweet, User).join(User, Tweet.ownerId == User.id).filter(
        Tweet.ownerId == user_id
    ).order_by(asc(Tweet.createdAt), asc(Tweet.id)).all()

    if not rows:
        raise NotFoundError("No tweets found")

    counts = like_counts(db, LikeTargetType.tweet, [tweet.id for tweet, _owner in rows])
    tweets = []
    for tweet, _owner in rows:
        item = TweetWithLikes.model_validate(tweet)
        item.likesCount = counts.get(tweet.id, 0)
        tweets.append(item)
    return tweets


def get_tweet(db: Session, tweet_id: str) -> TweetWithLikes:
    tweet = get_or_404(db, Tweet, tweet_id, "Tweet")
    item = TweetWithLikes.model_validate(tweet)
    item.likesCount = count_likes(db, LikeTarget(LikeTargetType.tweet, tweet.id))
    return item


def update_tweet(db: Session, tweet_id: str, user: User, content: str) -> TweetResponse:
    content = require_text(content, "Tweet")
    tweet = get_or_404(db, Tweet, tweet_id, "Tweet")
    ensure_owner(tweet, user, "update", "tweet")

    tweet.content = content
    db.commit()
    db.refresh(tweet)

    return TweetResponse.model_validate(tweet)


def delete_tweet(db: Session, tweet_id: str, user: User) -> None:
    tweet = get_or_404(db, Tweet, tweet_id, "Tweet")
    ensure_owner(tweet, user, "delete", "tweet")

    db.query(Like).filter(
        Like.targetType == LikeTargetType.tweet,
        Like.targetId == tweet.id
    ).delete(synchronize_session=False)
    db.delete(tweet)
    db.commit()
    logger.info("tweet_deleted", tweet_id=tweet_id, owner_id=user.id)
