from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from vidtube.api.deps import get_current_user
from vidtube.database import get_db
from vidtube.models.user import User
from vidtube.schemas.common import ApiResponse
from vidtube.schemas.tweet import TweetCreate, TweetUpdate
from vidtube.services import tweet_service

router = APIRouter()


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
def create_tweet(
    tweet_data: TweetCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    tweet = tweet_service.create_tweet(db, current_user, tweet_data.content)
    return ApiResponse(
        statusCode=status.HTTP_201_CREATED,
        data=tweet,
        message="Tweet created successfully"
    )


@router.get("/user/{user_id}", response_model=ApiResponse)
def get_user_tweets(user_id: str, db: Session = Depends(get_db)):
    tweets = tweet_service.list_user_tweets(db, user_id)
    return ApiResponse(data=tweets, message="Tweets fetched successfully")


@router.get("/{tweet_id}", response_model=ApiResponse)
def get_tweet(tweet_id: str, db: Session = Depends(get_db)):
    tweet = tweet_service.get_tweet(db, tweet_id)
    return ApiResponse(data=tweet, message="Tweet fetched successfully")


@router.patch("/{tweet_id}", response_model=ApiResponse)
def update_tweet(
    tweet_id: str,
    tweet_update: TweetUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    tweet = tweet_service.update_tweet(db, tweet_id, current_user, tweet_update.content)
    return ApiResponse(data=tweet, message="Tweet updated successfully")


@router.delete("/{tweet_id}", response_model=ApiResponse)
def delete_tweet(
    tweet_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    tweet_service.delete_tweet(db, tweet_id, current_user)
    return ApiResponse(data={}, message="Tweet deleted successfully")
