from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from vidtube.api.deps import get_current_user
from vidtube.database import get_db
from vidtube.models.user import User
from vidtube.schemas.common import ApiResponse
from vidtube.services import subscription_service

router = APIRouter()


@router.post("/c/{channel_id}", response_model=ApiResponse)
def toggle_subscription(
    channel_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    result = subscription_service.toggle_subscription(db, channel_id, current_user)
    message = "Subscribed to channel" if result.subscribed else "Unsubscribed from channel"
    return ApiResponse(data=result, message=message)


@router.get("/c/{channel_id}", response_model=ApiResponse)
def get_channel_subscribers(channel_id: str, db: Session = Depends(get_db)):
    subscribers = subscription_service.get_channel_subscribers(db, channel_id)
    return ApiResponse(data=subscribers, message="Subscribers fetched successfully")


@router.get("/u/{subscriber_id}", response_model=ApiResponse)
def get_subscribed_channels(subscriber_id: str, db: Session = Depends(get_db)):
    channels = subscription_service.get_subscribed_channels(db, subscriber_id)
    return ApiResponse(data=channels, message="Subscribed channels fetched successfully")
