from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from vidtube.api.deps import get_current_user
from vidtube.database import get_db
from vidtube.models.like import LikeTarget, LikeTargetType
from vidtube.models.user import User
from vidtube.schemas.common import ApiResponse
from vidtube.services import like_service

router = APIRouter()


def _toggle(db: Session, kind: LikeTargetType, target_id: str, user: User) -> ApiResponse:
    result = like_service.toggle_like(db, LikeTarget(kind, target_id), user)
    label = kind.value.capitalize()
    message = f"{label} liked" if result.liked else f"{label} unliked"
    return ApiResponse(data=result, message=message)


@router.post("/toggle/v/{video_id}", response_model=ApiResponse)
def toggle_video_like(
    video_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return _toggle(db, LikeTargetType.video, video_id, current_user)


@router.post("/toggle/c/{comment_id}", response_model=ApiResponse)
def toggle_comment_like(
    comment_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return _toggle(db, LikeTargetType.comment, comment_id, current_user)


@router.post("/toggle/t/{tweet_id}", response_model=ApiResponse)
def toggle_tweet_like(
    tweet_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return _toggle(db, LikeTargetType.tweet, tweet_id, current_user)


@router.get("/videos", response_model=ApiResponse)
def get_liked_videos(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    liked = like_service.get_liked_videos(db, current_user)
    return ApiResponse(data=liked, message="Liked videos fetched successfully")


@router.get("/likedByUsers/{video_id}", response_model=ApiResponse)
def get_users_who_liked_video(video_id: str, db: Session = Depends(get_db)):
    likers = like_service.get_users_who_liked_video(db, video_id)
    return ApiResponse(data=likers, message="Users who liked the video fetched successfully")
