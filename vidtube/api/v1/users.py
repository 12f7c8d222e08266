from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from vidtube.api.deps import get_current_user
from vidtube.database import get_db
from vidtube.models.user import User
from vidtube.schemas.common import ApiResponse
from vidtube.schemas.user import UserResponse
from vidtube.services import user_service

router = APIRouter()


@router.get("/me", response_model=ApiResponse)
def get_current_user_profile(current_user: User = Depends(get_current_user)):
    return ApiResponse(data=UserResponse.model_validate(current_user), message="User fetched successfully")


@router.get("/me/history", response_model=ApiResponse)
def get_watch_history(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    history = user_service.get_watch_history(db, current_user)
    return ApiResponse(data=history, message="Watch history fetched successfully")
