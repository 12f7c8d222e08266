from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from vidtube.api.deps import Pagination, get_current_user
from vidtube.database import get_db
from vidtube.models.user import User
from vidtube.schemas.comment import CommentCreate, CommentUpdate
from vidtube.schemas.common import ApiResponse
from vidtube.services import comment_service

router = APIRouter()


@router.get("/{video_id}", response_model=ApiResponse)
def get_video_comments(
    video_id: str,
    pagination: Pagination = Depends(),
    db: Session = Depends(get_db)
):
    comments = comment_service.list_video_comments(db, video_id, pagination.page, pagination.limit)
    return ApiResponse(data=comments, message="Comments fetched successfully")


@router.post("/{video_id}", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    video_id: str,
    comment_data: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    comment = comment_service.add_comment(db, video_id, current_user, comment_data.content)
    return ApiResponse(
        statusCode=status.HTTP_201_CREATED,
        data=comment,
        message="Comment added successfully"
    )


@router.get("/c/{comment_id}", response_model=ApiResponse)
def get_comment(comment_id: str, db: Session = Depends(get_db)):
    comment = comment_service.get_comment(db, comment_id)
    return ApiResponse(data=comment, message="Comment fetched successfully")


@router.patch("/c/{comment_id}", response_model=ApiResponse)
def update_comment(
    comment_id: str,
    comment_update: CommentUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    comment = comment_service.update_comment(db, comment_id, current_user, comment_update.content)
    return ApiResponse(data=comment, message="Comment updated successfully")


@router.delete("/c/{comment_id}", response_model=ApiResponse)
def delete_comment(
    comment_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    comment_service.delete_comment(db, comment_id, current_user)
    return ApiResponse(data={}, message="Comment deleted successfully")
