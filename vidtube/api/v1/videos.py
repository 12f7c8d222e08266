from typing import Optional
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
from vidtube.api.deps import (
    Pagination, get_app_settings, get_current_user, get_media_store, get_optional_user
)
from vidtube.core.config import Settings
from vidtube.database import get_db
from vidtube.models.user import User
from vidtube.schemas.common import ApiResponse
from vidtube.services import video_service
from vidtube.services.media_store import MediaStore
from vidtube.services.video_service import MediaUpload

router = APIRouter()


def _read_upload(file: Optional[UploadFile]) -> Optional[MediaUpload]:
    if file is None or not file.filename:
        return None
    return MediaUpload(filename=file.filename, content=file.file.read())


@router.get("", response_model=ApiResponse)
def list_videos(
    pagination: Pagination = Depends(),
    query: Optional[str] = None,
    sortBy: str = "createdAt",
    sortType: str = Query("desc", pattern="^(asc|desc)$"),
    userId: Optional[str] = None,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    videos = video_service.list_videos(
        db,
        page=pagination.page,
        limit=pagination.limit,
        query=query,
        sort_by=sortBy,
        sort_type=sortType,
        user_id=userId,
        filter_by_user=settings.VIDEO_LIST_FILTER_BY_USER,
    )
    return ApiResponse(data=videos, message="Videos fetched successfully")


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
def publish_video(
    title: str = Form(...),
    description: str = Form(...),
    videoFile: UploadFile = File(...),
    thumbnail: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    store: MediaStore = Depends(get_media_store),
    settings: Settings = Depends(get_app_settings)
):
    video = video_service.publish_video(
        db,
        store,
        settings,
        current_user,
        title=title,
        description=description,
        video_file=_read_upload(videoFile),
        thumbnail=_read_upload(thumbnail),
    )
    return ApiResponse(
        statusCode=status.HTTP_201_CREATED,
        data=video,
        message="Video successfully uploaded"
    )


@router.get("/{video_id}", response_model=ApiResponse)
def get_video(
    video_id: str,
    viewer: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    video = video_service.get_video_detail(db, video_id, viewer)
    return ApiResponse(data={"video": video}, message="Video fetched successfully")


@router.patch("/{video_id}", response_model=ApiResponse)
def update_video(
    video_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    store: MediaStore = Depends(get_media_store),
    settings: Settings = Depends(get_app_settings)
):
    result = video_service.update_video(
        db,
        store,
        settings,
        video_id,
        current_user,
        title=title,
        description=description,
        thumbnail=_read_upload(thumbnail),
    )
    return ApiResponse(data=result, message="Video has been successfully updated")


@router.delete("/{video_id}", response_model=ApiResponse)
def delete_video(
    video_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    store: MediaStore = Depends(get_media_store)
):
    result = video_service.delete_video(db, store, video_id, current_user)
    return ApiResponse(data=result, message="Video successfully deleted")
