from typing import Optional

from fastapi import Depends, Query, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from vidtube.core.config import Settings
from vidtube.core.errors import AuthenticationError
from vidtube.core.security import decode_access_token
from vidtube.database import get_db
from vidtube.models.user import User
from vidtube.services.media_store import MediaStore

# Tokens are issued by the account service; only verification happens here
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_media_store(request: Request) -> MediaStore:
    return request.app.state.media_store


def get_optional_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> Optional[User]:
    if not token:
        return None
    user_id = decode_access_token(token, settings)
    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return user


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise AuthenticationError("Not authenticated")
    return user


class Pagination:
    def __init__(
        self,
        page: int = Query(1, ge=1, description="1-based page number"),
        limit: int = Query(10, ge=1, description="Items per page")
    ):
        self.page = page
        self.limit = limit
