from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from vidtube.core.config import Settings
from vidtube.core.errors import AuthenticationError


def create_access_token(user_id: str, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    return jwt.encode({"sub": user_id, "exp": expire}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> str:
    """Return the user id carried by a bearer token."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid access token")
    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid access token")
    return user_id
