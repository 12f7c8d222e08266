from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from vidtube.core.config import Settings
from vidtube.core.errors import ExternalServiceError
from vidtube.core.security import create_access_token
from vidtube.main import create_app
from vidtube.models import Comment, Like, LikeTargetType, Tweet, User, Video
from vidtube.services.media_store import VIDEO, StoredMedia

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


class InMemoryMediaStore:
    """Media store double that keeps blobs in a dict."""

    def __init__(self) -> None:
        self.blobs: Dict[str, bytes] = {}
        self.failing_kinds = set()
        self.failing_deletes = set()
        self.closed = False

    def upload(self, content: bytes, filename: str, kind: str) -> StoredMedia:
        if kind in self.failing_kinds:
            raise ExternalServiceError(f"upload of {kind} failed")
        public_id = f"{kind}s/{uuid.uuid4().hex}"
        self.blobs[public_id] = content
        return StoredMedia(
            url=f"https://media.test/{public_id}",
            public_id=public_id,
            duration=12.5 if kind == VIDEO else None,
        )

    def delete(self, public_id: str) -> None:
        if public_id in self.failing_deletes or public_id not in self.blobs:
            raise ExternalServiceError(f"delete of {public_id} failed")
        del self.blobs[public_id]

    def close(self) -> None:
        self.closed = True

    def put(self, public_id: str) -> str:
        self.blobs[public_id] = b"seed"
        return public_id


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'vidtube.db'}",
        STATIC_DIR=str(tmp_path / "static"),
        SECRET_KEY="test-secret",
        LOG_LEVEL="WARNING",
        VIDEO_LIST_FILTER_BY_USER=True,
    )


@pytest.fixture
def media_store() -> InMemoryMediaStore:
    return InMemoryMediaStore()


@pytest.fixture
def app(settings: Settings, media_store: InMemoryMediaStore):
    return create_app(settings, media_store=media_store)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db) -> Callable[..., User]:
    def _make(username: str) -> User:
        user = User(
            email=f"{username}@example.com",
            username=username,
            fullName=username.title(),
            avatar=f"https://media.test/avatars/{username}.png",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_video(db, media_store: InMemoryMediaStore) -> Callable[..., Video]:
    counter = {"n": 0}

    def _make(owner: User, title: str = "A video", description: str = "Some description",
              created_at: Optional[datetime] = None, views: int = 0) -> Video:
        counter["n"] += 1
        n = counter["n"]
        video = Video(
            ownerId=owner.id,
            title=title,
            description=description,
            videoFile=f"https://media.test/videos/v{n}.mp4",
            videoFilePublicId=media_store.put(f"videos/v{n}"),
            thumbnail=f"https://media.test/images/t{n}.png",
            thumbnailPublicId=media_store.put(f"images/t{n}"),
            duration=30.0,
            views=views,
            createdAt=created_at or BASE_TIME + timedelta(minutes=n),
        )
        db.add(video)
        db.commit()
        db.refresh(video)
        return video

    return _make


@pytest.fixture
def make_comment(db) -> Callable[..., Comment]:
    counter = {"n": 0}

    def _make(video: Video, owner: User, content: str = "Nice video") -> Comment:
        counter["n"] += 1
        comment = Comment(
            videoId=video.id,
            ownerId=owner.id,
            content=content,
            createdAt=BASE_TIME + timedelta(minutes=counter["n"]),
        )
        db.add(comment)
        db.commit()
        db.refresh(comment)
        return comment

    return _make


@pytest.fixture
def make_tweet(db) -> Callable[..., Tweet]:
    counter = {"n": 0}

    def _make(owner: User, content: str = "hello") -> Tweet:
        counter["n"] += 1
        tweet = Tweet(
            ownerId=owner.id,
            content=content,
            createdAt=BASE_TIME + timedelta(minutes=counter["n"]),
        )
        db.add(tweet)
        db.commit()
        db.refresh(tweet)
        return tweet

    return _make


@pytest.fixture
def add_like(db) -> Callable[..., Like]:
    def _add(kind: LikeTargetType, target_id: str, user: User) -> Like:
        like = Like(targetType=kind, targetId=target_id, likedBy=user.id)
        db.add(like)
        db.commit()
        return like

    return _add


@pytest.fixture
def auth(settings: Settings) -> Callable[[User], Dict[str, str]]:
    def _headers(user: User) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id, settings)}"}

    return _headers
