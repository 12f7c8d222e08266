from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from vidtube.core.config import Settings
from vidtube.core.errors import ExternalServiceError
from vidtube.services.media_store import (
    IMAGE, VIDEO, HttpMediaStore, LocalMediaStore, build_media_store
)


def test_local_store_writes_and_deletes(tmp_path: Path) -> None:
    store = LocalMediaStore(str(tmp_path))

    stored = store.upload(b"\x89PNG", "Cover.PNG", IMAGE)
    assert stored.public_id.startswith("images/")
    assert stored.public_id.endswith(".png")
    assert stored.url == f"/static/{stored.public_id}"
    assert stored.duration is None
    assert (tmp_path / stored.public_id).read_bytes() == b"\x89PNG"

    store.delete(stored.public_id)
    assert not (tmp_path / stored.public_id).exists()

    with pytest.raises(ExternalServiceError):
        store.delete(stored.public_id)


def test_local_store_unreadable_video_has_zero_duration(tmp_path: Path) -> None:
    store = LocalMediaStore(str(tmp_path))

    stored = store.upload(b"not really a video", "clip.mp4", VIDEO)
    assert stored.public_id.startswith("videos/")
    assert stored.duration == 0.0


def _http_store(handler) -> HttpMediaStore:
    return HttpMediaStore("https://media.example", token="secret", timeout=1.0, transport=httpx.MockTransport(handler))


def test_http_store_upload_and_delete() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path, request.headers.get("Authorization")))
        if request.method == "POST":
            return httpx.Response(200, json={"url": "https://cdn.example/v/1.mp4", "public_id": "v/1", "duration": 4.2})
        return httpx.Response(204)

    store = _http_store(handler)
    stored = store.upload(b"data", "clip.mp4", VIDEO)
    assert stored.url == "https://cdn.example/v/1.mp4"
    assert stored.public_id == "v/1"
    assert stored.duration == 4.2

    store.delete("v/1")
    assert seen == [
        ("POST", "/upload", "Bearer secret"),
        ("DELETE", "/resources/v/1", "Bearer secret"),
    ]


def test_http_store_failures_become_external_service_errors() -> None:
    def timeout_handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(ExternalServiceError, match="timed out"):
        _http_store(timeout_handler).upload(b"data", "clip.mp4", VIDEO)

    store = _http_store(lambda request: httpx.Response(500))
    with pytest.raises(ExternalServiceError):
        store.delete("v/1")

    store = _http_store(lambda request: httpx.Response(200, json={}))
    with pytest.raises(ExternalServiceError):
        store.upload(b"data", "thumb.png", IMAGE)


def test_build_media_store(tmp_path: Path) -> None:
    assert isinstance(build_media_store(Settings(STATIC_DIR=str(tmp_path))), LocalMediaStore)

    store = build_media_store(Settings(MEDIA_BACKEND="http", MEDIA_SERVICE_URL="https://media.example"))
    assert isinstance(store, HttpMediaStore)

    with pytest.raises(ValueError):
        build_media_store(Settings(MEDIA_BACKEND="http", MEDIA_SERVICE_URL=None))
    with pytest.raises(ValueError):
        build_media_store(Settings(MEDIA_BACKEND="ftp"))


def test_http_store_unreadable_upload_reply_is_external_service_error() -> None:
    store = _http_store(lambda request: httpx.Response(200, text="ok"))
    with pytest.raises(ExternalServiceError, match="unreadable"):
        store.upload(b"data", "clip.mp4", VIDEO)

    store = _http_store(lambda request: httpx.Response(200, json=["not", "an", "object"]))
    with pytest.raises(ExternalServiceError, match="unreadable"):
        store.upload(b"data", "thumb.png", IMAGE)
