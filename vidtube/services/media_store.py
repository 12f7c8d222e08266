"""
Storage backends for uploaded media (video files and thumbnails)

Handlers only see the MediaStore protocol; the concrete store is built once
per app from settings and kept on app.state.
"""
import os
import uuid
from dataclasses import dataclass
from typing import Optional, Protocol

import httpx
import structlog

from vidtube.core.config import Settings
from vidtube.core.errors import ExternalServiceError
from vidtube.utils.video_processing import extract_video_info

logger = structlog.get_logger(__name__)

VIDEO = "video"
IMAGE = "image"


@dataclass
class StoredMedia:
    url: str
    public_id: str
    duration: Optional[float] = None


class MediaStore(Protocol):
    def upload(self, content: bytes, filename: str, kind: str) -> StoredMedia:
        ...

    def delete(self, public_id: str) -> None:
        ...

    def close(self) -> None:
        ...


class LocalMediaStore:
    """Writes media under the static directory served at /static."""

    def __init__(self, root: str, url_prefix: str = "/static"):
        self.root = root
        self.url_prefix = url_prefix.rstrip("/")

    def upload(self, content: bytes, filename: str, kind: str) -> StoredMedia:
        folder = f"{kind}s"
        file_ext = os.path.splitext(filename)[1].lower()
        public_id = f"{folder}/{uuid.uuid4().hex}{file_ext}"
        path = os.path.join(self.root, public_id)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "wb") as buffer:
                buffer.write(content)
        except OSError as e:
            raise ExternalServiceError(f"Failed to store {kind}: {e}")

        duration = None
        if kind == VIDEO:
            duration, _, _ = extract_video_info(path)
        logger.info("media_stored", public_id=public_id, size=len(content))
        return StoredMedia(url=f"{self.url_prefix}/{public_id}", public_id=public_id, duration=duration)

    def delete(self, public_id: str) -> None:
        path = os.path.join(self.root, public_id)
        try:
            os.remove(path)
        except OSError as e:
            raise ExternalServiceError(f"Failed to delete {public_id}: {e}")
        logger.info("media_deleted", public_id=public_id)

    def close(self) -> None:
        pass


class HttpMediaStore:
    """
    Client for a remote media service.

    POST {base}/upload   multipart "file" + form "resource_type"
                         -> {"url", "public_id", "duration"?}
    DELETE {base}/resources/{public_id}
    """

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: float = 30.0,
                 transport: Optional[httpx.BaseTransport] = None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self.client = httpx.Client(base_url=base_url, headers=headers, timeout=timeout, transport=transport)

    def upload(self, content: bytes, filename: str, kind: str) -> StoredMedia:
        try:
            res = self.client.post(
                "/upload",
                files={"file": (filename, content)},
                data={"resource_type": kind},
            )
            res.raise_for_status()
            body = res.json()
            url, public_id = body["url"], body["public_id"]
            duration = body.get("duration")
        except httpx.TimeoutException:
            raise ExternalServiceError(f"Media service timed out uploading {kind}")
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Media service failed uploading {kind}: {e}")
        except (ValueError, KeyError, TypeError):
            raise ExternalServiceError(f"Media service returned an unreadable response for {kind}")

        if not url or not public_id:
            raise ExternalServiceError(f"Media service returned no url for {kind}")
        return StoredMedia(url=url, public_id=public_id, duration=duration)

    def delete(self, public_id: str) -> None:
        try:
            res = self.client.delete(f"/resources/{public_id}")
            res.raise_for_status()
        except httpx.TimeoutException:
            raise ExternalServiceError(f"Media service timed out deleting {public_id}")
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Media service failed deleting {public_id}: {e}")

    def close(self) -> None:
        self.client.close()


def build_media_store(settings: Settings) -> MediaStore:
    if settings.MEDIA_BACKEND == "http":
        if not settings.MEDIA_SERVICE_URL:
            raise ValueError("MEDIA_SERVICE_URL is required when MEDIA_BACKEND is 'http'")
        return HttpMediaStore(
            settings.MEDIA_SERVICE_URL,
            token=settings.MEDIA_SERVICE_TOKEN,
            timeout=settings.MEDIA_TIMEOUT_SECONDS,
        )
    if settings.MEDIA_BACKEND == "local":
        return LocalMediaStore(settings.STATIC_DIR)
    raise ValueError(f"Unknown MEDIA_BACKEND: {settings.MEDIA_BACKEND}")
