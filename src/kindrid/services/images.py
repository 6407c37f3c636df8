"""Transient image handles for uploaded bytes."""

from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

BLOB_PREFIX = "blob:"


@dataclass(frozen=True)
class ImageBlob:
    """Uploaded image bytes and their MIME type."""

    content: bytes
    content_type: str


class ImageRegistry(Protocol):
    """Interface for issuing and releasing transient image references."""

    def register(self, content: bytes, content_type: str) -> str:
        """Store bytes and return a `blob:` reference to them."""

    def get(self, url: str) -> ImageBlob | None:
        """Return the bytes behind a reference, if still held."""

    def release(self, url: str) -> None:
        """Drop the bytes behind a reference."""


@dataclass
class InMemoryImageRegistry(ImageRegistry):
    """Holds uploaded images in memory for the current process."""

    _blobs: dict[str, ImageBlob]

    def __init__(self) -> None:
        self._blobs = {}

    def register(self, content: bytes, content_type: str) -> str:
        """Store bytes under a fresh handle."""
        url = f"{BLOB_PREFIX}{uuid4().hex}"
        self._blobs[url] = ImageBlob(content=content, content_type=content_type)
        return url

    def get(self, url: str) -> ImageBlob | None:
        """Return the blob for a handle."""
        return self._blobs.get(url)

    def release(self, url: str) -> None:
        """Forget a handle; unknown handles are ignored."""
        self._blobs.pop(url, None)


def is_transient(url: str | None) -> bool:
    """Return True if a reference points at a transient handle."""
    return bool(url) and url.startswith(BLOB_PREFIX)


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
