"""Photo store mirrored to a durable key-value slot."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from uuid import uuid4

from kindrid.domain.errors import NotFoundError, ValidationError
from kindrid.domain.photos import Photo
from kindrid.services.images import ImageRegistry, is_transient
from kindrid.services.slots import KeyValueSlot

PHOTOS_KEY = "kindrid-photos"
ESSENTIAL_KEY = "kindrid-photos-essential"

_ESSENTIAL_FIELDS = {
    "id",
    "url",
    "title",
    "description",
    "children",
    "status",
    "consent_given",
    "consent_pending",
    "date",
    "location",
    "teacher",
    "created_at",
}
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

_logger = logging.getLogger(__name__)


@dataclass
class PhotoStore:
    """Authoritative photo list for the process, newest first."""

    slot: KeyValueSlot
    images: ImageRegistry
    _photos: list[Photo] = field(default_factory=list)

    def load(self, seed: list[Photo] | None = None) -> int:
        """Read the slot once at startup and return the number of photos."""
        photos = self._read(PHOTOS_KEY)
        if photos is None:
            photos = self._read(ESSENTIAL_KEY)
        if photos is None:
            photos = list(seed or [])
            _logger.info("Photo store seeded with %s photos", len(photos))
        else:
            _logger.info("Photo store loaded %s photos", len(photos))
        self._photos = photos
        return len(self._photos)

    def list(self) -> list[Photo]:
        """Return all photos, most recently added first."""
        return list(self._photos)

    def get(self, photo_id: str) -> Photo:
        """Return a photo by id."""
        return self._photos[self._index(photo_id)]

    def contains(self, photo_id: str) -> bool:
        """Return True if a photo with the id exists."""
        return any(photo.id == photo_id for photo in self._photos)

    def insert(self, photo: Photo) -> Photo:
        """Prepend a photo, assigning an id if it has none."""
        stored = photo if photo.id else photo.model_copy(update={"id": new_photo_id()})
        if self.contains(stored.id):
            raise ValidationError(f"Photo already exists: {stored.id}")
        self._photos.insert(0, stored)
        self._persist()
        return stored

    def update(self, photo_id: str, patch: dict[str, object]) -> Photo:
        """Shallow-merge fields into a photo and return the result."""
        index = self._index(photo_id)
        unknown = set(patch) - set(Photo.model_fields)
        if unknown:
            raise ValidationError(f"Unknown photo fields: {sorted(unknown)}")
        changes = {key: value for key, value in patch.items() if key != "id"}
        updated = self._photos[index].model_copy(update=changes)
        self._photos[index] = updated
        self._persist()
        return updated

    def remove(self, photo_id: str) -> Photo:
        """Delete a photo and release its transient image handle."""
        index = self._index(photo_id)
        removed = self._photos.pop(index)
        if is_transient(removed.url):
            self.images.release(removed.url)
        self._persist()
        return removed

    def _index(self, photo_id: str) -> int:
        for index, photo in enumerate(self._photos):
            if photo.id == photo_id:
                return index
        raise NotFoundError(photo_id)

    def _read(self, key: str) -> list[Photo] | None:
        try:
            raw = self.slot.read(key)
            if raw is None:
                return None
            data = json.loads(raw)
            if not isinstance(data, list):
                _logger.warning("Ignoring slot %s: expected a JSON list", key)
                return None
            return [Photo.model_validate(item) for item in data]
        except (OSError, ValueError):
            _logger.exception("Failed to load photos from slot %s", key)
            return None

    def _persist(self) -> None:
        """Mirror the full list to the slot, falling back to essentials."""
        try:
            payload = [photo.model_dump(mode="json") for photo in self._photos]
            self.slot.write(PHOTOS_KEY, json.dumps(payload))
        except OSError:
            _logger.exception("Failed to save photos to slot %s", PHOTOS_KEY)
        else:
            return
        try:
            essential = [
                photo.model_dump(mode="json", include=_ESSENTIAL_FIELDS)
                for photo in self._photos
            ]
            self.slot.write(ESSENTIAL_KEY, json.dumps(essential))
            _logger.info("Saved essential photo metadata as fallback")
        except OSError:
            _logger.exception("Failed to save even essential photo metadata")


def new_photo_id() -> str:
    """Return an id of the form `<epoch millis>-<9 base36 chars>`."""
    value = uuid4().int
    suffix = ""
    for _ in range(9):
        value, remainder = divmod(value, 36)
        suffix += _BASE36[remainder]
    return f"{int(time.time() * 1000)}-{suffix}"
