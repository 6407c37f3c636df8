"""Domain errors raised by the photo workflow."""


class KindridError(Exception):
    """Base class for workflow errors surfaced to callers."""


class ValidationError(KindridError):
    """Raised when upload metadata or consent decisions are malformed."""


class NotFoundError(KindridError):
    """Raised when a photo id is unknown."""

    def __init__(self, photo_id: str) -> None:
        super().__init__(f"Photo not found: {photo_id}")
        self.photo_id = photo_id


class InvalidStateError(KindridError):
    """Raised when an operation is not allowed from the photo's status."""


class PermissionDeniedError(KindridError):
    """Raised when the current viewer may not perform an operation."""
