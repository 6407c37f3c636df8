"""Photo records and their workflow status."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from kindrid.domain.analysis import AnnotationBundle, RemovalResult


class PhotoStatus(str, Enum):
    """Workflow states a photo moves through."""

    PENDING_CONSENT = "pending_consent"
    AI_PROCESSING = "ai_processing"
    APPROVED = "approved"
    PUBLISHED = "published"
    AI_FAILED = "ai_failed"


class MaskedSubject(BaseModel):
    """A subject covered by the privacy mask."""

    name: str
    subject_id: str | None = None
    bbox: tuple[float, float, float, float] | None = None
    method: str


class MaskingInfo(BaseModel):
    """Describes how the masked variant of a photo was derived."""

    subjects: list[MaskedSubject]
    applied_at: datetime


class EditedVersion(BaseModel):
    """One person-removal edit applied to a photo."""

    subject_id: str
    subject_name: str
    image_url: str
    result: RemovalResult
    timestamp: datetime


class PhotoMetadata(BaseModel):
    """Teacher-supplied metadata for an upload or edit."""

    title: str = ""
    description: str = ""
    location: str = ""
    teacher: str = ""
    children: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class Photo(BaseModel):
    """An uploaded photo and its consent state."""

    id: str = ""
    url: str
    title: str = ""
    description: str = ""
    location: str = ""
    teacher: str = ""
    children: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    status: PhotoStatus = PhotoStatus.PENDING_CONSENT
    consent_given: list[str] = Field(default_factory=list)
    consent_pending: list[str] = Field(default_factory=list)
    ai_processed: bool = False
    ai_features: AnnotationBundle | None = None
    masked_url: str | None = None
    edited_image_url: str | None = None
    masking_info: MaskingInfo | None = None
    edited_versions: list[EditedVersion] = Field(default_factory=list)
    date: str = ""
    created_at: datetime | None = None
    published_at: datetime | None = None


def unique_names(names: list[str]) -> list[str]:
    """Strip names, drop blanks and duplicates, keep first-seen order."""
    seen: list[str] = []
    for name in names:
        cleaned = name.strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


class MetadataPatch(BaseModel):
    """Partial metadata edit; unset fields are left alone."""

    title: str | None = None
    description: str | None = None
    location: str | None = None
    teacher: str | None = None
    children: list[str] | None = None
    tags: list[str] | None = None
