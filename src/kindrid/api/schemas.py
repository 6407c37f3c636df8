"""Request models for the photo API."""

from pydantic import BaseModel, Field


class UploadRequest(BaseModel):
    """Photo upload: base64 image bytes (or a data URL) plus metadata."""

    content_base64: str
    content_type: str | None = None
    title: str = ""
    description: str = ""
    location: str = ""
    teacher: str = ""
    children: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class ConsentDecisionRequest(BaseModel):
    """Batch consent decision for a photo."""

    granted: list[str] = Field(default_factory=list)
    denied: list[str] = Field(default_factory=list)
