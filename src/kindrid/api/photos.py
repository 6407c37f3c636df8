"""Photo workflow API endpoints."""

from __future__ import annotations

import base64
import binascii
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Query, Request, Response, status

from kindrid.api.schemas import ConsentDecisionRequest, UploadRequest
from kindrid.config import parse_names
from kindrid.domain.access import UserRole, Viewer
from kindrid.domain.errors import NotFoundError, PermissionDeniedError, ValidationError
from kindrid.domain.photos import MetadataPatch, Photo, PhotoMetadata, PhotoStatus
from kindrid.services.access import can_manage_consent, photos_for_viewer
from kindrid.services.images import BLOB_PREFIX
from kindrid.services.masking import display_url

if TYPE_CHECKING:
    from kindrid.containers import AppContainer

router = APIRouter(prefix="/api", tags=["photos"])


async def current_viewer(
    x_kindrid_role: str | None = Header(default=None),
    x_kindrid_children: str | None = Header(default=None),
) -> Viewer:
    """Build the acting viewer from request headers, defaulting to teacher."""
    if not x_kindrid_role:
        return Viewer()
    try:
        role = UserRole(x_kindrid_role.strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown role: {x_kindrid_role}") from None
    return Viewer(role=role, children=frozenset(parse_names(x_kindrid_children)))


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _dump(photo: Photo) -> dict[str, object]:
    return photo.model_dump(mode="json")


@router.get("/photos")
async def list_photos(
    request: Request,
    status_filter: PhotoStatus | None = Query(default=None, alias="status"),
    child: str | None = None,
    q: str | None = None,
    viewer: Viewer = Depends(current_viewer),
) -> dict[str, object]:
    """Return the photos visible to the viewer, newest first."""
    container = _container(request)
    stats = container.stats_service
    if q:
        photos = stats.search(q)
    elif child:
        photos = stats.by_child(child)
    elif status_filter:
        photos = stats.by_status(status_filter)
    else:
        photos = container.store.list()
    return {"photos": [_dump(photo) for photo in photos_for_viewer(viewer, photos)]}


@router.post("/photos", status_code=status.HTTP_201_CREATED)
async def upload_photo(
    payload: UploadRequest,
    request: Request,
    viewer: Viewer = Depends(current_viewer),
) -> dict[str, object]:
    """Upload a photo; it waits for analysis and consent."""
    content, content_type = _decode_content(payload.content_base64)
    metadata = PhotoMetadata(
        title=payload.title,
        description=payload.description,
        location=payload.location,
        teacher=payload.teacher,
        children=payload.children,
        tags=payload.tags,
    )
    photo = _container(request).workflow.upload(
        content,
        metadata,
        payload.content_type or content_type,
        viewer=viewer,
    )
    return _dump(photo)


@router.get("/photos/{photo_id}")
async def get_photo(
    photo_id: str, request: Request, viewer: Viewer = Depends(current_viewer)
) -> dict[str, object]:
    """Return a single photo."""
    return _dump(_visible_photo(request, photo_id, viewer))


@router.patch("/photos/{photo_id}")
async def update_photo(
    photo_id: str,
    patch: MetadataPatch,
    request: Request,
    viewer: Viewer = Depends(current_viewer),
) -> dict[str, object]:
    """Edit photo metadata."""
    workflow = _container(request).workflow
    return _dump(workflow.update_metadata(photo_id, patch, viewer=viewer))


@router.delete("/photos/{photo_id}")
async def delete_photo(
    photo_id: str, request: Request, viewer: Viewer = Depends(current_viewer)
) -> dict[str, str]:
    """Delete a photo in any status."""
    _container(request).workflow.remove(photo_id, viewer=viewer)
    return {"status": "ok", "id": photo_id}


@router.post("/photos/{photo_id}/analyze")
async def analyze_photo(
    photo_id: str, request: Request, viewer: Viewer = Depends(current_viewer)
) -> dict[str, object]:
    """Run simulated AI analysis for a photo."""
    photo = await _container(request).workflow.analyze(photo_id, viewer=viewer)
    if photo is None:
        raise NotFoundError(photo_id)
    return _dump(photo)


@router.post("/photos/{photo_id}/consent")
async def submit_consent(
    photo_id: str,
    decision: ConsentDecisionRequest,
    request: Request,
    viewer: Viewer = Depends(current_viewer),
) -> dict[str, object]:
    """Apply granted and denied names and approve the photo."""
    photo = _container(request).workflow.submit_consent_decisions(
        photo_id, decision.granted, decision.denied, viewer=viewer
    )
    return _dump(photo)


@router.post("/photos/{photo_id}/consent/{subject_name}/grant")
async def grant_consent(
    photo_id: str,
    subject_name: str,
    request: Request,
    viewer: Viewer = Depends(current_viewer),
) -> dict[str, object]:
    """Grant consent for one child."""
    workflow = _container(request).workflow
    return _dump(workflow.grant_consent(photo_id, subject_name, viewer=viewer))


@router.post("/photos/{photo_id}/consent/{subject_name}/revoke")
async def revoke_consent(
    photo_id: str,
    subject_name: str,
    request: Request,
    viewer: Viewer = Depends(current_viewer),
) -> dict[str, object]:
    """Revoke consent for one child."""
    workflow = _container(request).workflow
    return _dump(workflow.revoke_consent(photo_id, subject_name, viewer=viewer))


@router.post("/photos/{photo_id}/publish")
async def publish_photo(
    photo_id: str, request: Request, viewer: Viewer = Depends(current_viewer)
) -> dict[str, object]:
    """Publish an approved photo."""
    return _dump(_container(request).workflow.publish(photo_id, viewer=viewer))


@router.post("/photos/{photo_id}/subjects/{subject_id}/remove")
async def remove_subject(
    photo_id: str,
    subject_id: str,
    request: Request,
    viewer: Viewer = Depends(current_viewer),
) -> dict[str, object]:
    """Remove a detected person and rebuild the background."""
    workflow = _container(request).workflow
    photo = await workflow.remove_person(photo_id, subject_id, viewer=viewer)
    if photo is None:
        raise NotFoundError(photo_id)
    return _dump(photo)


@router.get("/photos/{photo_id}/display")
async def photo_display(
    photo_id: str, request: Request, viewer: Viewer = Depends(current_viewer)
) -> dict[str, object]:
    """Return the reference the viewer should render, and the fallback."""
    photo = _visible_photo(request, photo_id, viewer)
    return {"url": display_url(photo), "original_url": photo.url}


@router.get("/images/{handle}")
async def image_bytes(
    handle: str, request: Request, viewer: Viewer = Depends(current_viewer)
) -> Response:
    """Serve uploaded bytes behind a transient handle to viewers of its photo."""
    container = _container(request)
    url = f"{BLOB_PREFIX}{handle}"
    photo = next((item for item in container.store.list() if item.url == url), None)
    blob = container.images.get(url)
    if photo is None or blob is None:
        raise NotFoundError(handle)
    if not can_manage_consent(viewer, photo):
        raise PermissionDeniedError("User cannot view this photo")
    return Response(content=blob.content, media_type=blob.content_type)


@router.get("/stats")
async def stats(request: Request) -> dict[str, object]:
    """Return consent, analytics and AI processing stats."""
    service = _container(request).stats_service
    return {
        "consent": asdict(service.consent_stats()),
        "analytics": asdict(service.photo_analytics()),
        "ai": asdict(service.ai_stats()),
    }


def _visible_photo(request: Request, photo_id: str, viewer: Viewer) -> Photo:
    photo = _container(request).store.get(photo_id)
    if not can_manage_consent(viewer, photo):
        raise PermissionDeniedError("User cannot view this photo")
    return photo


def _decode_content(raw: str) -> tuple[bytes, str | None]:
    """Decode base64 content, accepting `data:<mime>;base64,` prefixes."""
    content_type = None
    encoded = raw
    if raw.startswith("data:") and "," in raw:
        header, encoded = raw.split(",", 1)
        content_type = header[len("data:") :].split(";", 1)[0] or None
    try:
        return base64.b64decode(encoded, validate=True), content_type
    except (binascii.Error, ValueError):
        raise ValidationError("Image content is not valid base64") from None
