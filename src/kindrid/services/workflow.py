"""Workflow controller for the upload, consent and publish state machine."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from kindrid.domain.access import TEACHER, Viewer
from kindrid.domain.errors import InvalidStateError, ValidationError
from kindrid.domain.photos import (
    EditedVersion,
    MetadataPatch,
    Photo,
    PhotoMetadata,
    PhotoStatus,
    unique_names,
)
from kindrid.services import ledger
from kindrid.services.access import require_consent_manager, require_teacher
from kindrid.services.analyzer import Analyzer
from kindrid.services.images import ImageRegistry, detect_mime_type
from kindrid.services.masking import masked_reference, masking_plan
from kindrid.services.store import PhotoStore

_ANALYZABLE = {PhotoStatus.PENDING_CONSENT, PhotoStatus.AI_FAILED}
_CONSENT_OPEN = {
    PhotoStatus.PENDING_CONSENT,
    PhotoStatus.APPROVED,
    PhotoStatus.AI_FAILED,
}
_CONSENT_FIELDS = (
    "consent_given",
    "consent_pending",
    "masked_url",
    "edited_image_url",
    "masking_info",
    "ai_processed",
    "status",
)

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class WorkflowController:
    """Owns photo status transitions and the operations the UI calls."""

    store: PhotoStore
    images: ImageRegistry
    analyzer: Analyzer
    clock: Callable[[], datetime] = field(default=_utc_now)

    def upload(
        self,
        content: bytes,
        metadata: PhotoMetadata,
        content_type: str | None = None,
        *,
        viewer: Viewer = TEACHER,
    ) -> Photo:
        """Create a photo awaiting consent; analysis is a separate step."""
        require_teacher(viewer, "upload photos")
        if not content:
            raise ValidationError("Please select a file")
        children = unique_names(metadata.children)
        if not children:
            raise ValidationError("Please add at least one child name")

        url = self.images.register(content, content_type or detect_mime_type(content))
        now = self.clock()
        photo = self.store.insert(
            Photo(
                url=url,
                title=metadata.title,
                description=metadata.description,
                location=metadata.location,
                teacher=metadata.teacher,
                children=children,
                tags=unique_names(metadata.tags),
                status=PhotoStatus.PENDING_CONSENT,
                consent_given=[],
                consent_pending=list(children),
                date=now.date().isoformat(),
                created_at=now,
            )
        )
        _logger.info("Uploaded photo %s with %s children", photo.id, len(children))
        return photo

    async def analyze(self, photo_id: str, *, viewer: Viewer = TEACHER) -> Photo | None:
        """Run the analyzer and attach its annotations.

        Returns None when the photo was removed while the analyzer ran.
        """
        require_teacher(viewer, "run photo analysis")
        photo = self.store.get(photo_id)
        if photo.ai_features is not None:
            return photo
        if photo.status not in _ANALYZABLE:
            raise InvalidStateError(
                f"Cannot analyze photo {photo_id} in status {photo.status.value}"
            )

        processing = self.store.update(
            photo_id, {"status": PhotoStatus.AI_PROCESSING}
        )
        try:
            bundle = await self.analyzer.analyze(processing)
        except Exception:
            _logger.exception("AI processing failed for photo %s", photo_id)
            if self.store.contains(photo_id):
                self.store.update(
                    photo_id,
                    {"status": PhotoStatus.AI_FAILED, "ai_processed": False},
                )
            raise

        if not self.store.contains(photo_id):
            _logger.info("Discarding analysis for removed photo %s", photo_id)
            return None
        return self.store.update(
            photo_id,
            {
                "ai_features": bundle,
                "ai_processed": True,
                "status": PhotoStatus.PENDING_CONSENT,
            },
        )

    def submit_consent_decisions(
        self,
        photo_id: str,
        granted: list[str],
        denied: list[str],
        *,
        viewer: Viewer = TEACHER,
    ) -> Photo:
        """Apply a batch of decisions, mask denied subjects and approve."""
        photo = self.store.get(photo_id)
        granted = unique_names(granted)
        denied = unique_names(denied)
        require_consent_manager(viewer, photo, granted + denied)
        _check_names(photo, granted + denied)
        overlap = sorted(set(granted) & set(denied))
        if overlap:
            raise ValidationError(f"Names both granted and denied: {overlap}")
        _check_consent_open(photo)

        for name in granted:
            photo = ledger.grant(photo, name)
        for name in denied:
            photo = ledger.revoke(photo, name)
        masked = [
            name
            for name in unique_names([*_masked_names(photo), *denied])
            if name not in granted
        ]
        photo = self._remask(photo, masked)
        photo = photo.model_copy(update={"status": PhotoStatus.APPROVED})
        _logger.info(
            "Consent saved for photo %s: %s granted, %s denied",
            photo_id,
            len(granted),
            len(denied),
        )
        return self._save_consent(photo)

    def grant_consent(
        self, photo_id: str, subject_name: str, *, viewer: Viewer = TEACHER
    ) -> Photo:
        """Grant consent for one subject and re-derive the mask."""
        photo = self._open_for_decision(photo_id, subject_name, viewer)
        photo = ledger.grant(photo, subject_name)
        remaining = [name for name in _masked_names(photo) if name != subject_name]
        return self._save_consent(self._remask(photo, remaining))

    def revoke_consent(
        self, photo_id: str, subject_name: str, *, viewer: Viewer = TEACHER
    ) -> Photo:
        """Revoke consent for one subject and mask them."""
        photo = self._open_for_decision(photo_id, subject_name, viewer)
        photo = ledger.revoke(photo, subject_name)
        masked = unique_names([*_masked_names(photo), subject_name])
        return self._save_consent(self._remask(photo, masked))

    def publish(self, photo_id: str, *, viewer: Viewer = TEACHER) -> Photo:
        """Publish an approved photo; publishing twice is a no-op."""
        require_teacher(viewer, "publish photos")
        photo = self.store.get(photo_id)
        if photo.status is PhotoStatus.PUBLISHED:
            return photo
        if photo.status is not PhotoStatus.APPROVED:
            raise InvalidStateError(
                f"Cannot publish photo {photo_id} in status {photo.status.value}"
            )
        published = self.store.update(
            photo_id,
            {
                "status": PhotoStatus.PUBLISHED,
                "published_at": photo.published_at or self.clock(),
            },
        )
        _logger.info("Published photo %s", photo_id)
        return published

    def remove(self, photo_id: str, *, viewer: Viewer = TEACHER) -> Photo:
        """Delete a photo whatever its status."""
        require_teacher(viewer, "delete photos")
        removed = self.store.remove(photo_id)
        _logger.info("Removed photo %s", photo_id)
        return removed

    def update_metadata(
        self, photo_id: str, patch: MetadataPatch, *, viewer: Viewer = TEACHER
    ) -> Photo:
        """Edit free-text metadata; a new children list re-partitions consent."""
        require_teacher(viewer, "update photos")
        photo = self.store.get(photo_id)
        changes = patch.model_dump(exclude_unset=True, exclude_none=True)
        if "tags" in changes:
            changes["tags"] = unique_names(changes["tags"])
        children = changes.pop("children", None)
        photo = photo.model_copy(update=changes)
        if children is not None:
            _check_consent_open(photo)
            children = unique_names(children)
            if not children:
                raise ValidationError("Please add at least one child name")
            photo = ledger.repartition(photo, children)
            masked = [name for name in _masked_names(photo) if name in children]
            photo = self._remask(photo, masked)
        fields = set(changes)
        if children is not None:
            fields |= {"children", *_CONSENT_FIELDS}
        return self.store.update(
            photo_id, {name: getattr(photo, name) for name in fields}
        )

    async def remove_person(
        self, photo_id: str, subject_id: str, *, viewer: Viewer = TEACHER
    ) -> Photo | None:
        """Remove a detected subject and record the edit.

        Returns None when the photo was removed while the analyzer ran.
        """
        require_teacher(viewer, "edit photos")
        photo = self.store.get(photo_id)
        person = photo.ai_features.find_person(subject_id) if photo.ai_features else None
        if person is None:
            raise ValidationError(f"No detected subject {subject_id} in photo {photo_id}")

        result = await self.analyzer.remove_subject_and_rebuild_background(
            photo_id, subject_id
        )
        if not self.store.contains(photo_id):
            _logger.info("Discarding edit for removed photo %s", photo_id)
            return None
        current = self.store.get(photo_id)
        version = EditedVersion(
            subject_id=subject_id,
            subject_name=person.name,
            image_url=f"edited/{photo_id}/{subject_id}.jpg",
            result=result,
            timestamp=self.clock(),
        )
        return self.store.update(
            photo_id, {"edited_versions": [*current.edited_versions, version]}
        )

    def _open_for_decision(
        self, photo_id: str, subject_name: str, viewer: Viewer
    ) -> Photo:
        photo = self.store.get(photo_id)
        require_consent_manager(viewer, photo, [subject_name])
        _check_names(photo, [subject_name])
        _check_consent_open(photo)
        return photo

    def _mask(self, photo: Photo, denied: list[str]) -> Photo:
        reference = masked_reference(photo, denied)
        return photo.model_copy(
            update={
                "masked_url": reference,
                "edited_image_url": reference,
                "masking_info": masking_plan(photo, denied, self.clock()),
                "ai_processed": True,
            }
        )

    def _remask(self, photo: Photo, masked: list[str]) -> Photo:
        if masked and not ledger.is_fully_resolved(photo):
            return self._mask(photo, masked)
        return _unmask(photo)

    def _save_consent(self, photo: Photo) -> Photo:
        return self.store.update(
            photo.id, {name: getattr(photo, name) for name in _CONSENT_FIELDS}
        )


def _check_names(photo: Photo, names: list[str]) -> None:
    unknown = sorted(name for name in names if name not in photo.children)
    if unknown:
        raise ValidationError(f"Names not in photo {photo.id}: {unknown}")


def _check_consent_open(photo: Photo) -> None:
    if photo.status not in _CONSENT_OPEN:
        raise InvalidStateError(
            f"Cannot change consent for photo {photo.id} "
            f"in status {photo.status.value}"
        )


def _masked_names(photo: Photo) -> list[str]:
    if photo.masking_info is None:
        return []
    return unique_names([subject.name for subject in photo.masking_info.subjects])


def _unmask(photo: Photo) -> Photo:
    return photo.model_copy(
        update={"masked_url": None, "edited_image_url": None, "masking_info": None}
    )
