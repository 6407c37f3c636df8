"""Masking resolver: which image variant a viewer should see."""

from datetime import datetime

from kindrid.domain.photos import MaskedSubject, MaskingInfo, Photo

BLUR = "blur"
PIXELATE = "pixelate"


def display_url(photo: Photo) -> str:
    """Return the reference the viewer should render.

    Only the masked variant is shown while consent is pending. Person-removal
    edits live in `edited_versions` and never replace it. Load failures of
    the masked variant are handled by the presentation layer, which falls
    back to `photo.url`.
    """
    if photo.ai_processed and photo.consent_pending:
        return photo.masked_url or photo.url
    return photo.url


def masked_reference(photo: Photo, denied: list[str]) -> str:
    """Return the deterministic reference for a photo masked for `denied`."""
    names = "+".join(sorted(denied))
    return f"masked/{photo.id}/{names}.jpg"


def masking_plan(
    photo: Photo, denied: list[str], applied_at: datetime
) -> MaskingInfo:
    """Blur annotated subjects in `denied`; pixelate the rest as a fallback."""
    subjects: list[MaskedSubject] = []
    detections = photo.ai_features.person_detection if photo.ai_features else []
    for name in denied:
        matches = [person for person in detections if person.name == name]
        if not matches:
            subjects.append(MaskedSubject(name=name, method=PIXELATE))
            continue
        subjects.extend(
            MaskedSubject(
                name=name,
                subject_id=person.id,
                bbox=person.bbox,
                method=BLUR,
            )
            for person in matches
        )
    return MaskingInfo(subjects=subjects, applied_at=applied_at)
