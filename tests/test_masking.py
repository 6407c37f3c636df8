"""Tests for the masking resolver."""

from kindrid.domain.analysis import (
    AnnotationBundle,
    BackgroundAnalysis,
    PersonDetection,
)
from kindrid.domain.photos import Photo
from kindrid.services.masking import (
    BLUR,
    PIXELATE,
    display_url,
    masked_reference,
    masking_plan,
)
from tests.conftest import FIXED_NOW


def _annotated_photo() -> Photo:
    return Photo(
        id="p1",
        url="blob:abc",
        children=["Emma", "Lucas"],
        consent_pending=["Lucas"],
        consent_given=["Emma"],
        ai_processed=True,
        ai_features=AnnotationBundle(
            person_detection=[
                PersonDetection(
                    id="person_1", name="Lucas", confidence=0.9, bbox=(1, 2, 3, 4)
                )
            ],
            background_analysis=BackgroundAnalysis(
                type="classroom",
                elements=["desks"],
                complexity="low",
                reconstruction_difficulty="easy",
            ),
        ),
    )


def test_display_url_shows_masked_variant_while_pending() -> None:
    photo = _annotated_photo().model_copy(
        update={"masked_url": "masked/p1/Lucas.jpg", "edited_image_url": "edited/x"}
    )

    assert display_url(photo) == "masked/p1/Lucas.jpg"


def test_display_url_uses_original_without_variant() -> None:
    assert display_url(_annotated_photo()) == "blob:abc"


def test_display_url_uses_original_when_resolved_or_unprocessed() -> None:
    photo = _annotated_photo().model_copy(update={"edited_image_url": "edited/x"})

    resolved = photo.model_copy(update={"consent_pending": []})
    unprocessed = photo.model_copy(update={"ai_processed": False})

    assert display_url(resolved) == "blob:abc"
    assert display_url(unprocessed) == "blob:abc"


def test_masked_reference_is_order_independent() -> None:
    photo = _annotated_photo()

    assert masked_reference(photo, ["Lucas", "Emma"]) == "masked/p1/Emma+Lucas.jpg"
    assert masked_reference(photo, ["Emma", "Lucas"]) == "masked/p1/Emma+Lucas.jpg"


def test_masking_plan_blurs_detected_and_pixelates_others() -> None:
    plan = masking_plan(_annotated_photo(), ["Lucas", "Mia"], FIXED_NOW)

    assert plan.applied_at == FIXED_NOW
    lucas, mia = plan.subjects
    assert (lucas.name, lucas.subject_id, lucas.method) == ("Lucas", "person_1", BLUR)
    assert lucas.bbox == (1.0, 2.0, 3.0, 4.0)
    assert (mia.name, mia.subject_id, mia.bbox, mia.method) == (
        "Mia",
        None,
        None,
        PIXELATE,
    )


def test_masking_plan_without_annotations_pixelates() -> None:
    photo = _annotated_photo().model_copy(update={"ai_features": None})

    plan = masking_plan(photo, ["Emma"], FIXED_NOW)

    assert [subject.method for subject in plan.subjects] == [PIXELATE]
