"""Tests for photo statistics and queries."""

import pytest

from kindrid.domain.photos import Photo, PhotoStatus
from kindrid.services.images import InMemoryImageRegistry
from kindrid.services.slots import InMemorySlot
from kindrid.services.stats import PhotoStatsService
from kindrid.services.store import PhotoStore


@pytest.fixture
def service() -> PhotoStatsService:
    store = PhotoStore(slot=InMemorySlot(), images=InMemoryImageRegistry())
    store.insert(
        Photo(
            id="1",
            url="/1.jpg",
            title="First Day of School",
            location="Classroom 3A",
            children=["Emma", "Lucas"],
            consent_given=["Emma", "Lucas"],
            status=PhotoStatus.PUBLISHED,
            ai_processed=True,
            date="2024-09-01",
        )
    )
    store.insert(
        Photo(
            id="2",
            url="/2.jpg",
            title="Science Fair",
            description="Projects in the gym",
            children=["Lucas", "Mia", "Zoe"],
            consent_given=["Lucas"],
            consent_pending=["Mia", "Zoe"],
            status=PhotoStatus.APPROVED,
            ai_processed=True,
            date="2024-09-15",
        )
    )
    store.insert(
        Photo(
            id="3",
            url="/3.jpg",
            title="Art Class",
            children=["Ava"],
            consent_pending=["Ava"],
            status=PhotoStatus.AI_FAILED,
            date="2024-10-02",
        )
    )
    return PhotoStatsService(store)


def test_consent_stats(service: PhotoStatsService) -> None:
    stats = service.consent_stats()

    assert stats.total_photos == 3
    assert stats.total_children == 6
    assert stats.total_consent_given == 3
    assert stats.total_pending_consent == 3
    assert stats.consent_rate == 50.0


def test_photo_analytics(service: PhotoStatsService) -> None:
    analytics = service.photo_analytics()

    assert analytics.status_counts == {"published": 1, "approved": 1, "ai_failed": 1}
    assert analytics.monthly_counts == {"2024-09": 2, "2024-10": 1}
    assert analytics.average_children_per_photo == 2.0


def test_ai_stats(service: PhotoStatsService) -> None:
    stats = service.ai_stats()

    assert (stats.total, stats.processed, stats.processing, stats.failed) == (
        3,
        2,
        0,
        1,
    )
    assert stats.success_rate == 66.7


def test_queries(service: PhotoStatsService) -> None:
    assert [photo.id for photo in service.by_child("Lucas")] == ["2", "1"]
    assert [photo.id for photo in service.by_status(PhotoStatus.AI_FAILED)] == ["3"]
    assert [photo.id for photo in service.search("GYM")] == ["2"]
    assert [photo.id for photo in service.search("classroom")] == ["1"]
    assert [photo.id for photo in service.search("zoe")] == ["2"]


def test_empty_store_stats() -> None:
    store = PhotoStore(slot=InMemorySlot(), images=InMemoryImageRegistry())
    service = PhotoStatsService(store)

    assert service.consent_stats().consent_rate == 0.0
    assert service.ai_stats().success_rate == 0.0
    assert service.photo_analytics().average_children_per_photo == 0.0
