"""Statistics and queries over the photo store."""

from collections import Counter
from dataclasses import dataclass

from kindrid.domain.photos import Photo, PhotoStatus
from kindrid.domain.stats import AIStats, ConsentStats, PhotoAnalytics
from kindrid.services.store import PhotoStore


@dataclass
class PhotoStatsService:
    """Read-only views used by dashboards and galleries."""

    store: PhotoStore

    def consent_stats(self) -> ConsentStats:
        """Return consent totals across all photos."""
        photos = self.store.list()
        total_children = sum(len(photo.children) for photo in photos)
        total_given = sum(len(photo.consent_given) for photo in photos)
        return ConsentStats(
            total_photos=len(photos),
            total_children=total_children,
            total_consent_given=total_given,
            total_pending_consent=sum(len(photo.consent_pending) for photo in photos),
            consent_rate=_percent(total_given, total_children),
        )

    def photo_analytics(self) -> PhotoAnalytics:
        """Return photo counts by status and by month."""
        photos = self.store.list()
        status_counts = Counter(photo.status.value for photo in photos)
        monthly_counts = Counter(photo.date[:7] for photo in photos if photo.date)
        average = (
            round(sum(len(photo.children) for photo in photos) / len(photos), 1)
            if photos
            else 0.0
        )
        return PhotoAnalytics(
            status_counts=dict(status_counts),
            monthly_counts=dict(monthly_counts),
            total_photos=len(photos),
            average_children_per_photo=average,
        )

    def ai_stats(self) -> AIStats:
        """Return how many photos the simulated AI has processed."""
        photos = self.store.list()
        processed = sum(1 for photo in photos if photo.ai_processed)
        return AIStats(
            total=len(photos),
            processed=processed,
            processing=len(self.by_status(PhotoStatus.AI_PROCESSING)),
            failed=len(self.by_status(PhotoStatus.AI_FAILED)),
            success_rate=_percent(processed, len(photos)),
        )

    def by_status(self, status: PhotoStatus) -> list[Photo]:
        """Return photos in a status."""
        return [photo for photo in self.store.list() if photo.status is status]

    def by_child(self, child_name: str) -> list[Photo]:
        """Return photos showing a child."""
        return [photo for photo in self.store.list() if child_name in photo.children]

    def search(self, query: str) -> list[Photo]:
        """Case-insensitive search over text fields and children."""
        needle = query.lower()
        return [
            photo
            for photo in self.store.list()
            if needle in photo.title.lower()
            or needle in photo.description.lower()
            or needle in photo.location.lower()
            or any(needle in child.lower() for child in photo.children)
        ]


def _percent(part: int, whole: int) -> float:
    if whole == 0:
        return 0.0
    return round(part / whole * 100, 1)
