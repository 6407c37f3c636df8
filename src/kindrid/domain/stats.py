"""Domain models for photo statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConsentStats:
    """Consent totals across all photos."""

    total_photos: int
    total_children: int
    total_consent_given: int
    total_pending_consent: int
    consent_rate: float


@dataclass(frozen=True)
class PhotoAnalytics:
    """Photo counts grouped by status and month."""

    status_counts: dict[str, int]
    monthly_counts: dict[str, int]
    total_photos: int
    average_children_per_photo: float


@dataclass(frozen=True)
class AIStats:
    """Progress of simulated AI processing."""

    total: int
    processed: int
    processing: int
    failed: int
    success_rate: float
