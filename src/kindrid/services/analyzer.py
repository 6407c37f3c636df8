"""Simulated AI analysis standing in for a real vision model."""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Protocol

from kindrid.domain.analysis import (
    AnnotationBundle,
    BackgroundAnalysis,
    BackgroundReconstruction,
    PersonDetection,
    RemovalResult,
)
from kindrid.domain.photos import Photo

MODEL_VERSION = "ClassVault-2.1"
MAX_DETECTIONS = 4

_SCENES: dict[str, list[str]] = {
    "classroom": ["desks", "whiteboard", "windows", "bookshelf"],
    "gymnasium": ["bleachers", "wooden_floor", "banners", "tables"],
    "art_room": ["easels", "paint_supplies", "artwork", "sink"],
    "playground": ["grass", "climbing_frame", "trees", "sky"],
    "library": ["bookshelves", "reading_nook", "carpet", "lamps"],
}
_DIFFICULTY = {"low": "easy", "medium": "moderate", "high": "hard"}

_logger = logging.getLogger(__name__)


class Analyzer(Protocol):
    """Interface for photo annotation and person removal."""

    async def analyze(self, photo: Photo) -> AnnotationBundle:
        """Return person and background annotations for a photo."""

    async def remove_subject_and_rebuild_background(
        self, photo_id: str, subject_id: str
    ) -> RemovalResult:
        """Remove a detected subject and report on the rebuilt background."""


@dataclass
class MockAnalyzer(Analyzer):
    """Analyzer that sleeps and returns randomised annotations."""

    rng: random.Random
    analysis_delay_seconds: float = 0.8
    removal_delay_seconds: float = 1.5

    @classmethod
    def create(
        cls,
        seed: int | None = None,
        analysis_delay_seconds: float = 0.8,
        removal_delay_seconds: float = 1.5,
    ) -> "MockAnalyzer":
        """Create an analyzer with an optionally seeded random source."""
        return cls(
            rng=random.Random(seed),
            analysis_delay_seconds=analysis_delay_seconds,
            removal_delay_seconds=removal_delay_seconds,
        )

    async def analyze(self, photo: Photo) -> AnnotationBundle:
        """Detect between one and four people and describe the background."""
        _logger.info("Analyzing photo %s", photo.id)
        await asyncio.sleep(self.analysis_delay_seconds)
        count = self.rng.randint(1, MAX_DETECTIONS)
        people = [self._detect(photo, index) for index in range(count)]
        scene = self.rng.choice(sorted(_SCENES))
        complexity = self.rng.choice(sorted(_DIFFICULTY))
        elements = self.rng.sample(_SCENES[scene], k=self.rng.randint(2, 4))
        bundle = AnnotationBundle(
            person_detection=people,
            background_analysis=BackgroundAnalysis(
                type=scene,
                elements=elements,
                complexity=complexity,
                reconstruction_difficulty=_DIFFICULTY[complexity],
            ),
        )
        _logger.info("Analysis complete for photo %s: %s people", photo.id, count)
        return bundle

    async def remove_subject_and_rebuild_background(
        self, photo_id: str, subject_id: str
    ) -> RemovalResult:
        """Pretend to inpaint the background behind a removed subject."""
        _logger.info("Removing %s from photo %s", subject_id, photo_id)
        await asyncio.sleep(self.removal_delay_seconds)
        return RemovalResult(
            success=True,
            photo_id=photo_id,
            subject_id=subject_id,
            background_reconstruction=BackgroundReconstruction(
                quality=self.rng.choice(["high", "excellent"]),
                seamless=True,
                artifacts=self.rng.choice(["minimal", "none"]),
            ),
            processing_time=f"{self.removal_delay_seconds:.1f}s",
            model_version=MODEL_VERSION,
        )

    def _detect(self, photo: Photo, index: int) -> PersonDetection:
        if index < len(photo.children):
            name = photo.children[index]
        else:
            name = f"Unknown {index + 1}"
        x = 40 + index * 150 + self.rng.randint(0, 30)
        y = 60 + self.rng.randint(0, 40)
        return PersonDetection(
            id=f"person_{index + 1}",
            name=name,
            confidence=round(self.rng.uniform(0.75, 0.99), 2),
            bbox=(float(x), float(y), 120.0, 180.0),
        )
