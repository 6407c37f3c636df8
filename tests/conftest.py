"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from kindrid.config import Settings
from kindrid.containers import AppContainer, build_container
from kindrid.domain.analysis import (
    AnnotationBundle,
    BackgroundAnalysis,
    BackgroundReconstruction,
    PersonDetection,
    RemovalResult,
)
from kindrid.domain.photos import Photo, PhotoMetadata
from kindrid.services.analyzer import Analyzer
from kindrid.services.images import InMemoryImageRegistry
from kindrid.services.slots import InMemorySlot, KeyValueSlot
from kindrid.services.store import PhotoStore
from kindrid.services.workflow import WorkflowController

FIXED_NOW = datetime(2024, 10, 7, 9, 30, tzinfo=UTC)
JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg"


@dataclass
class FailingSlot(KeyValueSlot):
    """Slot whose writes fail for selected keys."""

    failing_keys: set[str]
    values: dict[str, str] = field(default_factory=dict)

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        if key in self.failing_keys:
            raise OSError("quota exceeded")
        self.values[key] = value


@dataclass
class FakeAnalyzer(Analyzer):
    """Analyzer returning one detection per child, without sleeping."""

    calls: list[str] = field(default_factory=list)
    on_analyze: Callable[[Photo], None] | None = None

    async def analyze(self, photo: Photo) -> AnnotationBundle:
        self.calls.append(photo.id)
        if self.on_analyze is not None:
            self.on_analyze(photo)
        return AnnotationBundle(
            person_detection=[
                PersonDetection(
                    id=f"person_{index + 1}",
                    name=name,
                    confidence=0.9,
                    bbox=(10.0 * index, 20.0, 120.0, 180.0),
                )
                for index, name in enumerate(photo.children)
            ],
            background_analysis=BackgroundAnalysis(
                type="classroom",
                elements=["desks", "whiteboard"],
                complexity="low",
                reconstruction_difficulty="easy",
            ),
        )

    async def remove_subject_and_rebuild_background(
        self, photo_id: str, subject_id: str
    ) -> RemovalResult:
        self.calls.append(f"{photo_id}:{subject_id}")
        return RemovalResult(
            success=True,
            photo_id=photo_id,
            subject_id=subject_id,
            background_reconstruction=BackgroundReconstruction(
                quality="high", seamless=True, artifacts="minimal"
            ),
            processing_time="0.0s",
            model_version="ClassVault-2.1",
        )


class FailingAnalyzer(FakeAnalyzer):
    """Analyzer whose analysis always raises."""

    async def analyze(self, photo: Photo) -> AnnotationBundle:
        raise RuntimeError("model unavailable")


def make_workflow(
    analyzer: Analyzer | None = None, slot: KeyValueSlot | None = None
) -> WorkflowController:
    images = InMemoryImageRegistry()
    store = PhotoStore(slot=slot or InMemorySlot(), images=images)
    return WorkflowController(
        store=store,
        images=images,
        analyzer=analyzer or FakeAnalyzer(),
        clock=lambda: FIXED_NOW,
    )


def class_metadata(children: list[str] | None = None) -> PhotoMetadata:
    return PhotoMetadata(
        title="Field Trip",
        description="Class 3A at the museum",
        location="City Museum",
        teacher="Ms. Johnson",
        children=["Emma", "Lucas"] if children is None else children,
        tags=["trip"],
    )


@pytest.fixture
def workflow() -> WorkflowController:
    return make_workflow()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        port=3100,
        environment="test",
        static_dir=str(tmp_path / "dist"),
        public_dir=str(tmp_path / "public"),
        state_dir=None,
        seed_demo_photos=False,
        analysis_delay_seconds=0,
        removal_delay_seconds=0,
        random_seed=7,
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)
