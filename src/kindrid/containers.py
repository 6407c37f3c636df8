"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from kindrid.adapters.file_slot import FileSlot
from kindrid.config import Settings
from kindrid.services.analyzer import Analyzer, MockAnalyzer
from kindrid.services.demo import demo_photos
from kindrid.services.images import ImageRegistry, InMemoryImageRegistry
from kindrid.services.slots import InMemorySlot, KeyValueSlot
from kindrid.services.stats import PhotoStatsService
from kindrid.services.store import PhotoStore
from kindrid.services.workflow import WorkflowController


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    images: ImageRegistry
    store: PhotoStore
    analyzer: Analyzer
    workflow: WorkflowController
    stats_service: PhotoStatsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    slot: KeyValueSlot
    if resolved_settings.state_dir:
        slot = FileSlot.create(resolved_settings.state_dir)
    else:
        slot = InMemorySlot()
    images = InMemoryImageRegistry()
    store = PhotoStore(slot=slot, images=images)
    store.load(seed=demo_photos() if resolved_settings.seed_demo_photos else None)
    analyzer = MockAnalyzer.create(
        seed=resolved_settings.random_seed,
        analysis_delay_seconds=resolved_settings.analysis_delay_seconds,
        removal_delay_seconds=resolved_settings.removal_delay_seconds,
    )
    workflow = WorkflowController(store=store, images=images, analyzer=analyzer)

    async def close_resources() -> None:
        for photo in store.list():
            images.release(photo.url)

    return AppContainer(
        settings=resolved_settings,
        images=images,
        store=store,
        analyzer=analyzer,
        workflow=workflow,
        stats_service=PhotoStatsService(store),
        close_resources=close_resources,
    )
