"""Process-wide event repository handle, created lazily and shared by every caller."""

from eventrepo.application.event_repository import EventRepository
from eventrepo.application.storage_strategy import StorageStrategy
from eventrepo.config.settings import get_settings
from eventrepo.infrastructure.storage.factory import build_storage_strategy

_event_repository: EventRepository | None = None


def get_event_repository() -> EventRepository:
    """Return singleton EventRepository, built on the configured storage backend on first call."""
    global _event_repository
    if _event_repository is None:
        _event_repository = EventRepository(
            strategy=build_storage_strategy(get_settings()),
        )
    return _event_repository


def set_storage_strategy(strategy: StorageStrategy) -> EventRepository:
    """Bind strategy to the singleton, creating the singleton around it if needed."""
    global _event_repository
    if _event_repository is None:
        _event_repository = EventRepository(strategy=strategy)
    else:
        _event_repository.bind_strategy(strategy)
    return _event_repository


def reset_event_repository() -> None:
    """Drop the singleton (for tests)."""
    global _event_repository
    _event_repository = None
