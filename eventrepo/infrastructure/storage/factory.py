"""Builds the storage strategy selected in settings."""

from eventrepo.application.storage_strategy import StorageStrategy
from eventrepo.config.settings import AppSettings
from eventrepo.infrastructure.redis_client import RedisClient
from eventrepo.infrastructure.storage.couchdb import CouchDbStorageStrategy
from eventrepo.infrastructure.storage.memory import InMemoryStorageStrategy
from eventrepo.infrastructure.storage.redis_store import RedisStorageStrategy


def build_storage_strategy(app_settings: AppSettings) -> StorageStrategy:
    """Return a strategy for app_settings.storage_backend. Raises ValueError for unknown backends."""
    backend = app_settings.storage_backend
    if backend == "memory":
        return InMemoryStorageStrategy()
    if backend == "couchdb":
        return CouchDbStorageStrategy(
            base_url=app_settings.couchdb_url,
            database=app_settings.couchdb_database,
            design=app_settings.couchdb_design,
            timeout=app_settings.storage_timeout_seconds,
        )
    if backend == "redis":
        return RedisStorageStrategy(
            RedisClient(
                url=app_settings.redis_url,
                timeout=app_settings.storage_timeout_seconds,
            ),
            key_prefix=app_settings.redis_key_prefix,
        )
    raise ValueError(f"Unknown storage backend: {backend!r}")
