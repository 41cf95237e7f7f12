"""Application layer: event repository, codec, storage strategy protocol."""

from eventrepo.application.event_codec import decode, encode, strip_internal_fields
from eventrepo.application.event_repository import EventRepository
from eventrepo.application.exceptions import (
    ApplicationError,
    PartialFanInFailureError,
    PersistenceFailedError,
    QueryFailedError,
)
from eventrepo.application.storage_strategy import (
    AGGREGATE_INDEX,
    INDEX_FIELDS,
    NAME_INDEX,
    StorageStrategy,
)

__all__ = [
    "AGGREGATE_INDEX",
    "ApplicationError",
    "EventRepository",
    "INDEX_FIELDS",
    "NAME_INDEX",
    "PartialFanInFailureError",
    "PersistenceFailedError",
    "QueryFailedError",
    "StorageStrategy",
    "decode",
    "encode",
    "strip_internal_fields",
]
