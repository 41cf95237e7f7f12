"""Storage strategy protocol. The repository depends on this; infrastructure implements it."""

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union

AGGREGATE_INDEX = "aggregate"
NAME_INDEX = "name"

# Index name -> document field forming the first half of its composite [value, time] key.
INDEX_FIELDS: Dict[str, str] = {
    AGGREGATE_INDEX: "aggregateId",
    NAME_INDEX: "name",
}

# A composite index key: [aggregateId or name, time token]
IndexKey = List[Any]

# Either {"rows": [{"value": document, ...}, ...]}, {"error": ..., "reason": ...}, or a bare row list.
QueryResponse = Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]


class StorageStrategy(Protocol):
    """Protocol for document persistence and indexed range queries over event documents."""

    async def put(self, key: str, document: Dict[str, Any]) -> str:
        """Persist document under key. Returns the stored id; raises on failure."""
        ...

    async def query(self, index: str, start_key: IndexKey, end_key: IndexKey) -> QueryResponse:
        """Range-query an index over composite keys, both endpoints inclusive, ascending."""
        ...

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the document stored under key, or None if missing."""
        ...
