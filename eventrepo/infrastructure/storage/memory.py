"""In-memory storage strategy. Emulates a document store with aggregate/name views."""

import asyncio
import copy
import uuid
from typing import Any, Dict, List, Optional

from eventrepo.application.storage_strategy import INDEX_FIELDS, IndexKey
from eventrepo.domain.models.event import EVENT_TYPE
from eventrepo.infrastructure.storage.errors import DocumentConflictError, StorageError


class InMemoryStorageStrategy:
    """
    Dict-backed document store for tests, demos and single-process use.
    Rows look like view rows of a CouchDB database: {"id", "key", "value"} with
    _id/_rev inside the value. Implements StorageStrategy protocol.
    """

    def __init__(self) -> None:
        self._documents: Dict[str, Dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._documents)

    async def put(self, key: str, document: Dict[str, Any]) -> str:
        await asyncio.sleep(0)
        if key in self._documents:
            raise DocumentConflictError(f"Document {key} already exists", status_code=409)
        stored = copy.deepcopy(document)
        stored["_id"] = key
        stored["_rev"] = f"1-{uuid.uuid4().hex}"
        self._documents[key] = stored
        return key

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        await asyncio.sleep(0)
        document = self._documents.get(key)
        return copy.deepcopy(document) if document is not None else None

    async def query(self, index: str, start_key: IndexKey, end_key: IndexKey) -> Dict[str, Any]:
        await asyncio.sleep(0)
        field = INDEX_FIELDS.get(index)
        if field is None:
            return {"error": "not_found", "reason": f"missing_named_view {index}"}
        if start_key[0] != end_key[0]:
            raise StorageError("Range must stay within one index value")

        value, lower, upper = start_key[0], start_key[1], end_key[1]
        rows: List[Dict[str, Any]] = []
        for doc_id, document in self._documents.items():
            if document.get("type") != EVENT_TYPE or document.get(field) != value:
                continue
            # 1 == True in Python; keep int and str ids apart like a JSON collation would.
            if type(document.get(field)) is not type(value):
                continue
            if lower <= document["time"] <= upper:
                rows.append(
                    {
                        "id": doc_id,
                        "key": [value, document["time"]],
                        "value": copy.deepcopy(document),
                    }
                )
        rows.sort(key=lambda row: row["key"][1])
        return {"total_rows": len(self._documents), "offset": 0, "rows": rows}
