"""Redis-backed storage strategy. Documents as JSON strings, indexes as lexicographic sorted sets."""

import json
from typing import Any, Dict, List, Optional

from redis.exceptions import RedisError

from eventrepo.application.storage_strategy import INDEX_FIELDS, IndexKey
from eventrepo.config.settings import settings
from eventrepo.domain.models.event import EVENT_TYPE
from eventrepo.infrastructure.redis_client import RedisClient
from eventrepo.infrastructure.storage.errors import DocumentConflictError, StorageError


class RedisStorageStrategy:
    """
    Persists event documents to Redis. Implements StorageStrategy protocol.

    Layout:
      {prefix}:doc:{key}                   -> JSON document
      {prefix}:idx:{index}:{json(value)}   -> sorted set of time tokens, all score 0

    Tokens are fixed-width digit strings, so ZRANGEBYLEX yields them in time order.
    """

    def __init__(self, redis_client: RedisClient, key_prefix: str | None = None) -> None:
        self._redis = redis_client
        self._prefix = key_prefix or settings.redis_key_prefix

    def _doc_key(self, key: str) -> str:
        return f"{self._prefix}:doc:{key}"

    def _index_key(self, index: str, value: Any) -> str:
        # json.dumps keeps aggregate 1 and "1" in separate sets.
        return f"{self._prefix}:idx:{index}:{json.dumps(value)}"

    async def put(self, key: str, document: Dict[str, Any]) -> str:
        if document.get("type") == EVENT_TYPE:
            index_keys = [
                self._index_key(index, document[field])
                for index, field in INDEX_FIELDS.items()
            ]
        else:
            index_keys = []
        try:
            stored = await self._redis.set_indexed(
                self._doc_key(key),
                json.dumps(document),
                index_keys,
                member=document.get("time", key),
            )
        except RedisError as e:
            raise StorageError(f"Redis write of {key} failed: {e}") from e
        if not stored:
            raise DocumentConflictError(f"Document {key} already exists", status_code=409)
        return key

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            raw = await self._redis.get(self._doc_key(key))
        except RedisError as e:
            raise StorageError(f"Redis read of {key} failed: {e}") from e
        if not raw:
            return None
        document = json.loads(raw)
        document["_id"] = key
        return document

    async def query(self, index: str, start_key: IndexKey, end_key: IndexKey) -> Dict[str, Any]:
        if index not in INDEX_FIELDS:
            return {"error": "not_found", "reason": f"unknown index {index}"}
        if start_key[0] != end_key[0]:
            raise StorageError("Range must stay within one index value")

        value = start_key[0]
        try:
            members = await self._redis.range_by_lex(
                self._index_key(index, value), start_key[1], end_key[1]
            )
            raws = await self._redis.mget([self._doc_key(m) for m in members])
        except RedisError as e:
            raise StorageError(f"Redis range read on {index} failed: {e}") from e

        rows: List[Dict[str, Any]] = []
        for member, raw in zip(members, raws):
            if raw is None:
                continue
            document = json.loads(raw)
            document["_id"] = member
            rows.append({"id": member, "key": [value, member], "value": document})
        return {"rows": rows}
