# eventrepo/infrastructure/storage/couchdb.py

import json
from typing import Any, Dict, Optional

import httpx

from eventrepo.application.storage_strategy import AGGREGATE_INDEX, NAME_INDEX, IndexKey
from eventrepo.config.settings import settings
from eventrepo.infrastructure.storage.errors import DocumentConflictError, StorageError

# View map functions backing the two indexes. Keys are [value, time] so each view sorts by time.
MAP_BY_AGGREGATE = (
    "function(doc) { if (doc.type == 'event') { emit([doc.aggregateId, doc.time], doc); } }"
)
MAP_BY_NAME = "function(doc) { if (doc.type == 'event') { emit([doc.name, doc.time], doc); } }"


def design_document() -> Dict[str, Any]:
    return {
        "language": "javascript",
        "views": {
            NAME_INDEX: {"map": MAP_BY_NAME},
            AGGREGATE_INDEX: {"map": MAP_BY_AGGREGATE},
        },
    }


class CouchDbStorageStrategy:
    """Stores event documents in a CouchDB database and queries its design-document views."""

    def __init__(
        self,
        base_url: str | None = None,
        database: str | None = None,
        design: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.database = database or settings.couchdb_database
        self.design = design or settings.couchdb_design
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.couchdb_url,
            timeout=timeout or settings.storage_timeout_seconds,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise StorageError(f"CouchDB {method} {path} failed: {e}") from e

    async def put(self, key: str, document: Dict[str, Any]) -> str:
        """PUT the document under key; CouchDB answers 201 (or 202 for delayed commit)."""
        path = f"/{self.database}/{key}"
        response = await self._request("PUT", path, json=document)
        if response.status_code == 409:
            raise DocumentConflictError(f"Document {key} already exists", status_code=409)
        if response.status_code not in (201, 202):
            raise StorageError(
                f"CouchDB rejected document {key}: {response.text}",
                status_code=response.status_code,
            )
        return response.json().get("id", key)

    async def query(self, index: str, start_key: IndexKey, end_key: IndexKey) -> Dict[str, Any]:
        """
        GET a view range. Error payloads such as {"error": "not_found"} are returned as-is
        so the codec can report them; only transport failures raise here.
        """
        path = f"/{self.database}/_design/{self.design}/_view/{index}"
        params = {
            "startkey": json.dumps(start_key),
            "endkey": json.dumps(end_key),
        }
        response = await self._request("GET", path, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise StorageError(
                f"CouchDB view {index} returned a non-JSON body",
                status_code=response.status_code,
            ) from e

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        response = await self._request("GET", f"/{self.database}/{key}")
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise StorageError(
                f"CouchDB lookup of {key} failed: {response.text}",
                status_code=response.status_code,
            )
        return response.json()

    async def ensure_database(self) -> bool:
        """Create the database. Returns False if it already existed."""
        response = await self._request("PUT", f"/{self.database}")
        if response.status_code == 412:
            return False
        if response.status_code not in (201, 202):
            raise StorageError(
                f"CouchDB could not create database {self.database}: {response.text}",
                status_code=response.status_code,
            )
        return True

    async def ensure_design_document(self) -> bool:
        """Install the aggregate/name views. Returns False if the design document already existed."""
        path = f"/{self.database}/_design/{self.design}"
        response = await self._request("PUT", path, json=design_document())
        if response.status_code == 409:
            return False
        if response.status_code not in (201, 202):
            raise StorageError(
                f"CouchDB could not install design document {self.design}: {response.text}",
                status_code=response.status_code,
            )
        return True
