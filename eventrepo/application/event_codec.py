"""Event codec: Event <-> stored document, and query responses -> Events."""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from eventrepo.application.exceptions import QueryFailedError
from eventrepo.application.storage_strategy import QueryResponse
from eventrepo.domain.models.event import EVENT_TYPE, Event
from eventrepo.domain.schemas.event import EventDocument

logger = logging.getLogger(__name__)

# Storage engines reserve underscore-prefixed keys (_id, _rev, ...) for their own bookkeeping.
_INTERNAL_PREFIX = "_"


def encode(event: Event) -> Dict[str, Any]:
    """Build the document persisted for an event: aggregateId, name, type, time, attrs."""
    return EventDocument.from_event(event).model_dump(by_alias=True)


def strip_internal_fields(document: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of document without storage identity/revision fields."""
    return {k: v for k, v in document.items() if not str(k).startswith(_INTERNAL_PREFIX)}


def decode_document(
    document: Mapping[str, Any],
    index: Optional[str] = None,
    key: Any = None,
) -> Optional[Event]:
    """
    Turn one stored document into an Event. Returns None for non-event documents.
    Raises QueryFailedError if an event document is malformed.
    """
    clean = strip_internal_fields(document)
    if clean.get("type") != EVENT_TYPE:
        logger.warning(
            "non_event_document_skipped",
            extra={"index": index, "key": key, "document_type": clean.get("type")},
        )
        return None
    try:
        return EventDocument.model_validate(clean).to_event()
    except ValidationError as e:
        raise QueryFailedError(
            f"Malformed event document: {e.error_count()} validation error(s)",
            index=index,
            key=key,
        ) from e


def _rows(response: QueryResponse, index: Optional[str], key: Any) -> List[Mapping[str, Any]]:
    if isinstance(response, Mapping):
        if "error" in response:
            error = response.get("error")
            reason = response.get("reason")
            logger.error(
                "query_failed",
                extra={"index": index, "key": key, "error": error, "reason": reason},
            )
            detail = f"{error}: {reason}" if reason else f"{error}"
            raise QueryFailedError(f"Storage reported an error: {detail}", index=index, key=key)
        rows = response.get("rows")
    else:
        rows = response
    if not isinstance(rows, (list, tuple)):
        logger.error(
            "query_response_malformed",
            extra={"index": index, "key": key, "response_type": type(response).__name__},
        )
        raise QueryFailedError("Query response has no row list", index=index, key=key)
    return list(rows)


def decode(
    response: QueryResponse,
    index: Optional[str] = None,
    key: Any = None,
) -> List[Event]:
    """
    Decode an index query response into Events, preserving row order.
    Raises QueryFailedError when the response is an error payload or carries no row list;
    an empty list always means the range holds no events.
    """
    events: List[Event] = []
    for row in _rows(response, index, key):
        value = row.get("value") if isinstance(row, Mapping) else None
        if not isinstance(value, Mapping):
            raise QueryFailedError("Query row has no document value", index=index, key=key)
        event = decode_document(value, index=index, key=key)
        if event is not None:
            events.append(event)
    return events
