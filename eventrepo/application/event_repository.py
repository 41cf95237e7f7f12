"""Event repository: ordering, persistence and time-ordered retrieval of events."""

import asyncio
import logging
import time
from collections.abc import Iterable, Mapping
from typing import Any, List, Optional, Union

from eventrepo.application.event_codec import decode, decode_document, encode
from eventrepo.application.exceptions import (
    PartialFanInFailureError,
    PersistenceFailedError,
    QueryFailedError,
)
from eventrepo.application.storage_strategy import (
    AGGREGATE_INDEX,
    NAME_INDEX,
    StorageStrategy,
)
from eventrepo.domain.models.event import AggregateId, Event
from eventrepo.domain.ordering import MAX_TIME, MIN_TIME, TimeTokenClock, validate_time_token
from eventrepo.domain.validators.event_validator import (
    validate_aggregate_id,
    validate_attrs,
    validate_event_name,
    validate_event_names,
)
from eventrepo.observability.metrics import MetricsCollector

EventNames = Union[str, Iterable[str]]


def _time_key(event: Event) -> str:
    return event.time


def _ordered_names(names: Iterable[str]) -> List[str]:
    """Distinct names in query order. Sets have no order of their own, so they are sorted."""
    if isinstance(names, (set, frozenset)):
        return sorted(names)
    return list(dict.fromkeys(names))


class EventRepository:
    """
    Append-only event store over a StorageStrategy.
    Assigns each event its ordering token, persists it, and reads events back
    by aggregate or by event name(s) in ascending token order.
    Failures from storage propagate to the caller; nothing is retried.
    """

    def __init__(
        self,
        strategy: StorageStrategy,
        *,
        clock: Optional[TimeTokenClock] = None,
        metrics: Optional[MetricsCollector] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._strategy = strategy
        self._clock = clock or TimeTokenClock()
        self._metrics = metrics or MetricsCollector()
        self._logger = logger or logging.getLogger(__name__)

    @property
    def strategy(self) -> StorageStrategy:
        return self._strategy

    @property
    def clock(self) -> TimeTokenClock:
        return self._clock

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics

    def bind_strategy(self, strategy: StorageStrategy) -> None:
        """Rebind storage. Meant for startup and tests; in-flight calls keep the old strategy."""
        self._strategy = strategy
        self._logger.info(
            "storage_strategy_bound",
            extra={"strategy": type(strategy).__name__},
        )

    async def append(
        self,
        aggregate_id: AggregateId,
        name: str,
        attrs: Optional[Mapping[str, Any]] = None,
    ) -> Event:
        """
        Store a new event and return it with its assigned time token.
        Raises DomainValidationError for bad input, PersistenceFailedError if storage fails.
        """
        validate_aggregate_id(aggregate_id)
        validate_event_name(name)
        validate_attrs(attrs)

        # Token is taken before the write so tokens follow call-initiation order.
        event = Event(
            aggregate_id=aggregate_id,
            name=name,
            time=self._clock.next_token(),
            attrs=dict(attrs or {}),
        )
        strategy = self._strategy
        try:
            await strategy.put(event.time, encode(event))
        except Exception as e:
            self._metrics.increment("event_append_failures", event_name=name)
            self._logger.error(
                "event_persist_failed",
                extra={
                    "aggregate_id": aggregate_id,
                    "event_name": name,
                    "time": event.time,
                    "error": str(e),
                },
            )
            raise PersistenceFailedError(f"Persisting event {name!r} failed: {e}") from e

        self._metrics.increment("events_appended", event_name=name)
        self._logger.info(
            "event_appended",
            extra={"aggregate_id": aggregate_id, "event_name": name, "time": event.time},
        )
        return event

    async def read_by_aggregate(self, aggregate_id: AggregateId) -> List[Event]:
        """All events of one aggregate, ascending by time. Unknown aggregate yields []."""
        validate_aggregate_id(aggregate_id)
        return await self._query(AGGREGATE_INDEX, aggregate_id, MIN_TIME)

    async def read_by_names(
        self,
        names: EventNames,
        from_time: Optional[str] = MIN_TIME,
    ) -> List[Event]:
        """
        Events with the given name(s) and time >= from_time, ascending by time.

        Several names are queried concurrently and merged only once every query
        has answered. If any of them fails the others are cancelled and
        PartialFanInFailureError is raised.
        """
        if not isinstance(names, (str, set, frozenset)) and isinstance(names, Iterable):
            names = list(names)
        validate_event_names(names)
        lower = MIN_TIME if from_time is None else validate_time_token(from_time)

        if isinstance(names, str):
            return await self._query(NAME_INDEX, names, lower)

        ordered = _ordered_names(names)
        if not ordered:
            return []
        if len(ordered) == 1:
            return await self._query(NAME_INDEX, ordered[0], lower)
        return await self._fan_in(ordered, lower)

    async def get_event(self, time_token: str) -> Optional[Event]:
        """Single event by its time token, or None if no event is stored under it."""
        validate_time_token(time_token)
        try:
            document = await self._strategy.get(time_token)
        except Exception as e:
            raise QueryFailedError(f"Lookup of event {time_token} failed: {e}", key=time_token) from e
        if document is None:
            return None
        return decode_document(document, key=time_token)

    async def _fan_in(self, names: List[str], lower: str) -> List[Event]:
        tasks = [
            asyncio.create_task(self._query(NAME_INDEX, name, lower))
            for name in names
        ]
        try:
            # gather keeps results positional, whatever order the queries finish in.
            streams = await asyncio.gather(*tasks)
        except Exception as e:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            failed_name = getattr(e, "key", None)
            reason = getattr(e, "message", None) or str(e)
            self._logger.error(
                "fan_in_failed",
                extra={"event_names": names, "failed_name": failed_name, "error": reason},
            )
            raise PartialFanInFailureError(failed_name, names, reason) from e

        merged = [event for stream in streams for event in stream]
        merged.sort(key=_time_key)
        return merged

    async def _query(self, index: str, value: AggregateId, lower: str) -> List[Event]:
        started = time.perf_counter()
        try:
            response = await self._strategy.query(index, [value, lower], [value, MAX_TIME])
        except Exception as e:
            self._metrics.increment("event_query_failures", index=index)
            self._logger.error(
                "query_failed",
                extra={"index": index, "key": value, "error": str(e)},
            )
            raise QueryFailedError(f"Query on {index} index failed: {e}", index=index, key=value) from e
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            self._metrics.observe_latency("event_query_latency_ms", elapsed_ms, index=index)

        try:
            events = decode(response, index=index, key=value)
        except QueryFailedError:
            self._metrics.increment("event_query_failures", index=index)
            raise
        self._metrics.increment("event_queries", index=index)
        self._logger.debug(
            "events_loaded",
            extra={"index": index, "key": value, "count": len(events)},
        )
        return events
