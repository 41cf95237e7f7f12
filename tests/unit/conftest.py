"""Shared fixtures: in-memory storage, deterministic clock, fake Redis, wrapping strategies."""

import asyncio
from typing import Any, Dict, Iterable, Optional

import pytest

from eventrepo.application.event_repository import EventRepository
from eventrepo.dependencies import reset_event_repository
from eventrepo.domain.ordering import TimeTokenClock
from eventrepo.infrastructure.storage.errors import StorageError
from eventrepo.infrastructure.storage.memory import InMemoryStorageStrategy
from eventrepo.observability.metrics import MetricsCollector

FIXED_NOW_NS = 1_700_000_000_000_000_000


class FakeRedisClient:
    """In-memory stand-in for RedisClient (same async methods)."""

    def __init__(self):
        self.values: dict[str, str] = {}
        self.sorted_sets: dict[str, set[str]] = {}

    async def get(self, key: str):
        return self.values.get(key)

    async def mget(self, keys: list[str]):
        return [self.values.get(k) for k in keys]

    async def set_indexed(self, key: str, value: str, index_keys: Iterable[str], member: str) -> bool:
        if key in self.values:
            return False
        self.values[key] = value
        for index_key in index_keys:
            self.sorted_sets.setdefault(index_key, set()).add(member)
        return True

    async def range_by_lex(self, key: str, lower: str, upper: str):
        return sorted(m for m in self.sorted_sets.get(key, set()) if lower <= m <= upper)


class DelayedStrategy:
    """Wraps a strategy and delays queries per index value, to control completion order."""

    def __init__(self, inner, delays: Dict[Any, float]):
        self.inner = inner
        self.delays = delays
        self.completed: list[Any] = []

    async def put(self, key: str, document: Dict[str, Any]) -> str:
        return await self.inner.put(key, document)

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        return await self.inner.get(key)

    async def query(self, index, start_key, end_key):
        await asyncio.sleep(self.delays.get(start_key[0], 0))
        response = await self.inner.query(index, start_key, end_key)
        self.completed.append(start_key[0])
        return response


class FailingStrategy:
    """Wraps a strategy; queries for `fail_on` raise, or answer with an error payload or a rowless reply."""

    def __init__(
        self,
        inner,
        fail_on: Any = None,
        error_payload: bool = False,
        fail_put: bool = False,
        malformed: bool = False,
    ):
        self.inner = inner
        self.fail_on = fail_on
        self.error_payload = error_payload
        self.malformed = malformed
        self.fail_put = fail_put

    async def put(self, key: str, document: Dict[str, Any]) -> str:
        if self.fail_put:
            raise StorageError("disk full", status_code=500)
        return await self.inner.put(key, document)

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        return await self.inner.get(key)

    async def query(self, index, start_key, end_key):
        if start_key[0] == self.fail_on:
            if self.error_payload:
                return {"error": "query_parse_error", "reason": "Invalid key"}
            if self.malformed:
                return {"rows": None}
            raise StorageError("connection reset")
        return await self.inner.query(index, start_key, end_key)


@pytest.fixture
def memory_strategy():
    return InMemoryStorageStrategy()


@pytest.fixture
def clock():
    """Wall clock frozen in place: every token is the previous one plus one."""
    return TimeTokenClock(now_ns=lambda: FIXED_NOW_NS)


@pytest.fixture
def metrics():
    return MetricsCollector()


@pytest.fixture
def repository(memory_strategy, clock, metrics):
    return EventRepository(memory_strategy, clock=clock, metrics=metrics)


@pytest.fixture
def make_delayed_strategy(memory_strategy):
    """Build a DelayedStrategy; wraps the shared in-memory store unless `inner` is given."""

    def _make(delays: Dict[Any, float], inner=None) -> DelayedStrategy:
        return DelayedStrategy(memory_strategy if inner is None else inner, delays)

    return _make


@pytest.fixture
def make_failing_strategy(memory_strategy):
    """Build a FailingStrategy; wraps the shared in-memory store unless `inner` is given."""

    def _make(inner=None, **options) -> FailingStrategy:
        return FailingStrategy(memory_strategy if inner is None else inner, **options)

    return _make


@pytest.fixture
def fake_redis():
    return FakeRedisClient()


@pytest.fixture(autouse=True)
def _reset_singleton():
    reset_event_repository()
    yield
    reset_event_repository()
