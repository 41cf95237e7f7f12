"""InMemoryStorageStrategy: CouchDB-shaped rows, inclusive ranges, conflicts."""

import pytest

from eventrepo.infrastructure.storage.errors import DocumentConflictError, StorageError
from eventrepo.infrastructure.storage.memory import InMemoryStorageStrategy


def _doc(aggregate_id, name, time, **attrs):
    return {"aggregateId": aggregate_id, "name": name, "type": "event", "time": time, "attrs": attrs}


@pytest.fixture
async def populated():
    store = InMemoryStorageStrategy()
    await store.put("03", _doc("a", "deposit", "03"))
    await store.put("01", _doc("a", "deposit", "01"))
    await store.put("02", _doc("b", "withdraw", "02"))
    await store.put("cfg", {"type": "config", "name": "deposit"})
    return store


async def test_put_adds_identity_and_revision(populated):
    document = await populated.get("01")
    assert document["_id"] == "01"
    assert document["_rev"].startswith("1-")


async def test_put_same_key_twice_conflicts(populated):
    with pytest.raises(DocumentConflictError):
        await populated.put("01", _doc("a", "deposit", "01"))


async def test_get_missing_is_none(populated):
    assert await populated.get("99") is None


async def test_query_aggregate_is_sorted_and_inclusive(populated):
    response = await populated.query("aggregate", ["a", "01"], ["a", "03"])
    assert [row["key"] for row in response["rows"]] == [["a", "01"], ["a", "03"]]


async def test_query_name_respects_lower_bound_and_skips_non_events(populated):
    response = await populated.query("name", ["deposit", "02"], ["deposit", "99"])
    assert [row["id"] for row in response["rows"]] == ["03"]


async def test_query_unknown_index_returns_error_payload(populated):
    response = await populated.query("by_color", ["red", "00"], ["red", "99"])
    assert response["error"] == "not_found"


async def test_query_across_index_values_is_rejected(populated):
    with pytest.raises(StorageError):
        await populated.query("aggregate", ["a", "00"], ["b", "99"])


async def test_stored_documents_are_isolated_from_caller(populated):
    document = _doc("c", "deposit", "04", amount=1)
    await populated.put("04", document)
    document["attrs"]["amount"] = 99
    assert (await populated.get("04"))["attrs"]["amount"] == 1
