"""Tests for the generic keyed record store."""

import pytest

from herbtrace.exceptions import IndexOutOfBounds, NotFound
from herbtrace.services import KeyedRecordStore

pytestmark = pytest.mark.asyncio


@pytest.fixture
def session_factory(services):
    return services.session_factory


async def test_insert_if_absent_only_inserts_once(session_factory):
    store = KeyedRecordStore("samples")
    async with session_factory() as session, session.begin():
        assert await store.insert_if_absent(session, "a", {"v": 1}) is True
        assert await store.insert_if_absent(session, "a", {"v": 2}) is False

    async with session_factory() as session:
        assert await store.get(session, "a") == {"v": 1}
        assert await store.count(session) == 1


async def test_get_unknown_key_raises(session_factory):
    store = KeyedRecordStore("samples")
    async with session_factory() as session:
        with pytest.raises(NotFound):
            await store.get(session, "missing")
        assert await store.exists(session, "missing") is False


async def test_key_at_follows_insertion_order(session_factory):
    store = KeyedRecordStore("samples")
    async with session_factory() as session, session.begin():
        for key in ("c", "a", "b"):
            await store.insert_if_absent(session, key, {})

    async with session_factory() as session:
        assert [await store.key_at(session, i) for i in range(3)] == ["c", "a", "b"]
        assert await store.keys(session, offset=1) == ["a", "b"]
        with pytest.raises(IndexOutOfBounds):
            await store.key_at(session, 3)
        with pytest.raises(IndexOutOfBounds):
            await store.key_at(session, -1)


async def test_stores_are_isolated_by_name(session_factory):
    first = KeyedRecordStore("first")
    second = KeyedRecordStore("second")
    async with session_factory() as session, session.begin():
        await first.insert_if_absent(session, "k", {"store": "first"})
        assert await second.insert_if_absent(session, "k", {"store": "second"}) is True

    async with session_factory() as session:
        assert await first.get(session, "k") == {"store": "first"}
        assert await second.count(session) == 1


async def test_groups_keep_order_and_skip_duplicates(session_factory):
    store = KeyedRecordStore("samples")
    async with session_factory() as session, session.begin():
        assert await store.append_to_group(session, "farmer-1", "b2") is True
        assert await store.append_to_group(session, "farmer-1", "b1") is True
        assert await store.append_to_group(session, "farmer-1", "b2") is False
        await store.append_to_group(session, "farmer-2", "b3")

    async with session_factory() as session:
        assert await store.list_by_group(session, "farmer-1") == ["b2", "b1"]
        assert await store.list_by_group(session, "farmer-2") == ["b3"]
        assert await store.list_by_group(session, "nobody") == []


async def test_replace_keeps_position(session_factory):
    store = KeyedRecordStore("samples")
    async with session_factory() as session, session.begin():
        await store.insert_if_absent(session, "a", {"v": 1})
        await store.insert_if_absent(session, "b", {"v": 1})
        await store.replace(session, "a", {"v": 2})

    async with session_factory() as session:
        assert await store.get(session, "a") == {"v": 2}
        assert await store.key_at(session, 0) == "a"


async def test_failed_transaction_leaves_no_record(session_factory):
    store = KeyedRecordStore("samples")
    with pytest.raises(RuntimeError):
        async with session_factory() as session, session.begin():
            await store.insert_if_absent(session, "a", {})
            raise RuntimeError("abort")

    async with session_factory() as session:
        assert await store.exists(session, "a") is False
