"""Tests for MemoryStore."""

import pytest

from fieldstore.modules.transaction import Batch
from fieldstore.store import MemoryStore


@pytest.mark.asyncio
async def test_set_get_exists() -> None:
    """Test basic whole-value operations."""
    store = MemoryStore()

    assert await store.exists("user:1") is False
    await store.set("user:1", {"name": "Alice"})

    assert await store.exists("user:1") is True
    assert await store.get("user:1") == {"name": "Alice"}
    assert await store.get("missing") is None


@pytest.mark.asyncio
async def test_values_are_copied() -> None:
    """Test stored values are isolated from callers."""
    value = {"tags": ["a"]}
    store = MemoryStore()
    await store.set("k", value)

    value["tags"].append("b")
    fetched = await store.get("k")
    fetched["tags"].append("c")

    assert await store.get("k") == {"tags": ["a"]}


@pytest.mark.asyncio
async def test_initial_data_and_delete() -> None:
    """Test seeding and deleting keys."""
    store = MemoryStore({"a": {}, "b": None})

    assert store.keys() == ["a", "b"]
    assert await store.delete("b") is True
    assert await store.delete("b") is False
    assert len(store) == 1


def test_multi_returns_bound_batch() -> None:
    """Test multi creates a new batch for the target."""
    target = object()

    batch = MemoryStore().multi(target)

    assert isinstance(batch, Batch)
    assert batch._target is target
