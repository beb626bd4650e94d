"""Tests for Batch."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from fieldstore.exceptions import BatchError, NoSuchField
from fieldstore.modules.hash import HashManager
from fieldstore.modules.transaction import Batch
from fieldstore.store import MemoryStore


@pytest.mark.asyncio
async def test_exec_returns_results_in_queue_order() -> None:
    """Test queued operations run in order."""
    first = AsyncMock(return_value="one")
    second = AsyncMock(return_value="two")

    batch = Batch().queue(first, 1).queue(second, 2, flag=True)
    results = await batch.exec()

    assert results == ["one", "two"]
    first.assert_awaited_once_with(1)
    second.assert_awaited_once_with(2, flag=True)


@pytest.mark.asyncio
async def test_exec_stops_at_first_failure() -> None:
    """Test a failure aborts the batch and skips later operations."""
    failing = AsyncMock(side_effect=RuntimeError("boom"))
    later = AsyncMock(return_value="never")
    callback = MagicMock()

    batch = Batch().queue(AsyncMock(return_value="ok")).queue(failing).queue(later)

    with pytest.raises(RuntimeError, match="boom"):
        await batch.exec(callback=callback)

    later.assert_not_awaited()
    callback.assert_called_once()
    assert isinstance(callback.call_args.args[0], RuntimeError)


@pytest.mark.asyncio
async def test_exec_callback_receives_results() -> None:
    """Test the callback gets the full result list."""
    callback = MagicMock()

    await Batch().queue(AsyncMock(return_value=1)).exec(callback=callback)

    callback.assert_called_once_with(None, [1])


@pytest.mark.asyncio
async def test_exec_twice_raises() -> None:
    """Test a batch executes at most once."""
    batch = Batch().queue(AsyncMock(return_value=1))
    await batch.exec()

    with pytest.raises(BatchError):
        await batch.exec()
    with pytest.raises(BatchError):
        batch.queue(AsyncMock())


@pytest.mark.asyncio
async def test_empty_batch() -> None:
    """Test executing an empty batch."""
    assert await Batch().exec() == []


def test_discard_drops_queued_operations() -> None:
    """Test discard empties the queue."""
    batch = Batch().queue(AsyncMock()).queue(AsyncMock())
    assert len(batch) == 2

    batch.discard()

    assert len(batch) == 0


def test_attribute_queuing_requires_target() -> None:
    """Test unbound batches do not invent operations."""
    with pytest.raises(AttributeError):
        Batch().hget("user:1", "name")


@pytest.mark.asyncio
async def test_attribute_queuing_on_target() -> None:
    """Test methods of the bound target can be queued by name."""
    store = MemoryStore()
    hash_manager = HashManager(store)
    await hash_manager.hmset("user:1", {"name": "Alice", "age": 30})

    batch = store.multi(hash_manager)
    batch.hget("user:1", "age")
    batch.hget("user:1", "name")

    assert await batch.exec() == [30, "Alice"]


@pytest.mark.asyncio
async def test_batch_error_discards_partial_results() -> None:
    """Test a failing queued hget fails the whole batch."""
    store = MemoryStore()
    hash_manager = HashManager(store)
    await hash_manager.hset("user:1", "name", "Alice")

    batch = store.multi(hash_manager)
    batch.hget("user:1", "name").hget("user:1", "email")

    with pytest.raises(NoSuchField):
        await batch.exec()
