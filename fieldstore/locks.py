"""Per-key mutual exclusion for read-modify-write sequences."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class KeyLocks:
    """Registry of ``asyncio.Lock`` objects, one per key in use.

    Locks are created on first use and dropped once nobody holds or waits
    on them, so the registry only grows with the number of keys being
    mutated concurrently.

    Example:
        >>> locks = KeyLocks()
        >>> async with locks.hold("user:1"):
        ...     ...
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def locked(self, key: str) -> bool:
        """Check whether a coroutine currently holds the lock for ``key``."""
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)


@asynccontextmanager
async def unguarded(key: str) -> AsyncIterator[None]:
    """Stand-in for ``KeyLocks.hold`` when writes are not serialized."""
    yield
