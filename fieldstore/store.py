"""Key/value store contract and an in-memory implementation."""

from __future__ import annotations

import copy
from typing import Any, Protocol

from fieldstore.modules.transaction import Batch


class Store(Protocol):
    """Whole-value key/value store that hash operations are layered on."""

    async def exists(self, key: str) -> bool: ...

    async def get(self, key: str) -> Any: ...

    async def set(self, key: str, value: Any) -> None: ...

    def multi(self, target: Any = None) -> Batch: ...


class MemoryStore:
    """Dict-backed store living in the current process.

    Values are deep-copied on the way in and out, so mutating a fetched
    mapping never changes what is stored until it is written back.

    Example:
        >>> store = MemoryStore()
        >>> await store.set("user:1", {"name": "Alice"})
        >>> await store.get("user:1")
        {'name': 'Alice'}
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(data) if data else {}

    async def exists(self, key: str) -> bool:
        return key in self._data

    async def get(self, key: str) -> Any:
        return copy.deepcopy(self._data.get(key))

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> bool:
        """Remove a whole key. Returns True if it existed."""
        if key not in self._data:
            return False
        del self._data[key]
        return True

    def multi(self, target: Any = None) -> Batch:
        return Batch(target)

    def keys(self) -> list[str]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)
