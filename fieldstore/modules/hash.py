"""Hash data structure operations layered on a whole-value store."""

from __future__ import annotations

import logging
import math
import re
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Any, Mapping

from fieldstore.callbacks import with_callback
from fieldstore.events import EventSink, NullSink
from fieldstore.exceptions import FieldStoreException, HashMultiError
from fieldstore.locks import KeyLocks, unguarded
from fieldstore.types import FieldValue, FieldWrite, Hash

if TYPE_CHECKING:
    from fieldstore.store import Store

logger = logging.getLogger(__name__)

# Leading numeric prefix, the way a lenient float parser reads "12abc" as 12.
_NUMBER_PREFIX = re.compile(
    r"\s*([+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))"
)
_INTEGER = re.compile(r"[+-]?[0-9]+")
# Default int() string limit on current interpreters.
_MAX_INT_DIGITS = 4300

Number = int | float


def parse_number(value: Any) -> Number | None:
    """Read a field value as a number.

    Args:
        value: The stored field value

    Returns:
        The number, or None if the value has no numeric reading
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if not isinstance(value, str):
        return None

    match = _NUMBER_PREFIX.match(value)
    if match is None:
        return None
    text = match.group(1)
    if text.endswith("Infinity"):
        return float(text.replace("Infinity", "inf"))
    if _INTEGER.fullmatch(text) and len(text.lstrip("+-")) <= _MAX_INT_DIGITS:
        return int(text)
    return float(text)


class HashManager:
    """Manage Hash operations (Redis-compatible) on top of a key/value store.

    The store only knows whole values. Each hash lives under one store key as
    a mapping of field names to values; every field-level change fetches the
    mapping, changes it in memory and writes the whole mapping back.

    Mutations on the same key are serialized with a per-key lock held across
    the read-modify-write, so concurrent writers never lose each other's
    fields. Reads take no lock.

    Example:
        >>> hashes = HashManager(MemoryStore())
        >>> await hashes.hset("user:1", "name", "Alice")
        >>> await hashes.hincrby("user:1", "visits", 3)
        3
        >>> await hashes.hgetall("user:1")
        {'name': 'Alice', 'visits': 3}
    """

    def __init__(
        self,
        store: Store,
        *,
        events: EventSink | None = None,
        serialize_writes: bool = True,
    ) -> None:
        """Initialize HashManager.

        Args:
            store: The store holding the hashes
            events: Sink notified of every successful mutation
            serialize_writes: Hold a per-key lock across each mutation
        """
        self._store = store
        self._events = events if events is not None else NullSink()
        self._serialize_writes = serialize_writes
        self._locks = KeyLocks()
        self._keys: set[str] = set()

    @property
    def known_keys(self) -> frozenset[str]:
        """Keys this manager has created a hash under. Advisory only."""
        return frozenset(self._keys)

    @property
    def serialize_writes(self) -> bool:
        return self._serialize_writes

    def _guard(self, key: str) -> AbstractAsyncContextManager[None]:
        if self._serialize_writes:
            return self._locks.hold(key)
        return unguarded(key)

    async def _fetch(self, key: str) -> Hash:
        value = await self._store.get(key)
        if value is None:
            # Removed outside this layer since the exists check.
            raise FieldStoreException.no_such_key(key)
        if not isinstance(value, dict):
            raise FieldStoreException.wrong_type(key, value)
        return value

    async def _absent(self, key: str, field: str) -> FieldStoreException:
        if await self._store.exists(key):
            return FieldStoreException.no_such_field(key, field)
        return FieldStoreException.no_such_key(key)

    # Lock-free primitives. Public operations call these while holding the
    # key's lock, so composed operations never re-acquire it.

    async def _hexists(self, key: str, field: str) -> bool:
        if not await self._store.exists(key):
            return False
        return field in await self._fetch(key)

    async def _hget(self, key: str, field: str) -> Any:
        if not await self._hexists(key, field):
            raise await self._absent(key, field)

        data = await self._fetch(key)
        if field not in data:
            raise FieldStoreException.no_such_field(key, field)
        return data[field]

    async def _hset(self, key: str, field: str, value: Any) -> FieldWrite:
        if await self._store.exists(key):
            data = await self._fetch(key)
            data[field] = value
            await self._store.set(key, data)
        else:
            await self._store.set(key, {field: value})
            self._keys.add(key)

        self._events.emit("hset", key, field, value)
        return FieldWrite(key, field, value)

    async def _number(self, key: str, field: str) -> Number:
        current = await self._hget(key, field) if await self._hexists(key, field) else 0
        number = parse_number(current)
        if number is None:
            raise FieldStoreException.invalid_numeric_value(key, field, current)
        return number

    async def _add(self, key: str, field: str, delta: Number, event: str) -> Number:
        if isinstance(delta, bool) or not isinstance(delta, (int, float)):
            raise TypeError(f"delta must be a number, got {type(delta).__name__}")

        async with self._guard(key):
            current = await self._number(key, field)
            result = current + delta
            if isinstance(result, float) and math.isnan(result):
                raise FieldStoreException.invalid_numeric_value(key, field, result)
            await self._hset(key, field, result)

        logger.debug("%s %s.%s -> %r", event, key, field, result)
        self._events.emit(event, key, field, result)
        return result

    @with_callback()
    async def hexists(self, key: str, field: str) -> bool:
        """Check if field exists in hash.

        Args:
            key: Hash key
            field: Field name

        Returns:
            True if the key exists and holds the field
        """
        return await self._hexists(key, field)

    @with_callback()
    async def hget(self, key: str, field: str) -> Any:
        """Get field from hash.

        Args:
            key: Hash key
            field: Field name

        Returns:
            The field value

        Raises:
            NoSuchKey: If the key does not exist
            NoSuchField: If the hash has no such field
        """
        return await self._hget(key, field)

    @with_callback(spread=True)
    async def hset(self, key: str, field: str, value: FieldValue) -> FieldWrite:
        """Set field in hash, creating the hash if the key does not exist.

        Emits ``hset`` with ``(key, field, value)``.

        Args:
            key: Hash key
            field: Field name
            value: Field value

        Returns:
            The ``(key, field, value)`` that was written

        Example:
            >>> key, field, value = await hashes.hset("user:1", "name", "Alice")
        """
        logger.debug("hset %s.%s", key, field)
        async with self._guard(key):
            return await self._hset(key, field, value)

    @with_callback(spread=True)
    async def hsetnx(self, key: str, field: str, value: FieldValue) -> FieldWrite:
        """Set field only if it doesn't exist.

        Raises:
            FieldAlreadyExists: If the hash already holds the field
        """
        async with self._guard(key):
            if await self._hexists(key, field):
                raise FieldStoreException.field_already_exists(key, field)
            return await self._hset(key, field, value)

    @with_callback()
    async def hmset(self, key: str, fields: Mapping[str, FieldValue]) -> list[FieldWrite]:
        """Set multiple fields in hash.

        Fields are applied one after another in mapping order, each with its
        own read and write. A failing field does not stop the others.

        Args:
            key: Hash key
            fields: Dictionary of field-value pairs

        Returns:
            One ``(key, field, value)`` per field, in mapping order

        Raises:
            HashMultiError: If any field failed; carries every error in
                ``errors`` and the applied writes in ``results``
        """
        results: list[FieldWrite] = []
        errors: list[Exception] = []

        async with self._guard(key):
            for field, value in fields.items():
                try:
                    results.append(await self._hset(key, field, value))
                except Exception as exc:
                    logger.warning("hmset %s.%s failed: %s", key, field, exc)
                    errors.append(exc)

        if errors:
            raise HashMultiError(errors, results)
        return results

    @with_callback()
    async def hmget(self, key: str, fields: list[str]) -> list[Any]:
        """Get multiple fields from hash in a single batch.

        Args:
            key: Hash key
            fields: List of field names

        Returns:
            The values, in the order of ``fields``

        Raises:
            NoSuchKey: If the key does not exist
            NoSuchField: If any field is missing; no partial result is returned
        """
        batch = self._store.multi(self)
        for field in fields:
            batch.hget(key, field)
        return await batch.exec()

    @with_callback()
    async def hgetall(self, key: str) -> Hash:
        """Get all fields and values from hash.

        Raises:
            NoSuchKey: If the key does not exist
        """
        if not await self._store.exists(key):
            raise FieldStoreException.no_such_key(key)
        return await self._fetch(key)

    @with_callback()
    async def hkeys(self, key: str) -> list[str]:
        """Get all field names in hash, or an empty list if the key is absent."""
        if not await self._store.exists(key):
            return []
        return list(await self._fetch(key))

    @with_callback()
    async def hvals(self, key: str) -> list[Any]:
        """Get all values in hash, or an empty list if the key is absent."""
        if not await self._store.exists(key):
            return []
        return list((await self._fetch(key)).values())

    @with_callback()
    async def hlen(self, key: str) -> int:
        """Get number of fields in hash, or 0 if the key is absent."""
        if not await self._store.exists(key):
            return 0
        return len(await self._fetch(key))

    @with_callback(spread=True)
    async def hdel(self, key: str, field: str) -> FieldWrite:
        """Delete field from hash.

        The remaining hash is written back even when it becomes empty; the
        store key itself is never removed. Emits ``hdel`` with
        ``(key, field, removed_value)``.

        Args:
            key: Hash key
            field: Field name

        Returns:
            The ``(key, field, value)`` that was removed

        Raises:
            NoSuchKey: If the key does not exist
            NoSuchField: If the hash has no such field
        """
        logger.debug("hdel %s.%s", key, field)
        async with self._guard(key):
            if not await self._store.exists(key):
                raise FieldStoreException.no_such_key(key)

            data = await self._fetch(key)
            if field not in data:
                raise FieldStoreException.no_such_field(key, field)

            removed = data.pop(field)
            await self._store.set(key, data)

        self._events.emit("hdel", key, field, removed)
        return FieldWrite(key, field, removed)

    @with_callback()
    async def hincr(self, key: str, field: str) -> Number:
        """Increment field value by one, treating an absent field as 0.

        Emits ``hset`` and then ``hincr`` with ``(key, field, new_value)``.

        Raises:
            InvalidNumericValue: If the current value is not a number
        """
        return await self._add(key, field, 1, "hincr")

    @with_callback()
    async def hincrby(self, key: str, field: str, increment: Number) -> Number:
        """Increment field value by ``increment``.

        Args:
            key: Hash key
            field: Field name
            increment: Number to add

        Returns:
            New value after increment

        Raises:
            InvalidNumericValue: If the current value is not a number
        """
        return await self._add(key, field, increment, "hincr")

    hincrbyfloat = hincrby

    @with_callback()
    async def hdecr(self, key: str, field: str) -> Number:
        """Decrement field value by one, treating an absent field as 0.

        Emits ``hset`` and then ``hdecr`` with ``(key, field, new_value)``.
        """
        return await self._add(key, field, -1, "hdecr")

    @with_callback()
    async def hdecrby(self, key: str, field: str, decrement: Number) -> Number:
        """Decrement field value by ``decrement``.

        Emits ``hset`` and then ``hdecr`` with ``(key, field, new_value)``.

        Args:
            key: Hash key
            field: Field name
            decrement: Number to subtract

        Returns:
            New value after decrement
        """
        if isinstance(decrement, bool) or not isinstance(decrement, (int, float)):
            raise TypeError(f"delta must be a number, got {type(decrement).__name__}")
        return await self._add(key, field, -decrement, "hdecr")

    hdecrbyfloat = hdecrby
