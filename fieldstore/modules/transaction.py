"""Batch execution (MULTI/EXEC style) for fieldstore."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from fieldstore.callbacks import with_callback
from fieldstore.exceptions import BatchError

logger = logging.getLogger(__name__)

Operation = Callable[..., Awaitable[Any]]


class Batch:
    """Queue operations and run them as one unit (MULTI/EXEC).

    Operations run strictly in the order they were queued. The first failure
    aborts the batch: partial results are discarded and the error is raised.

    When the batch is bound to a target, its coroutine methods can be queued
    by name:

    Example:
        >>> batch = store.multi(hashes)
        >>> batch.hget("user:1", "name")
        >>> batch.hget("user:1", "age")
        >>> name, age = await batch.exec()
    """

    def __init__(self, target: Any = None) -> None:
        """Initialize Batch.

        Args:
            target: Optional object whose methods may be queued by attribute
        """
        self._target = target
        self._queued: list[tuple[Operation, tuple[Any, ...], dict[str, Any]]] = []
        self._executed = False

    def queue(self, operation: Operation, *args: Any, **kwargs: Any) -> Batch:
        """Queue a coroutine function to be called on ``exec``.

        Args:
            operation: Coroutine function to call
            *args: Positional arguments for the call
            **kwargs: Keyword arguments for the call

        Returns:
            The batch itself, for chaining
        """
        if self._executed:
            raise BatchError("Batch has already been executed")
        self._queued.append((operation, args, kwargs))
        return self

    def __getattr__(self, name: str) -> Callable[..., Batch]:
        if name.startswith("_") or self._target is None:
            raise AttributeError(name)
        operation = getattr(self._target, name)

        def queue_operation(*args: Any, **kwargs: Any) -> Batch:
            return self.queue(operation, *args, **kwargs)

        return queue_operation

    def __len__(self) -> int:
        return len(self._queued)

    def discard(self) -> None:
        """Drop every queued operation (DISCARD)."""
        self._queued.clear()

    @with_callback()
    async def exec(self) -> list[Any]:
        """Execute queued operations (EXEC).

        Returns:
            One result per queued operation, in queue order

        Raises:
            BatchError: If the batch was already executed
            Exception: The first error raised by a queued operation
        """
        if self._executed:
            raise BatchError("Batch has already been executed")
        self._executed = True

        queued, self._queued = self._queued, []
        results: list[Any] = []
        for index, (operation, args, kwargs) in enumerate(queued):
            try:
                results.append(await operation(*args, **kwargs))
            except Exception:
                logger.debug(
                    "Batch aborted at operation %d of %d", index + 1, len(queued)
                )
                raise
        return results
