"""Completion-callback support for coroutine operations."""

from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

Callback = Callable[..., Any]


def with_callback(*, spread: bool = False) -> Callable[[F], F]:
    """Let a coroutine method also report its outcome to a ``callback`` keyword.

    The wrapped coroutine still returns its result or raises its error. When a
    callback is given it is invoked exactly once: ``callback(None, result)``
    on success (``callback(None, *result)`` when ``spread`` is set) or
    ``callback(error)`` before the error propagates.

    Args:
        spread: Unpack a tuple result into separate callback arguments
    """

    def decorator(method: F) -> F:
        @functools.wraps(method)
        async def wrapper(*args: Any, callback: Callback | None = None, **kwargs: Any) -> Any:
            try:
                result = await method(*args, **kwargs)
            except Exception as exc:
                if callback is not None:
                    callback(exc)
                raise

            if callback is not None:
                if spread:
                    callback(None, *result)
                else:
                    callback(None, result)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
