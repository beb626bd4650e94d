"""Event sinks for hash mutation notifications."""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from fieldstore.types import HashEvent

logger = logging.getLogger(__name__)

Subscriber = Callable[[HashEvent], None]


class EventSink(Protocol):
    """Anything that accepts fire-and-forget notifications."""

    def emit(self, name: str, *args: Any) -> None: ...


class NullSink:
    """Sink that drops every event."""

    def emit(self, name: str, *args: Any) -> None:
        pass


class EventLog:
    """Append-only record of emitted events with optional subscribers.

    Example:
        >>> events = EventLog()
        >>> events.subscribe(lambda event: print(event.name))
        >>> events.emit("hset", "user:1", "name", "Alice")
        hset
        >>> events.names()
        ['hset']
    """

    def __init__(self) -> None:
        self._events: list[HashEvent] = []
        self._subscribers: list[Subscriber] = []

    def emit(self, name: str, *args: Any) -> None:
        event = HashEvent(name, args)
        self._events.append(event)
        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception:
                logger.exception("Event subscriber failed for %s", name)

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber.

        Args:
            subscriber: Callable invoked with every new ``HashEvent``

        Returns:
            A function that removes the subscriber again
        """
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    @property
    def events(self) -> list[HashEvent]:
        """Get a copy of the recorded events, oldest first."""
        return list(self._events)

    def names(self) -> list[str]:
        """Get the recorded event names, oldest first."""
        return [event.name for event in self._events]

    def clear(self) -> None:
        """Forget all recorded events."""
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
