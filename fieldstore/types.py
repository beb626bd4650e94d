"""Shared types for fieldstore."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple, Union

# Field values are anything the store can serialize; nested mappings allowed.
FieldValue = Union[str, int, float, bool, None, list[Any], dict[str, Any]]

Hash = dict[str, Any]


class FieldWrite(NamedTuple):
    """Outcome of a field mutation: the key, the field and the value involved."""

    key: str
    field: str
    value: Any


@dataclass(frozen=True)
class HashEvent:
    """A notification produced by a successful hash mutation.

    Attributes:
        name: Event name (``hset``, ``hdel``, ``hincr`` or ``hdecr``)
        args: Positional arguments, normally ``(key, field, value)``
    """

    name: str
    args: tuple[Any, ...] = field(default_factory=tuple)
