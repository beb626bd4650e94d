"""Exceptions raised by the fieldstore package."""

from __future__ import annotations

from typing import Any


class FieldStoreException(Exception):
    """Base exception for all fieldstore errors.

    Args:
        message: Human readable description of the failure
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @classmethod
    def no_such_key(cls, key: str) -> NoSuchKey:
        """Create an error for a hash key the store reports absent."""
        return NoSuchKey(key)

    @classmethod
    def no_such_field(cls, key: str, field: str) -> NoSuchField:
        """Create an error for a field missing from an existing hash."""
        return NoSuchField(key, field)

    @classmethod
    def field_already_exists(cls, key: str, field: str) -> FieldAlreadyExists:
        """Create an error for a conditional set on a present field."""
        return FieldAlreadyExists(key, field)

    @classmethod
    def invalid_numeric_value(cls, key: str, field: str, value: Any) -> InvalidNumericValue:
        """Create an error for a field value that does not parse as a number."""
        return InvalidNumericValue(key, field, value)

    @classmethod
    def wrong_type(cls, key: str, value: Any) -> WrongType:
        """Create an error for a key holding a non-mapping value."""
        return WrongType(key, value)

    @classmethod
    def http_error(cls, message: str, status_code: int) -> StoreError:
        """Create an HTTP error."""
        return StoreError(f"HTTP Error ({status_code}): {message}", status_code=status_code)

    @classmethod
    def server_error(cls, message: str) -> StoreError:
        """Create a server error."""
        return StoreError(f"Server Error: {message}")

    @classmethod
    def network_error(cls, message: str) -> StoreError:
        """Create a network error."""
        return StoreError(f"Network Error: {message}")

    @classmethod
    def invalid_response(cls, message: str) -> StoreError:
        """Create an invalid response error."""
        return StoreError(f"Invalid Response: {message}")

    @classmethod
    def invalid_config(cls, message: str) -> FieldStoreException:
        """Create an invalid configuration error."""
        return cls(f"Invalid Configuration: {message}")


class NoSuchKey(FieldStoreException):
    """The store reports the hash key as absent."""

    def __init__(self, key: str) -> None:
        super().__init__(f"no such key: {key!r}")
        self.key = key


class NoSuchField(FieldStoreException):
    """The hash exists but does not contain the field."""

    def __init__(self, key: str, field: str) -> None:
        super().__init__(f"no such field: {field!r} in {key!r}")
        self.key = key
        self.field = field


class FieldAlreadyExists(FieldStoreException):
    """Conditional set attempted on a field that is already present."""

    def __init__(self, key: str, field: str) -> None:
        super().__init__(f"field already exists: {field!r} in {key!r}")
        self.key = key
        self.field = field


class InvalidNumericValue(FieldStoreException):
    """The current field value cannot be used for arithmetic."""

    def __init__(self, key: str, field: str, value: Any) -> None:
        super().__init__(f"value is not a number: {field!r} in {key!r} holds {value!r}")
        self.key = key
        self.field = field
        self.value = value


class WrongType(FieldStoreException):
    """A key used as a hash holds a value that is not a mapping."""

    def __init__(self, key: str, value: Any) -> None:
        super().__init__(
            f"wrong type: {key!r} holds {type(value).__name__}, not a hash"
        )
        self.key = key


class StoreError(FieldStoreException):
    """Failure surfaced by the underlying store."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BatchError(FieldStoreException):
    """Misuse of a batch, such as executing it twice."""


class HashMultiError(FieldStoreException):
    """One or more fields of a multi-field set failed.

    Attributes:
        errors: The per-field failures, in field order
        results: The writes that did apply, in field order
    """

    def __init__(self, errors: list[Exception], results: list[Any] | None = None) -> None:
        noun = "field" if len(errors) == 1 else "fields"
        super().__init__(f"{len(errors)} {noun} failed to set: {errors[0]}")
        self.errors = errors
        self.results = results or []
