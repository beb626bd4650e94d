"""fieldstore - Redis-style hash fields on top of a whole-value key/value store."""

from fieldstore.client import FieldStoreClient
from fieldstore.config import FieldStoreConfig
from fieldstore.events import EventLog, EventSink, NullSink
from fieldstore.exceptions import (
    BatchError,
    FieldAlreadyExists,
    FieldStoreException,
    HashMultiError,
    InvalidNumericValue,
    NoSuchField,
    NoSuchKey,
    StoreError,
    WrongType,
)
from fieldstore.modules.hash import HashManager
from fieldstore.modules.transaction import Batch
from fieldstore.store import MemoryStore, Store
from fieldstore.types import FieldWrite, HashEvent

__version__ = "0.1.0"

__all__ = [
    "FieldStoreClient",
    "FieldStoreConfig",
    "EventLog",
    "EventSink",
    "NullSink",
    "BatchError",
    "FieldAlreadyExists",
    "FieldStoreException",
    "HashMultiError",
    "InvalidNumericValue",
    "NoSuchField",
    "NoSuchKey",
    "StoreError",
    "WrongType",
    "HashManager",
    "Batch",
    "MemoryStore",
    "Store",
    "FieldWrite",
    "HashEvent",
]
