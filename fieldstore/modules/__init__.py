"""Data structure modules for fieldstore."""

from fieldstore.modules.hash import HashManager
from fieldstore.modules.transaction import Batch

__all__ = [
    "HashManager",
    "Batch",
]
