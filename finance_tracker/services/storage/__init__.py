"""
Storage Services Package

Provides the abstract storage interface and concrete implementations.
The flat text file is the default backend; the in-memory backend runs
the same codec without touching disk.
"""

from finance_tracker.errors import StorageError
from finance_tracker.services.storage.interface import UserStorageInterface
from finance_tracker.services.storage.flat_file import (
    DroppedRecord,
    FlatFileCodec,
    FlatFileUserStorage,
)
from finance_tracker.services.storage.memory import InMemoryUserStorage

__all__ = [
    # Interface
    "UserStorageInterface",
    # Exceptions
    "StorageError",
    # Flat-file implementation
    "DroppedRecord",
    "FlatFileCodec",
    "FlatFileUserStorage",
    # In-memory implementation
    "InMemoryUserStorage",
]
