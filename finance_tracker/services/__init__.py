"""Services package."""

from finance_tracker.services.storage import (
    DroppedRecord,
    FlatFileCodec,
    FlatFileUserStorage,
    InMemoryUserStorage,
    StorageError,
    UserStorageInterface,
)

__all__ = [
    "DroppedRecord",
    "FlatFileCodec",
    "FlatFileUserStorage",
    "InMemoryUserStorage",
    "StorageError",
    "UserStorageInterface",
]
