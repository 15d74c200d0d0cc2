"""
In-Memory Storage

Keeps the encoded text in memory instead of on disk. Data still goes
through the flat-file codec, so tests exercise the real format.
"""

from typing import Optional

from finance_tracker.models.finance import UserProfile
from finance_tracker.services.storage.flat_file import DroppedRecord, FlatFileCodec
from finance_tracker.services.storage.interface import UserStorageInterface


class InMemoryUserStorage(UserStorageInterface):
    """Storage backend for tests and for sessions without a data file."""

    def __init__(self, text: str = "", codec: Optional[FlatFileCodec] = None):
        self.text = text
        self.save_count = 0
        self.last_dropped: list[DroppedRecord] = []
        self._codec = codec or FlatFileCodec()

    @property
    def location(self) -> str:
        return "memory"

    def load_users(self) -> list[UserProfile]:
        users, self.last_dropped = self._codec.decode_with_issues(self.text)
        return users

    def save_users(self, users: list[UserProfile]) -> None:
        self.text = self._codec.encode(users)
        self.save_count += 1
