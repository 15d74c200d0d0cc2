"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the flat text file as the default backend
2. Use in-memory storage for testing
3. Swap in a real database later without touching the flows

The interface is intentionally tiny: the whole user set is loaded at
startup and the whole set is rewritten after every mutation. There is
no incremental diffing.
"""

from abc import ABC, abstractmethod

from finance_tracker.models.finance import UserProfile


class UserStorageInterface(ABC):
    """
    Abstract interface for user profile storage.

    Any storage implementation must implement these methods.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where data lives (for logs)."""
        pass

    @abstractmethod
    def load_users(self) -> list[UserProfile]:
        """
        Load every stored user profile.

        Returns:
            All profiles, in stored order. Empty if nothing is stored yet.

        Raises:
            StorageError: If the backend exists but cannot be read
        """
        pass

    @abstractmethod
    def save_users(self, users: list[UserProfile]) -> None:
        """
        Replace the stored user set with `users`.

        Raises:
            StorageError: If the write fails
        """
        pass
