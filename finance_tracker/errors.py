"""
Error Taxonomy

Every failure the core can signal derives from FinanceError.
The UI boundary catches FinanceError, shows the message and
returns to the previous menu. Nothing here is fatal.
"""

from typing import Optional


class FinanceError(Exception):
    """Base exception for all finance tracker operations."""
    pass


class ParseError(FinanceError):
    """
    Invalid numeric, enum or text input.

    `field` names the input that failed, so an edit can report
    which fields were left unchanged.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class NotFoundError(FinanceError):
    """Referenced transaction id does not exist."""
    pass


class DuplicateUsernameError(FinanceError):
    """Registration attempted with a username that is already taken."""
    pass


class InvalidCredentialsError(FinanceError):
    """Login failed: unknown username or wrong password."""
    pass


class NotLoggedInError(FinanceError):
    """An operation needed a session but none is active."""
    pass


class StorageError(FinanceError):
    """Could not read or write the storage backend."""
    pass
