"""Authentication package."""

from finance_tracker.auth.credentials import find_user, login, register

__all__ = ["find_user", "login", "register"]
