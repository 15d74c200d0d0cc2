"""
Authentication Check

Username/password lookup against the loaded profiles.

SECURITY NOTE: passwords are compared by plain string equality, exactly
as stored. There is no hashing and no constant-time comparison; the
storage format keeps clear-text passwords. Treat this as a known
weakness, not something to build on.
"""

from typing import Optional

from finance_tracker.errors import DuplicateUsernameError, InvalidCredentialsError
from finance_tracker.models.finance import UserProfile
from finance_tracker.validation import check_text_field


def find_user(users: list[UserProfile], username: str) -> Optional[UserProfile]:
    """Exact, case-sensitive username lookup."""
    for user in users:
        if user.username == username:
            return user
    return None


def register(users: list[UserProfile], username: str, password: str) -> UserProfile:
    """
    Create a new profile and append it to the user set.

    The caller persists the updated set.

    Raises:
        ParseError: If the username or password is blank or unstorable
        DuplicateUsernameError: If the username is already taken
    """
    username_result = check_text_field(username, "username")
    if not username_result.ok:
        raise username_result.error

    # Checked for storability only; the password itself is kept verbatim
    password_result = check_text_field(password, "password")
    if not password_result.ok:
        raise password_result.error

    if find_user(users, username_result.value) is not None:
        raise DuplicateUsernameError(f"Username already exists: {username_result.value}")

    profile = UserProfile(username=username_result.value, password=password)
    users.append(profile)
    return profile


def login(users: list[UserProfile], username: str, password: str) -> UserProfile:
    """
    Return the profile whose username and password both match.

    Raises:
        InvalidCredentialsError: If either does not match. The message
            does not reveal which one.
    """
    user = find_user(users, (username or "").strip())
    if user is None or user.password != password:
        raise InvalidCredentialsError("Invalid username or password")
    return user
