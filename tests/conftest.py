"""Shared fixtures."""

import pytest

from finance_tracker.audit import AuditLogger
from finance_tracker.config import get_settings
from finance_tracker.models.finance import UserProfile
from finance_tracker.orchestrator import FinanceApp
from finance_tracker.services.storage import InMemoryUserStorage


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings for every test so env changes do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(username="alice", password="pw1")


@pytest.fixture
def storage() -> InMemoryUserStorage:
    return InMemoryUserStorage()


@pytest.fixture
def app(storage) -> FinanceApp:
    finance_app = FinanceApp(storage=storage, audit_logger=AuditLogger())
    finance_app.load()
    return finance_app
