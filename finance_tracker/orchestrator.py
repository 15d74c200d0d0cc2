"""
Main Orchestrator for the Finance Tracker

This module ties together storage, authentication, ledger operations and
reports, and defines the flows every front end calls:
1. Session (load → register/login → logout)
2. Ledger mutation (validate, mutate profile, rewrite storage, then audit)
3. Reports (computed on demand from the current profile)

DESIGN DECISION: Session state is an explicit FinanceApp value, not a
process-wide global. The current user is held by USERNAME and resolved
against the loaded user list on every use, so mutating the list can never
leave a dangling reference.
"""

from decimal import Decimal
from typing import Optional

import structlog

from finance_tracker import auth, ledger, reports
from finance_tracker.audit import AuditLogger
from finance_tracker.config import get_settings
from finance_tracker.errors import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    NotLoggedInError,
    ParseError,
    StorageError,
)
from finance_tracker.ledger import EditResult
from finance_tracker.models.finance import (
    BudgetReport,
    FinancialSummary,
    TimeSeriesReport,
    Transaction,
    UserProfile,
)
from finance_tracker.services.storage import (
    FlatFileUserStorage,
    UserStorageInterface,
)


logger = structlog.get_logger(__name__)


class FinanceApp:
    """
    Application state plus the flows that operate on it.

    Owns:
    - the full in-memory user list
    - the storage backend (rewritten after every mutation)
    - the audit logger
    - the current session, as a username
    """

    def __init__(
        self,
        storage: UserStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._users: list[UserProfile] = []
        self._current_username: Optional[str] = None

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    @property
    def users(self) -> list[UserProfile]:
        return self._users

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    @property
    def current_username(self) -> Optional[str]:
        return self._current_username

    @property
    def is_logged_in(self) -> bool:
        return self._resolve_current() is not None

    def _resolve_current(self) -> Optional[UserProfile]:
        if self._current_username is None:
            return None
        return auth.find_user(self._users, self._current_username)

    def current_profile(self) -> UserProfile:
        """
        The logged-in user's profile, looked up fresh.

        Raises:
            NotLoggedInError: If there is no session or the user vanished
        """
        profile = self._resolve_current()
        if profile is None:
            self._current_username = None
            raise NotLoggedInError("Please log in first")
        return profile

    def load(self) -> list[UserProfile]:
        """Load all profiles from storage, replacing what is in memory."""
        self._users = self._storage.load_users()
        self._current_username = None

        for dropped in getattr(self._storage, "last_dropped", []):
            self._audit_logger.log_record_dropped(dropped.line_number, dropped.reason)
        self._audit_logger.log_users_loaded(len(self._users), self._storage.location)

        return self._users

    def save(self) -> None:
        """
        Rewrite the full user set to storage.

        Raises:
            StorageError: If the write fails (already audited)
        """
        try:
            self._storage.save_users(self._users)
        except StorageError as e:
            self._audit_logger.log_save_failed(self._storage.location, str(e))
            raise
        self._audit_logger.log_users_saved(len(self._users), self._storage.location)

    def register(self, username: str, password: str) -> UserProfile:
        """
        Create a profile, persist it immediately, and log it in.

        Raises:
            ParseError: If the username or password is unusable
            DuplicateUsernameError: If the username is taken
        """
        try:
            profile = auth.register(self._users, username, password)
        except (ParseError, DuplicateUsernameError) as e:
            self._audit_logger.log_registration_rejected(username, str(e))
            raise

        self._current_username = profile.username
        self.save()
        self._audit_logger.log_user_registered(profile.username)
        return profile

    def login(self, username: str, password: str) -> UserProfile:
        """
        Start a session.

        Raises:
            InvalidCredentialsError: On unknown username or wrong password
        """
        try:
            profile = auth.login(self._users, username, password)
        except InvalidCredentialsError:
            self._audit_logger.log_login_failed(username)
            raise

        self._current_username = profile.username
        self._audit_logger.log_login_succeeded(profile.username)
        return profile

    def logout(self) -> None:
        if self._current_username is not None:
            self._audit_logger.log_logout(self._current_username)
        self._current_username = None

    # -------------------------------------------------------------------------
    # Ledger mutations (each one saves)
    # -------------------------------------------------------------------------

    def _rejected(self, error: ParseError) -> None:
        self._audit_logger.log_input_rejected(self._current_username, error.field, error.message)

    def add_transaction(
        self,
        date: str,
        category: str,
        description: str,
        amount_text: str,
        type_text: str,
    ) -> Transaction:
        profile = self.current_profile()
        try:
            transaction = ledger.add_transaction(
                profile, date, category, description, amount_text, type_text
            )
        except ParseError as e:
            self._rejected(e)
            raise

        self.save()
        self._audit_logger.log_transaction_added(
            username=profile.username,
            transaction_id=transaction.id,
            category=transaction.category,
            amount=reports.format_amount(transaction.amount),
            transaction_type=transaction.type.label,
        )
        return transaction

    def edit_transaction(
        self,
        transaction_id: int,
        date: Optional[str] = None,
        category: Optional[str] = None,
        description: Optional[str] = None,
        amount_text: Optional[str] = None,
        type_text: Optional[str] = None,
    ) -> EditResult:
        """
        Apply an edit; rejected fields are reported in the result.

        Raises:
            NotFoundError: If the id does not exist
        """
        profile = self.current_profile()
        result = ledger.edit_transaction(
            profile,
            transaction_id,
            date=date,
            category=category,
            description=description,
            amount_text=amount_text,
            type_text=type_text,
        )

        self.save()
        for error in result.errors:
            self._rejected(error)
        self._audit_logger.log_transaction_updated(
            username=profile.username,
            transaction_id=transaction_id,
            changed_fields=result.changed_fields,
            rejected_fields=result.rejected_fields,
        )
        return result

    def delete_transaction(self, transaction_id: int) -> Transaction:
        profile = self.current_profile()
        transaction = ledger.delete_transaction(profile, transaction_id)
        self.save()
        self._audit_logger.log_transaction_deleted(profile.username, transaction_id)
        return transaction

    def set_budget(self, category: str, amount_text: str) -> Decimal:
        profile = self.current_profile()
        try:
            amount = ledger.set_budget(profile, category, amount_text)
        except ParseError as e:
            self._rejected(e)
            raise

        self.save()
        self._audit_logger.log_budget_set(
            profile.username, category.strip(), reports.format_amount(amount)
        )
        return amount

    # -------------------------------------------------------------------------
    # Reports (read-only)
    # -------------------------------------------------------------------------

    def transactions(self, category: Optional[str] = None) -> list[Transaction]:
        return reports.list_transactions(self.current_profile().transactions, category)

    def find_transaction(self, transaction_id: int) -> Transaction:
        return ledger.find_transaction(self.current_profile(), transaction_id)

    def summary(self) -> FinancialSummary:
        return reports.financial_summary(self.current_profile().transactions)

    def expenses_by_category(self) -> dict[str, Decimal]:
        totals = reports.categorize_expenses(self.current_profile().transactions)
        return {category: totals[category] for category in sorted(totals)}

    def budget_report(self) -> BudgetReport:
        return reports.budget_report(self.current_profile())

    def time_series_report(self) -> TimeSeriesReport:
        return reports.time_series_report(self.current_profile().transactions)


def create_app(
    storage: Optional[UserStorageInterface] = None,
    audit_logger: Optional[AuditLogger] = None,
    load: bool = True,
) -> FinanceApp:
    """
    Factory function to create the application.

    Args:
        storage: Storage backend. Defaults to the configured flat file.
        audit_logger: Audit logger. Defaults to a fresh local-only logger.
        load: Whether to load users from storage immediately.

    Returns:
        A FinanceApp with no active session.
    """
    if storage is None:
        storage = FlatFileUserStorage()

    app = FinanceApp(storage=storage, audit_logger=audit_logger)
    if load:
        app.load()
    logger.info("finance_app_created", storage=storage.location, environment=get_settings().app.app_environment)
    return app
