"""
Audit Logger

DESIGN DECISION: Every mutating action and every login attempt is logged.
This provides:
1. Traceability of ledger changes
2. Debugging capability when storage is partially corrupt
3. A recent-activity view for the user

The audit logger:
- Is synchronous, like the rest of the application
- Never raises into the calling flow
- Keeps a bounded in-memory history of recent events
"""

import logging
from collections import deque
from typing import Optional

import structlog
from pydantic import ValidationError

from finance_tracker.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route stdlib logging (and so structlog) to stderr at `level`.

    Call once from an entry point; library code never configures handlers.
    """
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory history (for the activity view)
    """

    def __init__(self, history_size: int = 100):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory.
        """
        self._history: deque[AuditEvent] = deque(maxlen=history_size)
        self._logger = structlog.get_logger("finance_tracker.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event locally and remember it."""
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        self._history.append(event)

    def _record(self, build, *args, **kwargs) -> None:
        """Build an event and log it; a bad event is reported, never raised."""
        try:
            event = build(*args, **kwargs)
        except ValidationError as e:
            # Log failure but don't raise
            self._logger.error(
                "audit_event_invalid",
                builder=build.__name__,
                error_count=e.error_count(),
            )
            return
        self.log(event)

    def recent_events(
        self,
        username: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[AuditEvent]:
        """Most recent events first, optionally only one user's."""
        events = [
            e for e in reversed(self._history)
            if username is None or e.username == username
        ]
        return events[:limit] if limit is not None else events

    def log_user_registered(self, username: str) -> None:
        self._record(AuditEventBuilder.user_registered, username)

    def log_registration_rejected(self, username: str, reason: str) -> None:
        self._record(AuditEventBuilder.registration_rejected, username, reason)

    def log_login_succeeded(self, username: str) -> None:
        self._record(AuditEventBuilder.login_succeeded, username)

    def log_login_failed(self, username: str) -> None:
        self._record(AuditEventBuilder.login_failed, username)

    def log_logout(self, username: str) -> None:
        self._record(AuditEventBuilder.logout, username)

    def log_transaction_added(
        self,
        username: str,
        transaction_id: int,
        category: str,
        amount: str,
        transaction_type: str,
    ) -> None:
        self._record(
            AuditEventBuilder.transaction_added,
            username=username,
            transaction_id=transaction_id,
            category=category,
            amount=amount,
            transaction_type=transaction_type,
        )

    def log_transaction_updated(
        self,
        username: str,
        transaction_id: int,
        changed_fields: list[str],
        rejected_fields: list[str],
    ) -> None:
        self._record(
            AuditEventBuilder.transaction_updated,
            username=username,
            transaction_id=transaction_id,
            changed_fields=changed_fields,
            rejected_fields=rejected_fields,
        )

    def log_transaction_deleted(self, username: str, transaction_id: int) -> None:
        self._record(AuditEventBuilder.transaction_deleted, username, transaction_id)

    def log_budget_set(self, username: str, category: str, amount: str) -> None:
        self._record(AuditEventBuilder.budget_set, username, category, amount)

    def log_input_rejected(
        self,
        username: Optional[str],
        field: Optional[str],
        reason: str,
    ) -> None:
        self._record(AuditEventBuilder.input_rejected, username, field, reason)

    def log_users_loaded(self, user_count: int, source: str) -> None:
        self._record(AuditEventBuilder.users_loaded, user_count, source)

    def log_users_saved(self, user_count: int, destination: str) -> None:
        self._record(AuditEventBuilder.users_saved, user_count, destination)

    def log_save_failed(self, destination: str, error_message: str) -> None:
        self._record(AuditEventBuilder.save_failed, destination, error_message)

    def log_record_dropped(self, line_number: int, reason: str) -> None:
        self._record(AuditEventBuilder.record_dropped, line_number, reason)
