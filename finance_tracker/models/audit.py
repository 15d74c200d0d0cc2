"""
Audit Models for the Finance Tracker

Every mutating action and every authentication attempt is recorded as
an audit event. This provides:
1. Traceability of changes to a user's ledger
2. Debugging information when a load drops corrupt records
3. A short activity history the UI can show

DESIGN DECISION: Audit events never carry passwords. Descriptions are
fixed text plus ids and counts; anything the user typed goes in
`username` or `details`, so a description always fits its limit.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Each flow in the application has its own event type.
    """
    # Authentication
    USER_REGISTERED = "user_registered"
    REGISTRATION_REJECTED = "registration_rejected"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"

    # Ledger changes
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"
    BUDGET_SET = "budget_set"
    INPUT_REJECTED = "input_rejected"

    # Persistence
    USERS_LOADED = "users_loaded"
    USERS_SAVED = "users_saved"
    SAVE_FAILED = "save_failed"
    RECORD_DROPPED = "record_dropped"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - who and what is this about?
    username: Optional[str] = Field(
        default=None,
        description="User the event relates to"
    )
    transaction_id: Optional[int] = Field(
        default=None,
        description="Transaction the event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "username": self.username,
            "transaction_id": self.transaction_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added("alice", 3, "Food", "50.00")
        event = AuditEventBuilder.login_failed("alice")
    """

    @staticmethod
    def user_registered(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_REGISTERED,
            username=username,
            description="User registered",
            is_user_action=True,
        )

    @staticmethod
    def registration_rejected(username: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REGISTRATION_REJECTED,
            severity=AuditSeverity.WARNING,
            username=username,
            description="Registration rejected",
            error_message=reason,
            is_user_action=True,
        )

    @staticmethod
    def login_succeeded(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_SUCCEEDED,
            username=username,
            description="User logged in",
            is_user_action=True,
        )

    @staticmethod
    def login_failed(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_FAILED,
            severity=AuditSeverity.WARNING,
            username=username,
            description="Failed login attempt",
            is_user_action=True,
        )

    @staticmethod
    def logout(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGOUT,
            username=username,
            description="User logged out",
            is_user_action=True,
        )

    @staticmethod
    def transaction_added(
        username: str,
        transaction_id: int,
        category: str,
        amount: str,
        transaction_type: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            username=username,
            transaction_id=transaction_id,
            description=f"Transaction {transaction_id} added",
            details={
                "category": category,
                "amount": amount,
                "type": transaction_type,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_updated(
        username: str,
        transaction_id: int,
        changed_fields: list[str],
        rejected_fields: list[str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            severity=AuditSeverity.WARNING if rejected_fields else AuditSeverity.INFO,
            username=username,
            transaction_id=transaction_id,
            description=f"Transaction {transaction_id} updated ({len(changed_fields)} fields)",
            details={
                "changed_fields": changed_fields,
                "rejected_fields": rejected_fields,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_deleted(username: str, transaction_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            username=username,
            transaction_id=transaction_id,
            description=f"Transaction {transaction_id} deleted",
            is_user_action=True,
        )

    @staticmethod
    def budget_set(username: str, category: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            username=username,
            description="Category budget set",
            details={
                "category": category,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def input_rejected(
        username: Optional[str],
        field: Optional[str],
        reason: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_REJECTED,
            severity=AuditSeverity.WARNING,
            username=username,
            description=f"Input rejected for field: {field or 'unknown'}",
            error_message=reason,
            details={
                "field": field,
            },
            is_user_action=True,
        )

    @staticmethod
    def users_loaded(user_count: int, source: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USERS_LOADED,
            description=f"Loaded {user_count} user profiles",
            details={
                "user_count": user_count,
                "source": source,
            },
        )

    @staticmethod
    def users_saved(user_count: int, destination: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USERS_SAVED,
            severity=AuditSeverity.DEBUG,
            description=f"Saved {user_count} user profiles",
            details={
                "user_count": user_count,
                "destination": destination,
            },
        )

    @staticmethod
    def save_failed(destination: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description="Could not save user profiles",
            error_message=error_message,
            details={
                "destination": destination,
            },
        )

    @staticmethod
    def record_dropped(line_number: int, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_DROPPED,
            severity=AuditSeverity.WARNING,
            description=f"Dropped malformed record on line {line_number}",
            error_message=reason,
            details={
                "line_number": line_number,
            },
        )
