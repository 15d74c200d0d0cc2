"""
Data Models Package

This package contains all Pydantic models used in the finance tracker.
All data flowing through the system must conform to these schemas.
"""

from finance_tracker.models.finance import (
    BudgetLine,
    BudgetReport,
    BudgetStatus,
    FinancialSummary,
    PeriodTotals,
    TimeSeriesReport,
    Transaction,
    TransactionType,
    UserProfile,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Finance models
    "BudgetLine",
    "BudgetReport",
    "BudgetStatus",
    "FinancialSummary",
    "PeriodTotals",
    "TimeSeriesReport",
    "Transaction",
    "TransactionType",
    "UserProfile",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
