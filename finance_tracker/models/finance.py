"""
Core Data Models for the Finance Tracker

These models define the schemas for all data flowing through the system:
the persisted entities (Transaction, UserProfile) and the derived
report values produced by the aggregation engine.

DESIGN DECISION: Entities validate on assignment. Edits overwrite fields
in place, so an assignment must be checked just like construction.
"""

from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """
    Direction of a transaction.

    The value is the single character written to storage.
    """
    INCOME = "I"
    EXPENSE = "E"

    @property
    def label(self) -> str:
        return "Income" if self is TransactionType.INCOME else "Expense"


class BudgetStatus(str, Enum):
    """Budget-vs-spend status, in order of increasing severity."""
    OK = "ok"
    WARNING = "warning"       # spent is at or above the warning ratio
    EXCEEDED = "exceeded"     # spent is strictly above the budget


# =============================================================================
# ENTITIES
# =============================================================================

class Transaction(BaseModel):
    """
    A single dated income or expense entry.

    `date` is kept as entered ("YYYY-MM-DD" expected). It is only
    interpreted numerically by the time-series report.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(
        ...,
        ge=1,
        description="Identifier, unique per user and never reassigned"
    )
    date: str = Field(
        ...,
        description="Transaction date as entered, normally YYYY-MM-DD"
    )
    category: str = Field(
        ...,
        description="Free-text category label"
    )
    description: str = Field(
        default="",
        description="Free-text description"
    )
    amount: Annotated[
        Decimal,
        Field(ge=0, description="Non-negative amount")
    ]
    type: TransactionType = Field(
        ...,
        description="Income or Expense"
    )

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE


class UserProfile(BaseModel):
    """
    One registered user's credentials plus their private data.

    SECURITY NOTE: the password is stored and compared in clear text.
    That is a known weakness of the storage format, not a feature.
    """
    model_config = ConfigDict(validate_assignment=True)

    username: str = Field(
        ...,
        min_length=1,
        description="Username, unique across all profiles"
    )
    password: str = Field(
        ...,
        repr=False,
        description="Password in clear text"
    )
    transactions: list[Transaction] = Field(
        default_factory=list,
        description="Transactions in insertion order"
    )
    budget_per_category: dict[str, Annotated[Decimal, Field(ge=0)]] = Field(
        default_factory=dict,
        description="Budget ceiling per category"
    )
    next_transaction_id: int = Field(
        default=1,
        ge=1,
        description="Next id to issue; always above every id issued so far"
    )

    @property
    def max_transaction_id(self) -> int:
        """Highest id currently held, or 0 with no transactions."""
        return max((t.id for t in self.transactions), default=0)


# =============================================================================
# REPORT MODELS
# =============================================================================

class BudgetLine(BaseModel):
    """Budget-vs-spend comparison for one category."""

    category: str
    budgeted: Decimal
    spent: Decimal
    status: BudgetStatus


class BudgetReport(BaseModel):
    """
    Budget report for a profile.

    `lines` is sorted by category name. `no_budgets` is distinct from
    "nothing exceeded" so the UI can show a different banner.
    """

    lines: list[BudgetLine] = Field(default_factory=list)
    any_exceeded: bool = False
    no_budgets: bool = True


class FinancialSummary(BaseModel):
    """Totals across all transactions."""

    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    net: Decimal = Decimal("0")


class PeriodTotals(BaseModel):
    """Income, expense and net for one month ("YYYY-MM") or year ("YYYY")."""

    period: str
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    net: Decimal = Decimal("0")


class TimeSeriesReport(BaseModel):
    """Monthly and yearly series, each sorted ascending by period."""

    monthly: list[PeriodTotals] = Field(default_factory=list)
    yearly: list[PeriodTotals] = Field(default_factory=list)
