"""
Aggregation Engine

DESIGN DECISION: Aggregation is DETERMINISTIC and side-effect free.
Every report is computed on demand from the in-memory transaction list;
nothing is cached or stored.

None of these functions raise. Malformed data is filtered out
(time-series) or treated as zero (budget report).

ORDERING: outputs are sorted explicitly after aggregation instead of
relying on a container's iteration order.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional

from finance_tracker.config import get_settings
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
from finance_tracker.validation import parse_date_parts


ZERO = Decimal("0")


def list_transactions(
    transactions: Iterable[Transaction],
    category: Optional[str] = None,
) -> list[Transaction]:
    """Transactions in insertion order, optionally filtered by exact category."""
    if not category:
        return list(transactions)
    return [t for t in transactions if t.category == category]


def categorize_expenses(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """
    Sum expense amounts per category.

    Categories without expenses are absent, not zero-valued.
    """
    totals: dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction.type is TransactionType.EXPENSE:
            totals[transaction.category] = totals.get(transaction.category, ZERO) + transaction.amount
    return totals


def budget_status(
    budgeted: Decimal,
    spent: Decimal,
    warning_ratio: Decimal,
) -> BudgetStatus:
    """Classify one category; EXCEEDED wins over WARNING."""
    if spent > budgeted:
        return BudgetStatus.EXCEEDED
    if budgeted > 0 and spent / budgeted >= warning_ratio:
        return BudgetStatus.WARNING
    return BudgetStatus.OK


def budget_report(
    profile: UserProfile,
    warning_ratio: Optional[Decimal] = None,
) -> BudgetReport:
    """
    Compare each budgeted category against its expense total.

    Only categories with a budget entry are reported, sorted by name.
    """
    if warning_ratio is None:
        warning_ratio = get_settings().reports.budget_warning_ratio

    expenses = categorize_expenses(profile.transactions)

    lines = []
    for category in sorted(profile.budget_per_category):
        budgeted = profile.budget_per_category[category]
        spent = expenses.get(category, ZERO)
        lines.append(BudgetLine(
            category=category,
            budgeted=budgeted,
            spent=spent,
            status=budget_status(budgeted, spent, warning_ratio),
        ))

    return BudgetReport(
        lines=lines,
        any_exceeded=any(line.status is BudgetStatus.EXCEEDED for line in lines),
        no_budgets=not profile.budget_per_category,
    )


def financial_summary(transactions: Iterable[Transaction]) -> FinancialSummary:
    """Total income, total expense and their difference."""
    total_income = ZERO
    total_expense = ZERO
    for transaction in transactions:
        if transaction.type is TransactionType.INCOME:
            total_income += transaction.amount
        elif transaction.type is TransactionType.EXPENSE:
            total_expense += transaction.amount

    return FinancialSummary(
        total_income=total_income,
        total_expense=total_expense,
        net=total_income - total_expense,
    )


def month_key(year: int, month: int) -> str:
    """
    "YYYY-MM" bucket key.

    Months below 10 get a leading zero so string order matches
    chronological order.
    """
    return f"{year}-{'0' if month < 10 else ''}{month}"


def year_key(year: int) -> str:
    return str(year)


def _series(
    income: dict[str, Decimal],
    expense: dict[str, Decimal],
) -> list[PeriodTotals]:
    periods = sorted(set(income) | set(expense))
    return [
        PeriodTotals(
            period=period,
            income=income.get(period, ZERO),
            expense=expense.get(period, ZERO),
            net=income.get(period, ZERO) - expense.get(period, ZERO),
        )
        for period in periods
    ]


def time_series_report(transactions: Iterable[Transaction]) -> TimeSeriesReport:
    """
    Bucket income and expense by month and by year.

    Transactions whose date does not parse are left out of this report
    only; they still count in listings and the summary.
    """
    monthly_income: dict[str, Decimal] = defaultdict(lambda: ZERO)
    monthly_expense: dict[str, Decimal] = defaultdict(lambda: ZERO)
    yearly_income: dict[str, Decimal] = defaultdict(lambda: ZERO)
    yearly_expense: dict[str, Decimal] = defaultdict(lambda: ZERO)

    for transaction in transactions:
        parts = parse_date_parts(transaction.date)
        if parts is None:
            continue
        year, month, _day = parts

        if transaction.type is TransactionType.INCOME:
            monthly_income[month_key(year, month)] += transaction.amount
            yearly_income[year_key(year)] += transaction.amount
        else:
            monthly_expense[month_key(year, month)] += transaction.amount
            yearly_expense[year_key(year)] += transaction.amount

    return TimeSeriesReport(
        monthly=_series(monthly_income, monthly_expense),
        yearly=_series(yearly_income, yearly_expense),
    )
