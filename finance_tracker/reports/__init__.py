"""Aggregation and report rendering package."""

from finance_tracker.reports.engine import (
    budget_report,
    budget_status,
    categorize_expenses,
    financial_summary,
    list_transactions,
    month_key,
    time_series_report,
    year_key,
)
from finance_tracker.reports.formatting import (
    EXCEEDED_BANNER,
    NO_BUDGETS_BANNER,
    budget_lines,
    format_amount,
    summary_lines,
    time_series_lines,
    transaction_lines,
)

__all__ = [
    # Aggregation
    "budget_report",
    "budget_status",
    "categorize_expenses",
    "financial_summary",
    "list_transactions",
    "month_key",
    "time_series_report",
    "year_key",
    # Rendering
    "EXCEEDED_BANNER",
    "NO_BUDGETS_BANNER",
    "budget_lines",
    "format_amount",
    "summary_lines",
    "time_series_lines",
    "transaction_lines",
]
