"""
Report Rendering

Turns reports into plain text lines for the display collaborator's
"show these lines and wait" primitive. Front ends that render tables
themselves (Streamlit) use the report models directly.
"""

from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Iterable, Optional

from finance_tracker.config import get_settings
from finance_tracker.models.finance import (
    BudgetReport,
    BudgetStatus,
    FinancialSummary,
    PeriodTotals,
    TimeSeriesReport,
    Transaction,
)


EXCEEDED_BANNER = "Warning: you have exceeded your budget in at least one category!"
NO_BUDGETS_BANNER = "No budgets set yet."

CENTS = Decimal("0.01")

_STATUS_MARKERS = {
    BudgetStatus.OK: "",
    BudgetStatus.WARNING: "  [WARNING: close to budget]",
    BudgetStatus.EXCEEDED: "  [EXCEEDED]",
}


def format_amount(amount: Decimal) -> str:
    """Amount with exactly two decimal places, halves rounded away from zero."""
    # Enough precision for every integer digit plus cents, however large
    context = Context(prec=max(28, amount.adjusted() + 3))
    return f"{amount.quantize(CENTS, rounding=ROUND_HALF_UP, context=context):.2f}"


def truncate(text: str, limit: int) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def transaction_lines(
    transactions: Iterable[Transaction],
    preview_length: Optional[int] = None,
) -> list[str]:
    """One line per transaction: id | date | category | description | type | $amount."""
    if preview_length is None:
        preview_length = get_settings().reports.description_preview_length

    lines = ["ID | Date | Category | Description | Type | Amount"]
    for t in transactions:
        lines.append(" | ".join([
            str(t.id),
            t.date,
            t.category,
            truncate(t.description, preview_length),
            t.type.label,
            f"${format_amount(t.amount)}",
        ]))
    if len(lines) == 1:
        lines.append("No transactions found.")
    return lines


def summary_lines(summary: FinancialSummary) -> list[str]:
    return [
        f"Total Income: ${format_amount(summary.total_income)}",
        f"Total Expense: ${format_amount(summary.total_expense)}",
        f"Net Balance: ${format_amount(summary.net)}",
    ]


def budget_lines(report: BudgetReport) -> list[str]:
    """Per-category budget lines followed by the summary banner, if any."""
    lines = [
        f"{line.category}: Budget = ${format_amount(line.budgeted)}, "
        f"Spent = ${format_amount(line.spent)}{_STATUS_MARKERS[line.status]}"
        for line in report.lines
    ]

    if report.any_exceeded:
        lines.append("")
        lines.append(EXCEEDED_BANNER)
    elif report.no_budgets:
        lines.append(NO_BUDGETS_BANNER)

    return lines


def _period_line(totals: PeriodTotals) -> str:
    return (
        f"{totals.period}: Income = ${format_amount(totals.income)}, "
        f"Expense = ${format_amount(totals.expense)}, "
        f"Net = ${format_amount(totals.net)}"
    )


def time_series_lines(report: TimeSeriesReport) -> list[str]:
    lines = ["Monthly Summary:"]
    lines.extend(_period_line(p) for p in report.monthly)
    if not report.monthly:
        lines.append("No dated transactions.")

    lines.append("")
    lines.append("Yearly Summary:")
    lines.extend(_period_line(p) for p in report.yearly)
    if not report.yearly:
        lines.append("No dated transactions.")

    return lines
