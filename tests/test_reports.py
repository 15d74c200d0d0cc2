"""Tests for the aggregation engine and report rendering."""

import pytest
from decimal import Decimal

from finance_tracker.ledger import add_transaction, set_budget
from finance_tracker.models.finance import BudgetStatus
from finance_tracker.reports import (
    EXCEEDED_BANNER,
    NO_BUDGETS_BANNER,
    budget_lines,
    budget_report,
    budget_status,
    categorize_expenses,
    financial_summary,
    format_amount,
    list_transactions,
    month_key,
    summary_lines,
    time_series_lines,
    time_series_report,
    transaction_lines,
)


@pytest.fixture
def ledger(profile):
    """A profile with a mix of income and expenses."""
    add_transaction(profile, "2024-01-15", "Salary", "January pay", "2000", "I")
    add_transaction(profile, "2024-01-20", "Food", "Groceries", "120.50", "E")
    add_transaction(profile, "2023-10-02", "Rent", "", "900", "E")
    add_transaction(profile, "2023-09-30", "Salary", "", "1800", "I")
    add_transaction(profile, "2024-01-22", "Food", "Dinner", "30", "E")
    return profile


class TestListTransactions:
    """Tests for list_transactions."""

    def test_all_in_insertion_order(self, ledger):
        """Test no filter returns everything in order."""
        assert [t.id for t in list_transactions(ledger.transactions)] == [1, 2, 3, 4, 5]

    def test_exact_category_filter(self, ledger):
        """Test the filter matches categories exactly."""
        assert [t.id for t in list_transactions(ledger.transactions, "Food")] == [2, 5]
        assert list_transactions(ledger.transactions, "food") == []


class TestCategorizeExpenses:
    """Tests for categorize_expenses."""

    def test_sums_per_category(self, ledger):
        """Test expense totals per category."""
        assert categorize_expenses(ledger.transactions) == {
            "Food": Decimal("150.50"),
            "Rent": Decimal("900"),
        }

    def test_income_only_category_absent(self, ledger):
        """Test categories with no expenses do not appear."""
        assert "Salary" not in categorize_expenses(ledger.transactions)

    def test_empty(self):
        assert categorize_expenses([]) == {}


class TestFinancialSummary:
    """Tests for financial_summary."""

    def test_net_is_income_minus_expense(self, ledger):
        """Test net balance identity."""
        summary = financial_summary(ledger.transactions)
        assert summary.total_income == Decimal("3800")
        assert summary.total_expense == Decimal("1050.50")
        assert summary.net == summary.total_income - summary.total_expense

    def test_expense_only(self, profile):
        """Test a single expense gives a negative net."""
        add_transaction(profile, "2024-03-05", "Food", "", "50", "E")
        summary = financial_summary(profile.transactions)
        assert summary.total_income == 0
        assert summary.total_expense == Decimal("50")
        assert summary.net == Decimal("-50")


class TestBudgetStatus:
    """Tests for budget_status thresholds."""

    @pytest.mark.parametrize("spent,expected", [
        ("0", BudgetStatus.OK),
        ("89", BudgetStatus.OK),
        ("90", BudgetStatus.WARNING),
        ("95", BudgetStatus.WARNING),
        ("100", BudgetStatus.WARNING),
        ("101", BudgetStatus.EXCEEDED),
    ])
    def test_thresholds(self, spent, expected):
        """Test classification against a budget of 100."""
        assert budget_status(Decimal("100"), Decimal(spent), Decimal("0.90")) is expected

    def test_zero_budget(self):
        """Test a zero budget is exceeded by any spending."""
        assert budget_status(Decimal("0"), Decimal("0"), Decimal("0.90")) is BudgetStatus.OK
        assert budget_status(Decimal("0"), Decimal("1"), Decimal("0.90")) is BudgetStatus.EXCEEDED


class TestBudgetReport:
    """Tests for budget_report."""

    def test_no_budgets(self, ledger):
        """Test the no-budgets flag."""
        report = budget_report(ledger)
        assert report.no_budgets is True
        assert report.lines == []
        assert report.any_exceeded is False

    def test_lines_sorted_and_unbudgeted_excluded(self, ledger):
        """Test only budgeted categories appear, in name order."""
        set_budget(ledger, "Rent", "800")
        set_budget(ledger, "Food", "1000")
        set_budget(ledger, "Travel", "300")
        report = budget_report(ledger)

        assert [line.category for line in report.lines] == ["Food", "Rent", "Travel"]
        statuses = {line.category: line.status for line in report.lines}
        assert statuses == {
            "Food": BudgetStatus.OK,
            "Rent": BudgetStatus.EXCEEDED,
            "Travel": BudgetStatus.OK,
        }
        assert report.any_exceeded is True
        assert report.no_budgets is False

    def test_budgeted_category_without_spending(self, ledger):
        """Test a budget with no expenses shows zero spent."""
        set_budget(ledger, "Travel", "300")
        line = budget_report(ledger).lines[0]
        assert line.spent == 0

    def test_warning_line(self, profile):
        """Test spending 95 against 100 warns but does not exceed."""
        set_budget(profile, "Food", "100")
        add_transaction(profile, "2024-03-05", "Food", "", "95", "E")
        report = budget_report(profile)
        assert report.lines[0].status is BudgetStatus.WARNING
        assert report.any_exceeded is False

    def test_warning_ratio_from_settings(self, profile, monkeypatch):
        """Test the warning threshold is configurable."""
        monkeypatch.setenv("FINANCE_REPORT_BUDGET_WARNING_RATIO", "0.5")
        set_budget(profile, "Food", "100")
        add_transaction(profile, "2024-03-05", "Food", "", "60", "E")
        assert budget_report(profile).lines[0].status is BudgetStatus.WARNING

    def test_explicit_ratio_wins(self, profile):
        set_budget(profile, "Food", "100")
        add_transaction(profile, "2024-03-05", "Food", "", "60", "E")
        report = budget_report(profile, warning_ratio=Decimal("0.5"))
        assert report.lines[0].status is BudgetStatus.WARNING


class TestTimeSeries:
    """Tests for time_series_report."""

    def test_month_key_zero_padding(self):
        """Test single-digit months are padded."""
        assert month_key(2024, 3) == "2024-03"
        assert month_key(2023, 10) == "2023-10"

    def test_monthly_chronological_order(self, ledger):
        """Test months sort chronologically across years."""
        report = time_series_report(ledger.transactions)
        assert [p.period for p in report.monthly] == ["2023-09", "2023-10", "2024-01"]
        assert [p.period for p in report.yearly] == ["2023", "2024"]

    def test_expense_only_month_included(self, ledger):
        """Test a month with only expenses still appears."""
        october = time_series_report(ledger.transactions).monthly[1]
        assert october.period == "2023-10"
        assert october.income == 0
        assert october.expense == Decimal("900")
        assert october.net == Decimal("-900")

    def test_period_totals(self, ledger):
        """Test per-period sums and net."""
        report = time_series_report(ledger.transactions)
        january = report.monthly[2]
        assert january.income == Decimal("2000")
        assert january.expense == Decimal("150.50")
        assert january.net == Decimal("1849.50")

        year_2023 = report.yearly[0]
        assert year_2023.income == Decimal("1800")
        assert year_2023.expense == Decimal("900")

    def test_unparseable_dates_excluded(self, profile):
        """Test bad dates drop out of the series but not the summary."""
        add_transaction(profile, "yesterday", "Food", "", "10", "E")
        add_transaction(profile, "2024-02-01", "Food", "", "5", "E")

        report = time_series_report(profile.transactions)
        assert [p.period for p in report.monthly] == ["2024-02"]
        assert report.monthly[0].expense == Decimal("5")
        assert financial_summary(profile.transactions).total_expense == Decimal("15")

    def test_empty(self):
        report = time_series_report([])
        assert report.monthly == []
        assert report.yearly == []


class TestFormatting:
    """Tests for the text renderers."""

    def test_transaction_lines(self, profile):
        """Test header, row layout and description preview."""
        add_transaction(profile, "2024-03-05", "Food", "A very long description for lunch", "50", "E")
        lines = transaction_lines(profile.transactions, preview_length=10)
        assert lines[0] == "ID | Date | Category | Description | Type | Amount"
        assert lines[1] == "1 | 2024-03-05 | Food | A very lon... | Expense | $50.00"

    def test_transaction_lines_empty(self):
        assert transaction_lines([])[-1] == "No transactions found."

    def test_summary_lines(self, profile):
        add_transaction(profile, "2024-03-05", "Food", "", "50", "E")
        assert summary_lines(financial_summary(profile.transactions)) == [
            "Total Income: $0.00",
            "Total Expense: $50.00",
            "Net Balance: $-50.00",
        ]

    def test_budget_lines_with_exceeded_banner(self, profile):
        """Test markers and the exceeded banner."""
        set_budget(profile, "Food", "100")
        set_budget(profile, "Rent", "500")
        add_transaction(profile, "2024-03-05", "Food", "", "95", "E")
        add_transaction(profile, "2024-03-06", "Rent", "", "600", "E")
        lines = budget_lines(budget_report(profile))
        assert lines[0] == "Food: Budget = $100.00, Spent = $95.00  [WARNING: close to budget]"
        assert lines[1] == "Rent: Budget = $500.00, Spent = $600.00  [EXCEEDED]"
        assert lines[-1] == EXCEEDED_BANNER

    def test_budget_lines_no_budgets(self, profile):
        assert budget_lines(budget_report(profile)) == [NO_BUDGETS_BANNER]

    def test_time_series_lines(self, ledger):
        lines = time_series_lines(time_series_report(ledger.transactions))
        assert lines[0] == "Monthly Summary:"
        assert "2023-10: Income = $0.00, Expense = $900.00, Net = $-900.00" in lines
        assert "Yearly Summary:" in lines


class TestFormatAmount:
    """Tests for format_amount rounding."""

    @pytest.mark.parametrize("amount,expected", [
        ("0.125", "0.13"),
        ("2.675", "2.68"),
        ("0.124", "0.12"),
        ("-0.125", "-0.13"),
        ("50", "50.00"),
        ("0", "0.00"),
    ])
    def test_half_up(self, amount, expected):
        """Test halves round away from zero."""
        assert format_amount(Decimal(amount)) == expected

    def test_very_large_amount(self):
        """Test amounts beyond the default precision still format."""
        assert format_amount(Decimal("1E+30")) == "1" + "0" * 30 + ".00"
