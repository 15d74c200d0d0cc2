"""Tests for ledger operations."""

import pytest
from decimal import Decimal

from finance_tracker.errors import NotFoundError, ParseError
from finance_tracker.ledger import (
    add_transaction,
    delete_transaction,
    edit_transaction,
    find_transaction,
    set_budget,
)
from finance_tracker.models.finance import TransactionType


class TestAddTransaction:
    """Tests for add_transaction."""

    def test_add_assigns_counter_id(self, profile):
        """Test the id comes from the counter, which then advances."""
        t = add_transaction(profile, "2024-03-05", "Food", "Lunch", "50", "E")
        assert t.id == 1
        assert t.amount == Decimal("50")
        assert t.type is TransactionType.EXPENSE
        assert profile.next_transaction_id == 2
        assert profile.transactions == [t]

    def test_add_keeps_insertion_order(self, profile):
        """Test transactions are appended in order."""
        first = add_transaction(profile, "2024-03-05", "Food", "", "1", "E")
        second = add_transaction(profile, "2023-01-01", "Salary", "", "2", "Income")
        assert [t.id for t in profile.transactions] == [first.id, second.id]

    def test_invalid_amount_raises_and_changes_nothing(self, profile):
        """Test a bad amount aborts the add."""
        with pytest.raises(ParseError) as exc_info:
            add_transaction(profile, "2024-03-05", "Food", "", "fifty", "E")
        assert exc_info.value.field == "amount"
        assert profile.transactions == []
        assert profile.next_transaction_id == 1

    def test_invalid_type_raises(self, profile):
        """Test a type not starting with I or E aborts the add."""
        with pytest.raises(ParseError) as exc_info:
            add_transaction(profile, "2024-03-05", "Food", "", "5", "X")
        assert exc_info.value.field == "type"
        assert profile.transactions == []

    def test_reserved_character_in_category_raises(self, profile):
        """Test categories that would break the budgets line are refused."""
        with pytest.raises(ParseError):
            add_transaction(profile, "2024-03-05", "Food,Drink", "", "5", "E")

    def test_unvalidated_date_is_accepted(self, profile):
        """Test dates are not calendar-checked on add."""
        t = add_transaction(profile, "someday", "Food", "", "5", "E")
        assert t.date == "someday"


class TestEditTransaction:
    """Tests for edit_transaction."""

    def test_blank_fields_keep_current_values(self, profile):
        """Test blank or missing input leaves fields unchanged."""
        t = add_transaction(profile, "2024-03-05", "Food", "Lunch", "50", "E")
        result = edit_transaction(profile, t.id, date="", category="  ", amount_text=None)
        assert result.changed_fields == []
        assert result.errors == []
        assert t.date == "2024-03-05"
        assert t.category == "Food"
        assert t.amount == Decimal("50")

    def test_edit_overwrites_in_place(self, profile):
        """Test an edit changes fields but never the id."""
        t = add_transaction(profile, "2024-03-05", "Food", "Lunch", "50", "E")
        result = edit_transaction(
            profile, t.id,
            date="2024-04-01",
            category="Salary",
            description="April pay",
            amount_text="2000",
            type_text="i",
        )
        assert result.fully_applied
        assert result.changed_fields == ["date", "category", "description", "amount", "type"]
        assert profile.transactions[0] is t
        assert t.id == 1
        assert t.category == "Salary"
        assert t.amount == Decimal("2000")
        assert t.type is TransactionType.INCOME

    def test_invalid_amount_skips_only_that_field(self, profile):
        """Test a bad amount is reported while other fields still apply."""
        t = add_transaction(profile, "2024-03-05", "Food", "Lunch", "50", "E")
        result = edit_transaction(profile, t.id, category="Dining", amount_text="lots", type_text="Q")
        assert t.category == "Dining"
        assert t.amount == Decimal("50")
        assert t.type is TransactionType.EXPENSE
        assert result.changed_fields == ["category"]
        assert result.rejected_fields == ["amount", "type"]
        assert all(isinstance(e, ParseError) for e in result.errors)

    def test_missing_id_raises(self, profile):
        """Test editing an unknown id fails."""
        with pytest.raises(NotFoundError):
            edit_transaction(profile, 42, category="X")


class TestDeleteTransaction:
    """Tests for delete_transaction."""

    def test_add_then_delete_restores_list(self, profile):
        """Test add followed by delete leaves the list as before."""
        add_transaction(profile, "2024-01-01", "Rent", "", "900", "E")
        before = [t.model_copy() for t in profile.transactions]

        added = add_transaction(profile, "2024-03-05", "Food", "", "50", "E")
        removed = delete_transaction(profile, added.id)

        assert removed.id == added.id
        assert profile.transactions == before

    def test_ids_never_reused_after_delete(self, profile):
        """Test deleting id 3 never lets id 3 be issued again."""
        for _ in range(3):
            add_transaction(profile, "2024-01-01", "Misc", "", "1", "E")
        delete_transaction(profile, 3)
        t = add_transaction(profile, "2024-01-02", "Misc", "", "1", "E")
        assert t.id == 4
        assert profile.next_transaction_id == 5

    def test_ids_strictly_increase(self, profile):
        """Test every add issues a larger id."""
        ids = [add_transaction(profile, "2024-01-01", "Misc", "", "1", "E").id for _ in range(5)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 5

    def test_delete_missing_raises(self, profile):
        """Test deleting an unknown id fails."""
        with pytest.raises(NotFoundError):
            delete_transaction(profile, 1)

    def test_delete_keeps_budgets(self, profile):
        """Test deletes do not cascade into budgets."""
        set_budget(profile, "Food", "100")
        t = add_transaction(profile, "2024-03-05", "Food", "", "50", "E")
        delete_transaction(profile, t.id)
        assert profile.budget_per_category == {"Food": Decimal("100")}


class TestFindTransaction:
    """Tests for find_transaction."""

    def test_find_existing(self, profile):
        t = add_transaction(profile, "2024-03-05", "Food", "", "50", "E")
        assert find_transaction(profile, t.id) is t

    def test_find_missing(self, profile):
        with pytest.raises(NotFoundError):
            find_transaction(profile, 99)


class TestSetBudget:
    """Tests for set_budget."""

    def test_set_and_overwrite(self, profile):
        """Test budgets upsert silently."""
        set_budget(profile, "Food", "100")
        set_budget(profile, "Food", "150.50")
        assert profile.budget_per_category == {"Food": Decimal("150.50")}

    def test_invalid_amount(self, profile):
        """Test a bad budget amount raises and stores nothing."""
        with pytest.raises(ParseError):
            set_budget(profile, "Food", "a lot")
        assert profile.budget_per_category == {}

    def test_budget_without_transactions(self, profile):
        """Test a category can be budgeted before any spending."""
        set_budget(profile, "Travel", "500")
        assert profile.transactions == []
        assert "Travel" in profile.budget_per_category
