"""Tests for input parsing."""

import pytest
from decimal import Decimal

from finance_tracker.errors import ParseError
from finance_tracker.models.finance import TransactionType
from finance_tracker.validation import (
    RESERVED_CATEGORY_CHARACTERS,
    check_text_field,
    parse_amount,
    parse_date_parts,
    parse_transaction_id,
    parse_transaction_type,
)


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize("text,expected", [
        ("50", Decimal("50")),
        ("12.5", Decimal("12.5")),
        (" 0.01 ", Decimal("0.01")),
        ("0", Decimal("0")),
    ])
    def test_valid_amounts(self, text, expected):
        """Test valid decimal text parses."""
        result = parse_amount(text)
        assert result.ok
        assert result.value == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "12abc", "NaN", "Infinity", "-5"])
    def test_invalid_amounts(self, text):
        """Test invalid text yields an unraised ParseError."""
        result = parse_amount(text)
        assert not result.ok
        assert result.value is None
        assert isinstance(result.error, ParseError)
        assert result.error.field == "amount"

    def test_none_is_invalid(self):
        """Test a missing amount is an error, not a crash."""
        assert not parse_amount(None).ok


class TestParseTransactionType:
    """Tests for parse_transaction_type."""

    @pytest.mark.parametrize("text,expected", [
        ("I", TransactionType.INCOME),
        ("i", TransactionType.INCOME),
        ("Income", TransactionType.INCOME),
        ("E", TransactionType.EXPENSE),
        ("expense", TransactionType.EXPENSE),
        (" e ", TransactionType.EXPENSE),
    ])
    def test_first_character_decides(self, text, expected):
        """Test only the first character matters, case-insensitively."""
        result = parse_transaction_type(text)
        assert result.ok
        assert result.value is expected

    @pytest.mark.parametrize("text", ["", "X", "salary", "7"])
    def test_invalid_types(self, text):
        """Test anything not starting with I or E is rejected."""
        result = parse_transaction_type(text)
        assert not result.ok
        assert result.error.field == "type"


class TestParseTransactionId:
    """Tests for parse_transaction_id."""

    def test_valid_id(self):
        """Test an integer id parses."""
        result = parse_transaction_id(" 3 ")
        assert result.ok
        assert result.value == 3

    @pytest.mark.parametrize("text", ["", "x", "1.5", "0", "-2"])
    def test_invalid_id(self, text):
        """Test non-positive or non-integer ids are rejected."""
        assert not parse_transaction_id(text).ok


class TestCheckTextField:
    """Tests for check_text_field."""

    def test_strips_and_accepts(self):
        """Test ordinary text is accepted stripped."""
        result = check_text_field("  Food  ", "category")
        assert result.ok
        assert result.value == "Food"

    def test_blank_required_rejected(self):
        """Test blank required fields are rejected."""
        result = check_text_field("   ", "category")
        assert not result.ok
        assert result.error.field == "category"

    def test_blank_optional_accepted(self):
        """Test blank optional fields are accepted as empty."""
        result = check_text_field("", "description", required=False)
        assert result.ok
        assert result.value == ""

    @pytest.mark.parametrize("text", ["a|b", "line\nbreak"])
    def test_delimiters_rejected(self, text):
        """Test storage delimiters are refused."""
        assert not check_text_field(text, "description").ok

    def test_comma_rejected_only_for_categories(self):
        """Test commas break budgets but are fine in descriptions."""
        assert check_text_field("a,b", "description").ok
        assert not check_text_field("a,b", "category", reserved=RESERVED_CATEGORY_CHARACTERS).ok


class TestParseDateParts:
    """Tests for parse_date_parts."""

    def test_standard_date(self):
        """Test a normal ISO date."""
        assert parse_date_parts("2024-03-05") == (2024, 3, 5)

    def test_no_calendar_validation(self):
        """Test out-of-range numbers still parse."""
        assert parse_date_parts("2024-13-40") == (2024, 13, 40)

    def test_unpadded_and_spaced(self):
        """Test unpadded numbers and spaces around dashes."""
        assert parse_date_parts("2024-3-5") == (2024, 3, 5)
        assert parse_date_parts(" 2024 - 3 - 5") == (2024, 3, 5)

    def test_trailing_text_ignored(self):
        """Test text after the day does not prevent parsing."""
        assert parse_date_parts("2024-03-05T10:00") == (2024, 3, 5)

    @pytest.mark.parametrize("text", ["", "yesterday", "2024/03/05", "2024-03", "05-03"])
    def test_unparseable(self, text):
        """Test non-dates return None."""
        assert parse_date_parts(text) is None
