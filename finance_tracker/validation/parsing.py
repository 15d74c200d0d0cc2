"""
Input Parsing

DESIGN DECISION: Parsing never raises for routine bad input.
Every parser returns a ParseResult holding either the parsed value or
an (unraised) ParseError. Callers check `result.ok` and decide whether
the failure aborts the operation (add) or only skips one field (edit).

IMPORTANT: Parsing NEVER silently fixes input. A malformed amount is
reported, not truncated to its numeric prefix.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from finance_tracker.errors import ParseError
from finance_tracker.models.finance import TransactionType


T = TypeVar("T")

# Characters that would corrupt the pipe-delimited storage format
RESERVED_CHARACTERS = ("|", "\n", "\r")
# Budgets are stored as "cat:amount," entries
RESERVED_CATEGORY_CHARACTERS = RESERVED_CHARACTERS + (",",)

# Three signed integers separated by '-'; whitespace around each token is
# tolerated and anything after the day is ignored.
_DATE_PATTERN = re.compile(
    r"^\s*([+-]?\d+)\s*-\s*([+-]?\d+)\s*-\s*([+-]?\d+)"
)


class ParseResult(BaseModel, Generic[T]):
    """Outcome of parsing one piece of user input."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    value: Optional[T] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value) -> "ParseResult":
        return cls(value=value)

    @classmethod
    def failure(cls, message: str, field: Optional[str] = None) -> "ParseResult":
        return cls(error=ParseError(message, field=field))


def parse_amount(text: Optional[str], field: str = "amount") -> ParseResult[Decimal]:
    """Parse a non-negative, finite decimal amount."""
    raw = (text or "").strip()
    if not raw:
        return ParseResult.failure("Amount is required", field=field)

    try:
        amount = Decimal(raw)
    except InvalidOperation:
        return ParseResult.failure(f"Invalid amount: {raw!r} is not a number", field=field)

    if not amount.is_finite():
        return ParseResult.failure(f"Invalid amount: {raw!r} is not a finite number", field=field)
    if amount < 0:
        return ParseResult.failure(f"Invalid amount: {raw!r} must not be negative", field=field)

    return ParseResult.success(amount)


def parse_transaction_type(text: Optional[str], field: str = "type") -> ParseResult[TransactionType]:
    """
    Parse a transaction type from its first character.

    'I'/'i' (e.g. "Income") is income, 'E'/'e' (e.g. "expense") is expense.
    """
    raw = (text or "").strip()
    if not raw:
        return ParseResult.failure("Type is required (I for Income, E for Expense)", field=field)

    first = raw[0].upper()
    if first == TransactionType.INCOME.value:
        return ParseResult.success(TransactionType.INCOME)
    if first == TransactionType.EXPENSE.value:
        return ParseResult.success(TransactionType.EXPENSE)

    return ParseResult.failure(
        f"Invalid type: {raw!r}. Use I for Income or E for Expense",
        field=field,
    )


def parse_transaction_id(text: Optional[str], field: str = "id") -> ParseResult[int]:
    """Parse a positive integer transaction id."""
    raw = (text or "").strip()
    try:
        transaction_id = int(raw)
    except ValueError:
        return ParseResult.failure(f"Invalid ID: {raw!r} is not a whole number", field=field)

    if transaction_id < 1:
        return ParseResult.failure(f"Invalid ID: {transaction_id}", field=field)

    return ParseResult.success(transaction_id)


def check_text_field(
    text: Optional[str],
    field: str,
    required: bool = True,
    reserved: tuple[str, ...] = RESERVED_CHARACTERS,
) -> ParseResult[str]:
    """
    Check a free-text field against the storage format rules.

    Returns the stripped text.
    """
    value = (text or "").strip()
    if required and not value:
        return ParseResult.failure(f"{field.capitalize()} must not be blank", field=field)

    found = [c for c in reserved if c in value]
    if found:
        shown = ", ".join(repr(c) for c in found)
        return ParseResult.failure(
            f"{field.capitalize()} must not contain {shown}",
            field=field,
        )

    return ParseResult.success(value)


def parse_date_parts(text: Optional[str]) -> Optional[tuple[int, int, int]]:
    """
    Split a date into (year, month, day) integers.

    No calendar validation: "2024-13-40" parses. Returns None when the
    text is not three integers separated by '-'.
    """
    match = _DATE_PATTERN.match(text or "")
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    return year, month, day
