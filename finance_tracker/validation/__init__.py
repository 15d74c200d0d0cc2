"""Input parsing and validation package."""

from finance_tracker.validation.parsing import (
    RESERVED_CATEGORY_CHARACTERS,
    RESERVED_CHARACTERS,
    ParseResult,
    check_text_field,
    parse_amount,
    parse_date_parts,
    parse_transaction_id,
    parse_transaction_type,
)

__all__ = [
    "RESERVED_CATEGORY_CHARACTERS",
    "RESERVED_CHARACTERS",
    "ParseResult",
    "check_text_field",
    "parse_amount",
    "parse_date_parts",
    "parse_transaction_id",
    "parse_transaction_type",
]
