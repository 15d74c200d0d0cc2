"""
Ledger Operations

Mutations of a single UserProfile: add, edit and delete transactions,
and set category budgets.

DESIGN DECISION: These functions only change the in-memory profile.
Persisting the change is the caller's job (see FinanceApp), which
rewrites the full user set after every mutation.

EDIT CONVENTION: a blank or missing field means "keep the current
value". An invalid amount, type or text on edit keeps that one field
and is reported; the rest of the edit still applies.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from finance_tracker.errors import NotFoundError, ParseError
from finance_tracker.models.finance import Transaction, UserProfile
from finance_tracker.validation import (
    RESERVED_CATEGORY_CHARACTERS,
    check_text_field,
    parse_amount,
    parse_transaction_type,
)


class EditResult(BaseModel):
    """Outcome of an edit: what changed and which fields were rejected."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    transaction: Transaction
    changed_fields: list[str] = Field(default_factory=list)
    errors: list[ParseError] = Field(default_factory=list)

    @property
    def rejected_fields(self) -> list[str]:
        return [e.field or "unknown" for e in self.errors]

    @property
    def fully_applied(self) -> bool:
        return not self.errors


def find_transaction(profile: UserProfile, transaction_id: int) -> Transaction:
    """
    Look up a transaction by id.

    Raises:
        NotFoundError: If no transaction has that id
    """
    for transaction in profile.transactions:
        if transaction.id == transaction_id:
            return transaction
    raise NotFoundError(f"Transaction with ID {transaction_id} not found")


def add_transaction(
    profile: UserProfile,
    date: str,
    category: str,
    description: str,
    amount_text: str,
    type_text: str,
) -> Transaction:
    """
    Append a new transaction to the profile.

    The id is taken from the profile's counter, which is then advanced,
    so ids are never reissued even after deletes.

    Raises:
        ParseError: If the amount, type or a text field is invalid
    """
    date_result = check_text_field(date, "date")
    category_result = check_text_field(
        category, "category", reserved=RESERVED_CATEGORY_CHARACTERS
    )
    description_result = check_text_field(description, "description", required=False)
    amount_result = parse_amount(amount_text)
    type_result = parse_transaction_type(type_text)

    for result in (date_result, category_result, description_result, amount_result, type_result):
        if not result.ok:
            raise result.error

    transaction = Transaction(
        id=profile.next_transaction_id,
        date=date_result.value,
        category=category_result.value,
        description=description_result.value,
        amount=amount_result.value,
        type=type_result.value,
    )
    profile.next_transaction_id += 1
    profile.transactions.append(transaction)
    return transaction


def edit_transaction(
    profile: UserProfile,
    transaction_id: int,
    date: Optional[str] = None,
    category: Optional[str] = None,
    description: Optional[str] = None,
    amount_text: Optional[str] = None,
    type_text: Optional[str] = None,
) -> EditResult:
    """
    Overwrite fields of an existing transaction in place.

    The id never changes.

    Raises:
        NotFoundError: If no transaction has that id
    """
    transaction = find_transaction(profile, transaction_id)
    result = EditResult(transaction=transaction)

    def _blank(text: Optional[str]) -> bool:
        return text is None or not text.strip()

    text_updates = (
        ("date", date, check_text_field(date, "date")),
        ("category", category, check_text_field(
            category, "category", reserved=RESERVED_CATEGORY_CHARACTERS
        )),
        ("description", description, check_text_field(description, "description")),
    )
    for name, raw, parsed in text_updates:
        if _blank(raw):
            continue
        if not parsed.ok:
            result.errors.append(parsed.error)
            continue
        setattr(transaction, name, parsed.value)
        result.changed_fields.append(name)

    if not _blank(amount_text):
        parsed = parse_amount(amount_text)
        if parsed.ok:
            transaction.amount = parsed.value
            result.changed_fields.append("amount")
        else:
            result.errors.append(parsed.error)

    if not _blank(type_text):
        parsed = parse_transaction_type(type_text)
        if parsed.ok:
            transaction.type = parsed.value
            result.changed_fields.append("type")
        else:
            result.errors.append(parsed.error)

    return result


def delete_transaction(profile: UserProfile, transaction_id: int) -> Transaction:
    """
    Remove a transaction and return it.

    Budgets are keyed by category, so nothing else changes.

    Raises:
        NotFoundError: If no transaction has that id
    """
    transaction = find_transaction(profile, transaction_id)
    profile.transactions.remove(transaction)
    return transaction


def set_budget(profile: UserProfile, category: str, amount_text: str) -> Decimal:
    """
    Set (or overwrite) the budget ceiling for a category.

    Raises:
        ParseError: If the category or amount is invalid
    """
    category_result = check_text_field(
        category, "category", reserved=RESERVED_CATEGORY_CHARACTERS
    )
    if not category_result.ok:
        raise category_result.error

    amount_result = parse_amount(amount_text)
    if not amount_result.ok:
        raise amount_result.error

    profile.budget_per_category[category_result.value] = amount_result.value
    return amount_result.value
