"""Ledger operations package."""

from finance_tracker.ledger.operations import (
    EditResult,
    add_transaction,
    delete_transaction,
    edit_transaction,
    find_transaction,
    set_budget,
)

__all__ = [
    "EditResult",
    "add_transaction",
    "delete_transaction",
    "edit_transaction",
    "find_transaction",
    "set_budget",
]
