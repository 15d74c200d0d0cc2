"""
Menu Controller

The interactive loop: an authentication screen while nobody is logged
in, then the main menu. Every user action blocks until the display
collaborator returns.

ERROR POLICY: every FinanceError is shown to the user and control
returns to the menu that started the action. Nothing is fatal.
Cancelling any prompt abandons the current action.
"""

from typing import Callable, Optional

import structlog

from finance_tracker.errors import FinanceError, StorageError
from finance_tracker.orchestrator import FinanceApp
from finance_tracker.reports import (
    budget_lines,
    format_amount,
    summary_lines,
    time_series_lines,
    transaction_lines,
)
from finance_tracker.ui.interface import DisplayInterface
from finance_tracker.validation import parse_transaction_id


logger = structlog.get_logger(__name__)


AUTH_PROMPT = "1. Login  2. Register  3. Exit App  - choose:"
MAIN_MENU_PROMPT = (
    "1. Add Transaction  2. View All Transactions  3. Edit/Delete Transaction  "
    "4. Show Summary  5. Budget Report  6. Set Budget  7. Time Series Report  "
    "8. Logout  9. Exit App  - choose:"
)


def _cancelled(text: Optional[str]) -> bool:
    return text is None or text == ""


class MenuController:
    """Drives a FinanceApp through a DisplayInterface."""

    def __init__(self, app: FinanceApp, display: DisplayInterface):
        self._app = app
        self._display = display
        self._main_actions: dict[str, Callable[[], None]] = {
            "1": self.add_transaction,
            "2": self.view_transactions,
            "3": self.edit_or_delete_transaction,
            "4": self.show_summary,
            "5": self.show_budget_report,
            "6": self.set_budget,
            "7": self.show_time_series,
        }

    def run(self) -> None:
        """Loop until the user exits; save once more on the way out."""
        running = True
        while running:
            if self._app.is_logged_in:
                running = self.main_menu_step()
            else:
                running = self.auth_step()

        try:
            self._app.save()
        except StorageError as e:
            self._display.show_message(str(e), title="Error")

    def _guarded(self, action: Callable[[], None]) -> None:
        try:
            action()
        except FinanceError as e:
            logger.info("action_failed", error_type=type(e).__name__, error=str(e))
            self._display.show_message(str(e), title="Error")

    # -------------------------------------------------------------------------
    # Authentication screen
    # -------------------------------------------------------------------------

    def auth_step(self) -> bool:
        """One pass of the auth screen. Returns False to exit the app."""
        choice = self._display.prompt_text(AUTH_PROMPT)
        if _cancelled(choice):
            return False

        choice = choice.strip()
        if choice == "1":
            self._guarded(self.login)
        elif choice == "2":
            self._guarded(self.register)
        elif choice == "3":
            return False
        else:
            self._display.show_message(f"Unknown option: {choice}", title="Error")
        return True

    def login(self) -> None:
        username = self._display.prompt_text("Enter Username:")
        if _cancelled(username):
            return
        password = self._display.prompt_text("Enter Password:")
        if _cancelled(password):
            return

        profile = self._app.login(username, password)
        self._display.show_message(f"Login successful! Welcome, {profile.username}.")

    def register(self) -> None:
        username = self._display.prompt_text("Choose Username:")
        if _cancelled(username):
            return
        password = self._display.prompt_text("Choose Password:")
        if _cancelled(password):
            return

        profile = self._app.register(username, password)
        self._display.show_message(f"Registration successful! Welcome, {profile.username}.")

    # -------------------------------------------------------------------------
    # Main menu
    # -------------------------------------------------------------------------

    def main_menu_step(self) -> bool:
        """One pass of the main menu. Returns False to exit the app."""
        choice = self._display.prompt_text(MAIN_MENU_PROMPT)
        if _cancelled(choice):
            return False

        choice = choice.strip()
        if choice == "8":
            self._app.logout()
        elif choice == "9":
            return False
        elif choice in self._main_actions:
            self._guarded(self._main_actions[choice])
        else:
            self._display.show_message(f"Unknown option: {choice}", title="Error")
        return True

    def add_transaction(self) -> None:
        date = self._display.prompt_text("Enter Date (YYYY-MM-DD):")
        if _cancelled(date):
            return
        category = self._display.prompt_text("Enter Category:")
        if _cancelled(category):
            return
        description = self._display.prompt_text("Enter Description:")
        if _cancelled(description):
            return
        amount_text = self._display.prompt_text("Enter Amount (number):")
        if _cancelled(amount_text):
            return
        type_text = self._display.prompt_text("Enter Type (I for Income, E for Expense):")
        if _cancelled(type_text):
            return

        transaction = self._app.add_transaction(date, category, description, amount_text, type_text)
        self._display.show_message(f"Transaction added successfully! (ID {transaction.id})")

    def view_transactions(self) -> None:
        category = self._display.prompt_text("Filter by category (leave blank for all):")
        category = (category or "").strip() or None

        title = f"Transactions: {category}" if category else "All Transactions"
        self._display.show_lines(title, transaction_lines(self._app.transactions(category)))

    def edit_or_delete_transaction(self) -> None:
        self._display.show_lines("Your Transactions", transaction_lines(self._app.transactions()))

        id_text = self._display.prompt_text("Enter ID of transaction to edit/delete:")
        if _cancelled(id_text):
            return
        parsed = parse_transaction_id(id_text)
        if not parsed.ok:
            raise parsed.error

        transaction = self._app.find_transaction(parsed.value)
        action = self._display.prompt_text(
            f"Transaction {transaction.id}: Edit (E), Delete (D) or Cancel (C)?"
        )
        if _cancelled(action):
            return

        action = action.strip().upper()[:1]
        if action == "E":
            self._edit(transaction.id)
        elif action == "D":
            self._app.delete_transaction(transaction.id)
            self._display.show_message("Transaction deleted successfully!")

    def _edit(self, transaction_id: int) -> None:
        t = self._app.find_transaction(transaction_id)
        # Blank answers keep the current value
        date = self._display.prompt_text(f"New Date (YYYY-MM-DD) [{t.date}]:")
        category = self._display.prompt_text(f"New Category [{t.category}]:")
        description = self._display.prompt_text(f"New Description [{t.description}]:")
        amount_text = self._display.prompt_text(f"New Amount (number) [{format_amount(t.amount)}]:")
        type_text = self._display.prompt_text(f"New Type (I/E) [{t.type.value}]:")

        result = self._app.edit_transaction(
            transaction_id,
            date=date,
            category=category,
            description=description,
            amount_text=amount_text,
            type_text=type_text,
        )

        lines = ["Transaction updated successfully!"]
        for error in result.errors:
            lines.append(f"Not changed ({error.field}): {error.message}")
        self._display.show_lines("Edit Transaction", lines)

    def show_summary(self) -> None:
        self._display.show_lines("Financial Summary", summary_lines(self._app.summary()))

    def show_budget_report(self) -> None:
        self._display.show_lines("Budget Report", budget_lines(self._app.budget_report()))

    def set_budget(self) -> None:
        budgets = self._app.current_profile().budget_per_category
        current = [
            f"{category}: ${format_amount(budgets[category])}"
            for category in sorted(budgets)
        ] or ["No budgets set."]
        self._display.show_lines("Current Budgets", current)

        category = self._display.prompt_text("Enter Category to set budget for (e.g., Food, Transport):")
        if _cancelled(category):
            return
        amount_text = self._display.prompt_text(f"Enter Budget Amount for {category.strip()}:")
        if _cancelled(amount_text):
            return

        amount = self._app.set_budget(category, amount_text)
        self._display.show_message(f"Budget for {category.strip()} set to ${format_amount(amount)}")

    def show_time_series(self) -> None:
        self._display.show_lines("Time Series Report", time_series_lines(self._app.time_series_report()))
