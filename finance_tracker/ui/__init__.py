"""Display collaborator package: interface, console display, menu loop."""

from finance_tracker.ui.console import ConsoleDisplay
from finance_tracker.ui.interface import DisplayInterface
from finance_tracker.ui.menu import MenuController

__all__ = ["ConsoleDisplay", "DisplayInterface", "MenuController"]
