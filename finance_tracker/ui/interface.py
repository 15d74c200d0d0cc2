"""
Display Collaborator Interface

The core never renders, manages windows or polls input devices. It asks
a display collaborator for exactly two things, synchronously:

1. A line of text for a prompt (or a cancel signal)
2. To show some lines and wait until the user acknowledges them
"""

from abc import ABC, abstractmethod
from typing import Optional


class DisplayInterface(ABC):
    """Synchronous request/response boundary to whatever draws the UI."""

    @abstractmethod
    def prompt_text(self, prompt: str) -> Optional[str]:
        """
        Ask the user for one line of text.

        Returns:
            The entered text. None or "" means the user cancelled.
        """
        pass

    @abstractmethod
    def show_lines(self, title: str, lines: list[str]) -> None:
        """Display `lines` under `title` and block until acknowledged."""
        pass

    def show_message(self, message: str, title: str = "") -> None:
        """Convenience for a single-line notice."""
        self.show_lines(title, [message])
