"""Terminal implementation of the display collaborator."""

from typing import Callable, Optional

from finance_tracker.ui.interface import DisplayInterface


class ConsoleDisplay(DisplayInterface):
    """
    Prompts on stdin and prints to stdout.

    End of input (Ctrl-D) counts as cancel, so scripted sessions end
    cleanly instead of crashing.
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ):
        self._input = input_func
        self._output = output_func

    def prompt_text(self, prompt: str) -> Optional[str]:
        try:
            return self._input(f"{prompt} ")
        except EOFError:
            return None

    def show_lines(self, title: str, lines: list[str]) -> None:
        if title:
            self._output("")
            self._output(f"=== {title} ===")
        for line in lines:
            self._output(line)
        try:
            self._input("(press Enter to return) ")
        except EOFError:
            # Input closed; nothing left to wait for
            return
