"""Console prompt primitives for interactive panels.

Wraps a rich Console for output. Input comes from the terminal, or from
an explicit stream (a file of scripted answers, or a StringIO in tests).
End of input is the abort signal: text prompts return None and integer
prompts return their cancel value.
"""

from enum import Enum
from typing import IO

from rich.console import Console


class EndAction(str, Enum):
    CONTINUE = "continue"
    QUIT = "quit"
    REDISPLAY = "redisplay"


END_PANEL_PROMPT = "press 1 to continue, 2 to quit, 3 to redisplay"


class PanelConsole:
    """Line-oriented prompt/echo surface used by the collection engine."""

    def __init__(self, console: Console | None = None, stream: IO[str] | None = None):
        self.console = console or Console()
        self.stream = stream

    def println(self, text: str = "") -> None:
        self.console.print(text, markup=False, highlight=False, emoji=False)

    def _read_line(self, prompt: str, password: bool = False) -> str | None:
        if self.stream is not None:
            line = self.console.input(prompt, markup=False, stream=self.stream)
            if line == "":
                return None
            return line.rstrip("\r\n")
        try:
            return self.console.input(prompt, markup=False, password=password)
        except EOFError:
            return None

    def prompt(self, text: str) -> str | None:
        """Read one line; None on end of input."""
        return self._read_line(text)

    def prompt_password(self, text: str) -> str | None:
        """Read one line without echo; None on end of input."""
        return self._read_line(text, password=True)

    def prompt_int(
        self, text: str, minimum: int, maximum: int, default: int, cancel: int
    ) -> int:
        """Read an integer in ``[minimum, maximum]``.

        An empty answer picks ``default`` when it is in range. Anything else
        outside the range re-prompts. End of input returns ``cancel``.
        """
        while True:
            line = self._read_line(f"{text} ")
            if line is None:
                return cancel
            line = line.strip()
            if not line:
                if minimum <= default <= maximum:
                    return default
                continue
            try:
                value = int(line)
            except ValueError:
                continue
            if minimum <= value <= maximum:
                return value

    def prompt_end_panel(self) -> EndAction:
        """Ask whether to continue, quit or redisplay the panel."""
        value = self.prompt_int(END_PANEL_PROMPT, 1, 3, 1, 2)
        return {1: EndAction.CONTINUE, 2: EndAction.QUIT, 3: EndAction.REDISPLAY}[value]
