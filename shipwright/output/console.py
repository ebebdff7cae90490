"""Console output abstraction.

Release stages report progress through ``ConsoleProtocol`` so they never
depend on Rich directly. Tests use ``MockConsole`` to assert on what would
have been printed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """How a line of output is rendered."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()  # verbose details, command lines
    BOLD = auto()
    HEADER = auto()
    CANCELLED = auto()  # user aborted; not an error

    def __str__(self) -> str:
        return self.name.lower()


# Leading tag for the one-line status helpers (success, error, ...).
_TAGS: dict[Style, str] = {
    Style.SUCCESS: "OK",
    Style.ERROR: "error:",
    Style.WARNING: "warning:",
    Style.INFO: "info:",
    Style.CANCELLED: "cancelled:",
}

_RICH_STYLES: dict[Style, str] = {
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
    Style.BOLD: "bold",
    Style.HEADER: "blue bold",
    Style.CANCELLED: "magenta",
}


class ConsoleProtocol(Protocol):
    """Styled console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None:
        """Print an error message to the error stream."""
        ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def cancelled(self, message: str) -> None:
        """Print a skipped/cancelled notice, distinct from errors."""
        ...

    def header(self, message: str) -> None: ...

    def newline(self) -> None: ...


class RichConsole:
    """Console backed by Rich.

    Errors and flushed command output go to stderr, everything else to stdout.
    Messages are escaped so text such as ``npm ERR! [E403]`` is not read as
    Rich markup.
    """

    def __init__(self) -> None:
        from rich.console import Console
        from rich.markup import escape

        self._stdout = Console()
        self._stderr = Console(stderr=True)
        self._escape = escape

    def _target(self, style: Style) -> Console:
        return self._stderr if style is Style.ERROR else self._stdout

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        text = self._escape(message)
        rich_style = _RICH_STYLES.get(style)
        if rich_style is None:
            self._target(style).print(text)
            return
        self._target(style).print(text, style=rich_style)

    def _tagged(self, style: Style, message: str) -> None:
        color = _RICH_STYLES[style]
        tag = f"[{color}]{_TAGS[style]}[/{color}]"
        self._target(style).print(f"{tag} {self._escape(message)}")

    def success(self, message: str) -> None:
        self._tagged(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._tagged(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._tagged(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._tagged(Style.INFO, message)

    def cancelled(self, message: str) -> None:
        self._tagged(Style.CANCELLED, message)

    def header(self, message: str) -> None:
        self._stdout.print()
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self._stdout.print()


@dataclass
class OutputRecord:
    """One captured line."""

    message: str
    style: Style


def _no_records() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Records output instead of printing it. Status lines keep their tag."""

    outputs: list[OutputRecord] = field(default_factory=_no_records)

    def _record(self, style: Style, message: str) -> None:
        tag = _TAGS.get(style)
        self.outputs.append(OutputRecord(f"{tag} {message}" if tag else message, style))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self._record(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._record(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._record(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._record(Style.INFO, message)

    def cancelled(self, message: str) -> None:
        self._record(Style.CANCELLED, message)

    def header(self, message: str) -> None:
        self._record(Style.HEADER, message)

    def newline(self) -> None:
        self.print("")

    @property
    def messages(self) -> list[str]:
        return [record.message for record in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(record.style is Style.ERROR for record in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Records whose message contains ``substring``."""
        return [record for record in self.outputs if substring in record.message]

    def count(self, style: Style) -> int:
        return sum(1 for record in self.outputs if record.style is style)
