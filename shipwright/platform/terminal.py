"""Raw keystroke input.

The terminal's input mode is process-global state. It is only ever changed
inside ``raw_session()``, which restores the previous mode on every exit
path, including exceptions raised by the code holding the session.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

__all__ = [
    "BACKSPACE_KEYS",
    "ENTER",
    "ESCAPE",
    "INTERRUPT",
    "LINE_FEED",
    "RawSession",
    "is_interactive_terminal",
    "raw_session",
]

ENTER = "\r"
LINE_FEED = "\n"
ESCAPE = "\x1b"
INTERRUPT = "\x03"
BACKSPACE_KEYS = frozenset({"\x7f", "\x08"})


class RawSession(Protocol):
    """Handle on a terminal in raw input mode."""

    def read_key(self) -> str:
        """Block until one key arrives and return it ("" for ignored keys).

        Raises EOFError when stdin is closed.
        """
        ...

    def write(self, text: str) -> None:
        """Write and flush ``text``; "\\n" moves to the start of the next line."""
        ...


def is_interactive_terminal() -> bool:
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


class _PosixSession:
    def read_key(self) -> str:
        ch = sys.stdin.read(1)
        if ch == "":
            raise EOFError("stdin closed")
        return ch

    def write(self, text: str) -> None:
        # Output post-processing is off in raw mode: a bare LF does not return
        # the carriage.
        sys.stdout.write(text.replace("\n", "\r\n"))
        sys.stdout.flush()


class _WindowsSession:
    def read_key(self) -> str:
        import msvcrt

        ch = msvcrt.getwch()
        if ch in ("\x00", "\xe0"):
            # Arrow/function keys arrive as a two-character sequence.
            msvcrt.getwch()
            return ""
        return ch

    def write(self, text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()


@contextmanager
def raw_session() -> Iterator[RawSession]:
    """Put stdin in raw mode for the duration of the ``with`` block."""
    if os.name == "nt":
        # msvcrt reads keys unbuffered without touching the console mode.
        yield _WindowsSession()
        return

    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield _PosixSession()
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
