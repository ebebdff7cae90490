"""Single-line / multi-line text capture from raw keystrokes.

``LineEditor`` is a pure state machine: it consumes one key at a time and
returns the text to echo. ``run_editor`` drives it inside a raw terminal
session, and the ``read_*`` helpers wrap it for the two prompts the release
pipeline needs (commit message and one-time password).

Commit-message keys:
    printable   clears the placeholder hint, then appends
    Backspace   removes the last character (no-op on the placeholder)
    Enter       on the placeholder: skip (empty result)
                on the first line: finish with that line
                in multi-line mode: append a non-empty line, finish on an empty one
    Ctrl+J      starts multi-line mode with the current line
    Esc/Ctrl+C  cancel

OTP keys: digits only, Enter always finishes, Esc/Ctrl+C cancel.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Literal, Protocol

from shipwright.core.result import Err, Ok, Result
from shipwright.platform.terminal import (
    BACKSPACE_KEYS,
    ENTER,
    ESCAPE,
    INTERRUPT,
    LINE_FEED,
    RawSession,
    is_interactive_terminal,
    raw_session,
)
from shipwright.release.errors import OtpMissing, UserCancelled

__all__ = [
    "EditorMode",
    "EditorState",
    "LineEditor",
    "Prompter",
    "TerminalPrompter",
    "compose_commit_message",
    "read_commit_message",
    "read_otp",
    "run_editor",
]

SessionFactory = Callable[[], AbstractContextManager[RawSession]]

_CLEAR_LINE = "\r\x1b[K"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"


def _color_enabled() -> bool:
    if os.getenv("NO_COLOR") is not None:
        return False
    return os.getenv("TERM", "").lower() != "dumb"


def _dim(text: str, *, color: bool) -> str:
    if not color:
        return text
    return f"\x1b[90m{text}\x1b[0m"


class EditorMode(Enum):
    COMMIT_MESSAGE = auto()
    OTP = auto()


class EditorState(Enum):
    PLACEHOLDER = auto()
    EDITING = auto()
    DONE = auto()
    CANCELLED = auto()


@dataclass
class LineEditor:
    mode: EditorMode
    prompt: str
    hint: str = ""
    color: bool = True
    state: EditorState = field(default=EditorState.PLACEHOLDER, init=False)
    result: str | None = field(default=None, init=False)
    cancel_key: Literal["escape", "interrupt"] | None = field(default=None, init=False)
    _buffer: list[str] = field(default_factory=list, init=False)
    _lines: list[str] = field(default_factory=list, init=False)
    _multiline: bool = field(default=False, init=False)

    @property
    def finished(self) -> bool:
        return self.state in (EditorState.DONE, EditorState.CANCELLED)

    @property
    def buffer(self) -> str:
        return "".join(self._buffer)

    def start(self) -> str:
        """Initial render: the prompt followed by the dimmed hint, cursor hidden."""
        if not self.hint:
            return self.prompt
        return f"{self.prompt}{_dim(self.hint, color=self.color)}{_HIDE_CURSOR}"

    def feed(self, key: str) -> str:
        """Consume one key and return what to echo."""
        if self.finished or not key:
            return ""
        if key == ESCAPE:
            return self._cancel("escape")
        if key == INTERRUPT:
            return self._cancel("interrupt")
        if key == ENTER:
            return self._enter()
        if key == LINE_FEED:
            return self._line_feed()
        if key in BACKSPACE_KEYS:
            return self._backspace()
        if self._accepts(key):
            return self._insert(key)
        return ""

    def _accepts(self, key: str) -> bool:
        if len(key) != 1:
            return False
        if self.mode is EditorMode.OTP:
            return "0" <= key <= "9"
        return key.isprintable()

    def _insert(self, key: str) -> str:
        echo = ""
        if self.state is EditorState.PLACEHOLDER:
            echo = f"{_CLEAR_LINE}{self.prompt}{_SHOW_CURSOR}" if self.hint else ""
            self.state = EditorState.EDITING
        self._buffer.append(key)
        return echo + key

    def _backspace(self) -> str:
        if self.state is EditorState.PLACEHOLDER or not self._buffer:
            return ""
        self._buffer.pop()
        return "\b \b"

    def _enter(self) -> str:
        if self.mode is EditorMode.OTP:
            return self._finish(self.buffer.strip())

        if self.state is EditorState.PLACEHOLDER:
            return self._finish("")

        if not self._multiline:
            return self._finish(self.buffer.strip())

        if self.buffer.strip() == "":
            return self._finish("\n".join(self._lines).strip())

        return self._push_line()

    def _line_feed(self) -> str:
        if self.mode is EditorMode.OTP:
            return self._enter()
        if self.state is EditorState.PLACEHOLDER:
            return ""
        if self.buffer.strip() == "":
            return self._enter() if self._multiline else ""
        self._multiline = True
        return self._push_line()

    def _push_line(self) -> str:
        self._lines.append(self.buffer)
        self._buffer.clear()
        return "\n"

    def _finish(self, text: str) -> str:
        self.state = EditorState.DONE
        self.result = text
        if self.mode is EditorMode.COMMIT_MESSAGE and not text:
            return f"{_CLEAR_LINE}{self.prompt}{_dim('skipped', color=self.color)}{_SHOW_CURSOR}\n"
        return f"{_SHOW_CURSOR}\n"

    def _cancel(self, key: Literal["escape", "interrupt"]) -> str:
        self.state = EditorState.CANCELLED
        self.cancel_key = key
        return f"{_CLEAR_LINE}{self.prompt}cancelled{_SHOW_CURSOR}\n"


def run_editor(
    editor: LineEditor,
    *,
    session_factory: SessionFactory = raw_session,
) -> Result[str, UserCancelled]:
    """Feed keys from a raw session until the editor finishes.

    The session is closed (terminal mode restored) before this returns or
    raises.
    """
    with session_factory() as session:
        session.write(editor.start())
        while not editor.finished:
            try:
                key = session.read_key()
            except EOFError:
                key = INTERRUPT
            session.write(editor.feed(key))

    if editor.state is EditorState.CANCELLED:
        return Err(UserCancelled(key=editor.cancel_key or "interrupt"))
    return Ok(editor.result or "")


def compose_commit_message(default: str, custom: str) -> str:
    """``default`` alone, or ``"<default> - <custom>"`` when a message was typed."""
    custom = custom.strip()
    if not custom:
        return default
    return f"{default} - {custom}"


def read_commit_message(
    default: str,
    *,
    silent: bool = False,
    session_factory: SessionFactory = raw_session,
    interactive: Callable[[], bool] = is_interactive_terminal,
) -> Result[str, UserCancelled]:
    """Ask for an optional commit message; ``default`` when skipped or silent."""
    if silent or not interactive():
        return Ok(default)

    editor = LineEditor(
        mode=EditorMode.COMMIT_MESSAGE,
        prompt="Commit message: ",
        hint="press enter to skip",
        color=_color_enabled(),
    )
    result = run_editor(editor, session_factory=session_factory)
    if isinstance(result, Err):
        return result
    return Ok(compose_commit_message(default, result.value))


def read_otp(
    *,
    session_factory: SessionFactory = raw_session,
    interactive: Callable[[], bool] = is_interactive_terminal,
) -> Result[str, UserCancelled | OtpMissing]:
    """Ask for a numeric one-time password. Empty input is an error."""
    if not interactive():
        return Err(OtpMissing())

    editor = LineEditor(mode=EditorMode.OTP, prompt="Enter OTP code: ", color=_color_enabled())
    result = run_editor(editor, session_factory=session_factory)
    if isinstance(result, Err):
        return result
    if not result.value:
        return Err(OtpMissing())
    return Ok(result.value)


class Prompter(Protocol):
    """Interactive input needed by the release pipeline."""

    def commit_message(self, default: str, *, silent: bool) -> Result[str, UserCancelled]: ...

    def otp(self) -> Result[str, UserCancelled | OtpMissing]: ...


@dataclass(frozen=True, slots=True)
class TerminalPrompter:
    session_factory: SessionFactory = raw_session
    interactive: Callable[[], bool] = is_interactive_terminal

    def commit_message(self, default: str, *, silent: bool) -> Result[str, UserCancelled]:
        return read_commit_message(
            default,
            silent=silent,
            session_factory=self.session_factory,
            interactive=self.interactive,
        )

    def otp(self) -> Result[str, UserCancelled | OtpMissing]:
        return read_otp(session_factory=self.session_factory, interactive=self.interactive)
