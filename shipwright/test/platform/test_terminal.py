"""Tests for shipwright.platform.terminal module."""

from __future__ import annotations

import io
import os
import sys

import pytest

from shipwright.platform import terminal
from shipwright.platform.terminal import raw_session


class _FakeStdin(io.StringIO):
    def fileno(self) -> int:
        return 0


@pytest.mark.skipif(os.name == "nt", reason="POSIX terminal modes only")
class TestRawSessionPosix:
    @pytest.fixture
    def tty_calls(self, monkeypatch: pytest.MonkeyPatch) -> list[str]:
        import termios
        import tty

        calls: list[str] = []
        monkeypatch.setattr(termios, "tcgetattr", lambda fd: calls.append("get") or ["saved"])
        monkeypatch.setattr(
            termios, "tcsetattr", lambda fd, when, attrs: calls.append(f"set:{attrs[0]}")
        )
        monkeypatch.setattr(tty, "setraw", lambda fd: calls.append("raw"))
        monkeypatch.setattr(sys, "stdin", _FakeStdin("ab"))
        monkeypatch.setattr(sys, "stdout", io.StringIO())
        return calls

    def test_reads_keys_and_restores_mode(self, tty_calls: list[str]) -> None:
        with raw_session() as session:
            assert session.read_key() == "a"
            assert session.read_key() == "b"
            assert tty_calls == ["get", "raw"]

        assert tty_calls == ["get", "raw", "set:saved"]

    def test_restores_mode_when_body_raises(self, tty_calls: list[str]) -> None:
        with pytest.raises(RuntimeError):
            with raw_session():
                raise RuntimeError("boom")

        assert tty_calls[-1] == "set:saved"

    def test_closed_stdin_raises_eof(self, tty_calls: list[str]) -> None:
        with raw_session() as session:
            session.read_key()
            session.read_key()
            with pytest.raises(EOFError):
                session.read_key()

        assert tty_calls[-1] == "set:saved"

    def test_write_translates_newlines(self, tty_calls: list[str]) -> None:
        with raw_session() as session:
            session.write("one\ntwo")

        out = sys.stdout
        assert isinstance(out, io.StringIO)
        assert out.getvalue() == "one\r\ntwo"


def test_is_interactive_terminal_false_for_pipes(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO())
    assert terminal.is_interactive_terminal() is False
