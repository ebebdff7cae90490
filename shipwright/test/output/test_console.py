"""Tests for shipwright.output.console module."""

from __future__ import annotations

import pytest

from shipwright.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestMockConsole:
    def test_records_styles(self) -> None:
        console = MockConsole()

        console.print("plain")
        console.print("detail", Style.DIM)
        console.success("done")
        console.error("broken")
        console.warning("careful")
        console.info("fyi")
        console.cancelled("skipped")
        console.header("Section")
        console.newline()

        assert console.messages == [
            "plain",
            "detail",
            "OK done",
            "error: broken",
            "warning: careful",
            "info: fyi",
            "cancelled: skipped",
            "Section",
            "",
        ]
        assert console.count(Style.DIM) == 1
        assert console.count(Style.CANCELLED) == 1
        assert console.has_error()

    def test_find_and_text(self) -> None:
        console = MockConsole()
        console.print("Publishing to registry")
        console.print("Pushing tags")

        assert len(console.find("Pu")) == 2
        assert console.text == "Publishing to registry\nPushing tags"

    def test_no_error(self) -> None:
        console = MockConsole()
        console.cancelled("nothing to see")
        assert not console.has_error()

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.print("ok")


class TestRichConsole:
    def test_plain_output_goes_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().print("hello")

        captured = capsys.readouterr()
        assert "hello" in captured.out
        assert captured.err == ""

    def test_error_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().error("broken")

        captured = capsys.readouterr()
        assert "error: broken" in captured.err
        assert "broken" not in captured.out

    def test_error_style_print_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().print("npm ERR! 403", Style.ERROR)

        captured = capsys.readouterr()
        assert "npm ERR! 403" in captured.err

    def test_markup_is_escaped(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().warning("code [E403] [bold]x[/bold]")

        captured = capsys.readouterr()
        assert "[E403]" in captured.out
        assert "[bold]x[/bold]" in captured.out

    def test_success_and_cancelled_prefixes(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.success("released")
        console.cancelled("skipped")

        out = capsys.readouterr().out
        assert "OK released" in out
        assert "cancelled: skipped" in out
