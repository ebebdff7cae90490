"""Tests for shipwright.output.errors module."""

from __future__ import annotations

from pathlib import Path

import pytest

from shipwright.core.errors import ErrorCode
from shipwright.output.console import MockConsole, Style
from shipwright.output.errors import describe_failure, print_release_failure, release_exit_code
from shipwright.platform.process import CommandFailed, CommandNotFound
from shipwright.release.errors import (
    FilesystemError,
    InvalidReleaseKind,
    InvalidVersionFormat,
    ManifestUnreadable,
    OtpMissing,
    PrepareFailed,
    ReleaseFailure,
    SourceMissing,
    UserCancelled,
)
from shipwright.release.model import Stage, StageFailure


class TestDescribeFailure:
    def test_source_missing(self) -> None:
        cause = SourceMissing(path=Path("/p/dist"), source="dist")
        assert describe_failure(cause) == (
            'Source directory "dist" does not exist. Build the package first.'
        )

    def test_otp_missing(self) -> None:
        assert describe_failure(OtpMissing()) == "No OTP code provided"

    def test_invalid_version(self) -> None:
        assert '"1.2"' in describe_failure(InvalidVersionFormat(version="1.2"))

    def test_prepare_failed_includes_inner(self) -> None:
        inner = CommandFailed(command=("npm", "run", "test"), returncode=1)
        text = describe_failure(PrepareFailed(script="test", cause=inner))
        assert text == "test failed: Command failed with exit code 1: npm run test"

    def test_command_errors_use_their_str(self) -> None:
        assert describe_failure(CommandNotFound(executable="git")) == "Command not found: git"

    def test_cancel_keys(self) -> None:
        assert describe_failure(UserCancelled(key="escape")) == "cancelled with Escape"
        assert describe_failure(UserCancelled(key="interrupt")) == "cancelled with Ctrl+C"


class TestPrintReleaseFailure:
    def test_error_line_names_stage(self) -> None:
        console = MockConsole()
        failure = StageFailure(Stage.PUBLISH, CommandFailed(("npm", "publish"), 1))

        print_release_failure(failure, console)

        assert console.has_error()
        assert console.messages[0] == (
            "error: Release failed (publish): Command failed with exit code 1: npm publish"
        )

    def test_hint_for_missing_executable(self) -> None:
        console = MockConsole()
        failure = StageFailure(Stage.GIT_COMMIT, CommandNotFound(executable="git"))

        print_release_failure(failure, console)

        hints = console.find("hint:")
        assert len(hints) == 1
        assert hints[0].style == Style.DIM
        assert "git" in hints[0].message

    def test_cancellation_is_not_an_error(self) -> None:
        console = MockConsole()
        failure = StageFailure(Stage.GIT_COMMIT, UserCancelled(key="escape"))

        print_release_failure(failure, console)

        assert not console.has_error()
        assert console.messages == ["cancelled: git commit skipped (cancelled with Escape)"]


@pytest.mark.parametrize(
    ("cause", "code"),
    [
        (UserCancelled(key="interrupt"), ErrorCode.OK),
        (InvalidVersionFormat(version="x"), ErrorCode.USER_ERROR),
        (InvalidReleaseKind(kind="a b"), ErrorCode.USER_ERROR),
        (SourceMissing(path=Path("dist"), source="dist"), ErrorCode.USER_ERROR),
        (OtpMissing(), ErrorCode.USER_ERROR),
        (CommandNotFound(executable="npm"), ErrorCode.ENV_ERROR),
        (
            PrepareFailed(script="lint", cause=CommandNotFound(executable="npm")),
            ErrorCode.ENV_ERROR,
        ),
        (CommandFailed(("git", "push"), 128), ErrorCode.COMMAND_ERROR),
        (
            PrepareFailed(script="lint", cause=CommandFailed(("npm", "run", "lint"), 2)),
            ErrorCode.COMMAND_ERROR,
        ),
        (ManifestUnreadable(path=Path("package.json"), reason="x"), ErrorCode.IO_ERROR),
        (FilesystemError(path=Path(".dist"), reason="x"), ErrorCode.IO_ERROR),
    ],
)
def test_release_exit_code(cause: ReleaseFailure, code: ErrorCode) -> None:
    assert release_exit_code(StageFailure(Stage.PUBLISH, cause)) == int(code)
