"""Error presentation utilities.

Centralized failure formatting and exit code mapping for the release
pipeline, so every command reports failures the same way.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shipwright.core.errors import ErrorCode
from shipwright.output.console import Style
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

if TYPE_CHECKING:
    from shipwright.output.console import ConsoleProtocol
    from shipwright.release.model import StageFailure

__all__ = ["describe_failure", "print_release_failure", "release_exit_code"]


def describe_failure(cause: ReleaseFailure) -> str:
    """One-line description of a failure cause."""
    match cause:
        case InvalidVersionFormat(version=version):
            return f'Invalid version "{version}" (expected MAJOR.MINOR.PATCH[-tag.N])'
        case InvalidReleaseKind(kind=kind):
            return f'Invalid release type "{kind}" (letters, digits and "-" only)'
        case ManifestUnreadable(path=path, reason=reason):
            return f"Cannot read {path}: {reason}"
        case SourceMissing(source=source):
            return f'Source directory "{source}" does not exist. Build the package first.'
        case FilesystemError(path=path, reason=reason):
            return f"Filesystem error at {path}: {reason}"
        case PrepareFailed(script=script, cause=inner):
            return f"{script} failed: {inner}"
        case OtpMissing():
            return "No OTP code provided"
        case UserCancelled(key="escape"):
            return "cancelled with Escape"
        case UserCancelled():
            return "cancelled with Ctrl+C"
        case _:
            return str(cause)


def _hint(cause: ReleaseFailure) -> str | None:
    match cause:
        case CommandNotFound(executable=exe):
            return f"install {exe} and make sure it is on PATH"
        case SourceMissing():
            return "use --src=<dir> or --root to publish another directory"
        case OtpMissing():
            return "--otp needs an interactive terminal"
        case _:
            return None


def print_release_failure(failure: StageFailure, console: ConsoleProtocol) -> None:
    """Print a failure (or cancellation) to console with appropriate formatting."""
    if isinstance(failure.cause, UserCancelled):
        console.cancelled(f"{failure.stage} skipped ({describe_failure(failure.cause)})")
        return

    console.error(f"Release failed ({failure.stage}): {describe_failure(failure.cause)}")
    hint = _hint(failure.cause)
    if hint:
        console.print(f"hint: {hint}", Style.DIM)


def release_exit_code(failure: StageFailure) -> int:
    """Get exit code for a pipeline failure. Cancellation exits 0."""
    match failure.cause:
        case UserCancelled():
            return int(ErrorCode.OK)
        case InvalidVersionFormat() | InvalidReleaseKind() | SourceMissing() | OtpMissing():
            return int(ErrorCode.USER_ERROR)
        case CommandNotFound():
            return int(ErrorCode.ENV_ERROR)
        case PrepareFailed(cause=CommandNotFound()):
            return int(ErrorCode.ENV_ERROR)
        case CommandFailed() | PrepareFailed():
            return int(ErrorCode.COMMAND_ERROR)
        case ManifestUnreadable() | FilesystemError():
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.COMMAND_ERROR)
