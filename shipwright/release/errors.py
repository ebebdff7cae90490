"""Error types for the release pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from shipwright.platform.process import CommandError, CommandFailed, CommandNotFound

__all__ = [
    "FilesystemError",
    "InvalidReleaseKind",
    "InvalidVersionFormat",
    "ManifestUnreadable",
    "OtpMissing",
    "PrepareFailed",
    "ReleaseFailure",
    "SourceMissing",
    "UserCancelled",
    "VersionError",
]


@dataclass(frozen=True, slots=True)
class InvalidVersionFormat:
    version: str


@dataclass(frozen=True, slots=True)
class InvalidReleaseKind:
    kind: str


@dataclass(frozen=True, slots=True)
class ManifestUnreadable:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class SourceMissing:
    path: Path
    source: str


@dataclass(frozen=True, slots=True)
class FilesystemError:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class PrepareFailed:
    script: str
    cause: CommandError


@dataclass(frozen=True, slots=True)
class OtpMissing:
    pass


@dataclass(frozen=True, slots=True)
class UserCancelled:
    """The user pressed Escape or Ctrl+C in an interactive prompt."""

    key: Literal["escape", "interrupt"]


VersionError = InvalidVersionFormat | InvalidReleaseKind

ReleaseFailure = (
    InvalidVersionFormat
    | InvalidReleaseKind
    | ManifestUnreadable
    | SourceMissing
    | FilesystemError
    | PrepareFailed
    | OtpMissing
    | UserCancelled
    | CommandFailed
    | CommandNotFound
)
