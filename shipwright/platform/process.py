"""Subprocess execution with Result-based error handling.

Every external tool (git, the registry client) is spawned through ``run``.
Calls are synchronous: the pipeline never has two processes in flight.

Usage:
    result = run(["git", "tag", "-a", "v1.2.4", "-m", "released v1.2.4"], cwd=root)
    match result:
        case Ok(output):
            print(output.stdout)
        case Err(CommandNotFound(executable=exe)):
            print(f"{exe} is not installed")
        case Err(error):
            print(error)
"""

from __future__ import annotations

import shlex
import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from shipwright.core.result import Err, Ok, Result

__all__ = [
    "CommandError",
    "CommandFailed",
    "CommandNotFound",
    "CommandOutput",
    "Reporter",
    "Runner",
    "format_command",
    "run",
]

Reporter = Callable[[str], None]


def format_command(cmd: list[str] | tuple[str, ...]) -> str:
    """Render a command for display, quoting arguments that need it."""
    return shlex.join(cmd)


@dataclass(frozen=True, slots=True)
class CommandOutput:
    """Output of a command that exited with status 0.

    ``stdout`` and ``stderr`` are empty when output was streamed.
    """

    command: tuple[str, ...]
    stdout: str = ""
    stderr: str = ""


@dataclass(frozen=True, slots=True)
class CommandFailed:
    """The process ran and exited non-zero."""

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    def __str__(self) -> str:
        return f"Command failed with exit code {self.returncode}: {format_command(self.command)}"


@dataclass(frozen=True, slots=True)
class CommandNotFound:
    """The executable could not be located on PATH."""

    executable: str
    command: tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"Command not found: {self.executable}"


type CommandError = CommandFailed | CommandNotFound


class Runner(Protocol):
    """Callable signature shared by ``run`` and test doubles."""

    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        stream: bool = False,
        report: Reporter | None = None,
    ) -> Result[CommandOutput, CommandError]: ...


def _flush_buffered(report: Reporter | None, stdout: str, stderr: str) -> None:
    if report is None:
        return
    for chunk in (stdout, stderr):
        text = chunk.strip()
        if text:
            report(text)


def run(
    cmd: list[str],
    cwd: Path,
    *,
    stream: bool = False,
    report: Reporter | None = None,
    env: dict[str, str] | None = None,
) -> Result[CommandOutput, CommandError]:
    """Execute a command and wait for it.

    Args:
        cmd: Command and arguments. Never passed through a shell.
        cwd: Working directory for the command.
        stream: Inherit the terminal's stdio instead of buffering. Use this for
            commands that may prompt (registry authentication) or in verbose mode.
        report: Receives buffered stdout/stderr, only when the command fails.
        env: Environment variables (uses current env if None).

    Returns:
        Ok(CommandOutput) on exit status 0, Err(CommandFailed) on any other
        status, Err(CommandNotFound) when the executable is not on PATH.
    """
    command = tuple(cmd)
    if not cmd:
        return Err(CommandNotFound(executable="", command=command))

    executable = shutil.which(cmd[0])
    if executable is None:
        return Err(CommandNotFound(executable=cmd[0], command=command))

    try:
        proc = subprocess.run(
            [executable, *cmd[1:]],
            cwd=str(cwd),
            env=env,
            capture_output=not stream,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        return Err(CommandNotFound(executable=cmd[0], command=command))
    except OSError as e:
        return Err(CommandFailed(command=command, returncode=-1, stderr=str(e)))

    stdout = proc.stdout or ""
    stderr = proc.stderr or ""

    if proc.returncode != 0:
        _flush_buffered(report, stdout, stderr)
        return Err(
            CommandFailed(
                command=command,
                returncode=proc.returncode,
                stdout=stdout,
                stderr=stderr,
            )
        )

    return Ok(CommandOutput(command=command, stdout=stdout, stderr=stderr))
