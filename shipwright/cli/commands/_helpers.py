"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from shipwright.output.console import ConsoleProtocol
from shipwright.output.errors import print_release_failure, release_exit_code
from shipwright.release.model import StageFailure


def exit_with_failure(failure: StageFailure, console: ConsoleProtocol) -> NoReturn:
    """Report a pipeline failure and exit with its mapped code.

    Cancellations are reported as such and exit 0.
    """
    print_release_failure(failure, console)
    raise typer.Exit(code=release_exit_code(failure))
