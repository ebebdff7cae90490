from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from shipwright.core.config import Config, load_project_config
from shipwright.core.errors import ErrorCode
from shipwright.core.result import Err
from shipwright.output.console import ConsoleProtocol, RichConsole

ROOT_ENV_VAR = "SHIPWRIGHT_ROOT"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    console: ConsoleProtocol


def project_root() -> Path:
    env = os.environ.get(ROOT_ENV_VAR)
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd().resolve()


def build_context() -> CLIContext:
    root = project_root()
    if not root.is_dir():
        typer.echo(f"error: project root is not a directory: {root}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config_result = load_project_config(root)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(root=root, config=config_result.value, console=RichConsole())
