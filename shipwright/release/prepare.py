"""Run the project's lint, test and build scripts before releasing."""

from __future__ import annotations

from pathlib import Path

from shipwright.core.result import Err, Ok, Result
from shipwright.core.structured import StrDict, get_table
from shipwright.output.console import ConsoleProtocol, Style
from shipwright.platform.process import Runner, format_command
from shipwright.platform.process import run as run_process
from shipwright.release.errors import PrepareFailed

__all__ = ["CHECK_SCRIPTS", "run_checks"]

CHECK_SCRIPTS: tuple[str, ...] = ("lint", "test", "build")


def run_checks(
    root: Path,
    manifest: StrDict,
    *,
    console: ConsoleProtocol,
    client: str = "npm",
    verbose: bool = False,
    runner: Runner = run_process,
) -> Result[None, PrepareFailed]:
    """Run each check script the manifest defines, in order, stopping at the first failure.

    Script output is buffered and only shown when a script fails, unless
    ``verbose`` streams it live.
    """
    scripts = get_table(manifest, "scripts") or {}

    console.header("Running prepare sequence")
    for script in CHECK_SCRIPTS:
        if not isinstance(scripts.get(script), str):
            console.print(f"no {script} script, skipping", Style.DIM)
            continue

        cmd = [client, "run", script]
        console.print(f"running {script}", Style.BOLD)
        if verbose:
            console.print(format_command(cmd), Style.DIM)

        result = runner(
            cmd, root, stream=verbose, report=lambda text: console.print(text, Style.ERROR)
        )
        if isinstance(result, Err):
            return Err(PrepareFailed(script=script, cause=result.error))
        if not verbose:
            console.success(f"{script} passed")

    console.success("prepare sequence completed")
    return Ok(None)
