from __future__ import annotations

import typer

from shipwright.cli.commands._helpers import exit_with_failure
from shipwright.cli.context import build_context
from shipwright.core.result import Err
from shipwright.core.structured import StrDict
from shipwright.release.manifest import load_manifest
from shipwright.release.model import MANIFEST_FILENAME, Stage, StageFailure
from shipwright.release.prepare import run_checks


def prepare(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show all output from the underlying scripts."
    ),
) -> None:
    """Run the lint, test and build scripts in sequence, stopping at the first failure.

    Scripts missing from the manifest are skipped. Output is only shown for a
    failing script unless --verbose is given.
    """
    ctx = build_context()

    manifest_path = ctx.root / MANIFEST_FILENAME
    manifest: StrDict = {}
    if manifest_path.exists():
        loaded = load_manifest(manifest_path)
        if isinstance(loaded, Err):
            exit_with_failure(StageFailure(Stage.INIT, loaded.error), ctx.console)
        manifest = loaded.value

    result = run_checks(
        ctx.root,
        manifest,
        console=ctx.console,
        client=ctx.config.publish.client,
        verbose=verbose,
    )
    if isinstance(result, Err):
        exit_with_failure(StageFailure(Stage.PREPARE, result.error), ctx.console)
