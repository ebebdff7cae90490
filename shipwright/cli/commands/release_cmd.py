from __future__ import annotations

import typer

from shipwright.cli.commands._helpers import exit_with_failure
from shipwright.cli.context import build_context
from shipwright.core.result import Err
from shipwright.release.model import build_plan
from shipwright.release.pipeline import run_release
from shipwright.release.version import resolve_release_kind


def release(
    major: bool = typer.Option(False, "--major", help="Major release X.#.# for breaking changes."),
    minor: bool = typer.Option(False, "--minor", help="Minor release #.X.# for feature additions."),
    patch: bool = typer.Option(False, "--patch", help="Patch release #.#.X for bug fixes (default)."),
    release_type: str | None = typer.Option(
        None, "--type", help="Pre-release type (alpha, beta, rc, ...)."
    ),
    src: str | None = typer.Option(
        None, "--src", help="Directory to publish from (default: dist, or publish.src)."
    ),
    root: bool = typer.Option(False, "--root", help="Publish the project root (same as --src=.)."),
    dest: str | None = typer.Option(
        None, "--dest", help="Staging directory name (default: .dist, or publish.dest)."
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Stage everything but do not publish."),
    no_cleanup: bool = typer.Option(False, "--no-cleanup", help="Keep the staging directory."),
    public: bool = typer.Option(False, "--public", help="Publish with --access=public."),
    tag: bool = typer.Option(False, "--tag", help="Create an annotated git tag for the release."),
    push: bool = typer.Option(False, "--push", help="Push the commit (and tag) to the remote."),
    no_git: bool = typer.Option(False, "--no-git", help="Skip all git operations."),
    no_license: bool = typer.Option(False, "--no-license", help="Do not copy the LICENSE file."),
    prepare: bool = typer.Option(
        False, "--prepare", help="Run lint, test and build scripts before releasing."
    ),
    silent: bool = typer.Option(
        False, "--silent", help="No prompts; use the default commit message."
    ),
    otp: bool = typer.Option(False, "--otp", help="Prompt for a registry one-time password."),
    no_version: bool = typer.Option(
        False, "--no-version", help="Publish the current version without bumping it."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show every command and staging step."
    ),
) -> None:
    """Version the package and publish a flattened copy of it to the registry.

    Build output is copied into a staging directory together with README,
    .npmrc and LICENSE, export paths are rewritten relative to it, and the
    registry client publishes from there.

    With --tag or --push you are asked for an optional commit message:
    Enter skips it, Ctrl+J continues on a new line, Escape or Ctrl+C cancels
    and reverts the version.
    """
    ctx = build_context()

    kind = resolve_release_kind(major=major, minor=minor, patch=patch, custom=release_type)
    plan = build_plan(
        ctx.root,
        ctx.config,
        kind=kind,
        src=src,
        dest=dest,
        root_publish=root,
        bump=not no_version,
        dry_run=dry_run,
        no_cleanup=no_cleanup,
        public_access=public,
        tag=tag,
        push=push,
        no_git=no_git,
        no_license=no_license,
        prepare=prepare,
        silent=silent,
        use_otp=otp,
        verbose=verbose,
    )

    outcome = run_release(plan, console=ctx.console)
    if isinstance(outcome, Err):
        exit_with_failure(outcome.error, ctx.console)
