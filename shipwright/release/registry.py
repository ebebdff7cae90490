"""Registry publish invocation."""

from __future__ import annotations

from pathlib import Path

from shipwright.core.result import Result
from shipwright.platform.process import CommandError, CommandOutput, Runner
from shipwright.platform.process import run as run_process
from shipwright.release.model import ReleasePlan

__all__ = ["publish", "publish_command"]


def publish_command(plan: ReleasePlan, *, otp: str | None = None) -> list[str]:
    """Build the registry client command line.

    Always targets the configured registry. Pre-release kinds publish under a
    dist-tag named after the kind so they never become the default install.
    """
    publish_cfg = plan.config.publish
    cmd = [publish_cfg.client, "publish", f"--registry={publish_cfg.registry}"]
    if plan.public_access:
        cmd.append("--access=public")
    if plan.dist_tag is not None:
        cmd.append(f"--tag={plan.dist_tag}")
    if otp:
        cmd.append(f"--otp={otp}")
    return cmd


def publish(
    plan: ReleasePlan,
    staging_dir: Path,
    *,
    otp: str | None = None,
    runner: Runner = run_process,
) -> Result[CommandOutput, CommandError]:
    """Publish the staged tree.

    Output is always streamed: the registry client may prompt for credentials.
    """
    return runner(publish_command(plan, otp=otp), staging_dir, stream=True)
