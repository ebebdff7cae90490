"""Release pipeline: version, stage, commit, tag, push, publish."""

from __future__ import annotations

from shipwright.release.model import (
    PipelineOutcome,
    ReleasePlan,
    ReleaseSummary,
    Stage,
    StageFailure,
    VersionState,
    build_plan,
)
from shipwright.release.pipeline import ReleaseOrchestrator, run_release

__all__ = [
    "PipelineOutcome",
    "ReleaseOrchestrator",
    "ReleasePlan",
    "ReleaseSummary",
    "Stage",
    "StageFailure",
    "VersionState",
    "build_plan",
    "run_release",
]
