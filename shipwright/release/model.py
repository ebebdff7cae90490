from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath

from shipwright.core.config import Config
from shipwright.core.result import Result
from shipwright.release.errors import ReleaseFailure

STANDARD_KINDS: tuple[str, ...] = ("major", "minor", "patch")
MANIFEST_FILENAME = "package.json"


def normalize_source(src: str) -> str:
    """Normalize a source directory argument: ``./dist/`` -> ``dist``, ``./`` -> ``.``."""
    cleaned = src.strip().replace("\\", "/")
    if not cleaned:
        return "."
    return PurePosixPath(cleaned).as_posix()


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    """Everything one invocation needs, resolved up front and never mutated."""

    root: Path
    kind: str
    source: str
    staging_dir: Path
    config: Config = field(default_factory=Config)
    bump: bool = True
    dry_run: bool = False
    no_cleanup: bool = False
    public_access: bool = False
    tag: bool = False
    push: bool = False
    no_git: bool = False
    no_license: bool = False
    prepare: bool = False
    silent: bool = False
    use_otp: bool = False
    verbose: bool = False

    @property
    def is_root_publish(self) -> bool:
        return self.source == "."

    @property
    def source_dir(self) -> Path:
        return self.root if self.is_root_publish else self.root / self.source

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_FILENAME

    @property
    def dist_tag(self) -> str | None:
        """Registry dist-tag for pre-release kinds; None publishes under the default tag."""
        return None if self.kind in STANDARD_KINDS else self.kind

    @property
    def commits(self) -> bool:
        return self.tag or self.push


def staging_dir_for(root: Path, source: str, dest: str) -> Path:
    """Where the publishable tree is assembled.

    Publishing the project root stages into a sibling ``.<name>-dist`` so the
    copy never contains itself.
    """
    if normalize_source(source) == ".":
        return root.parent / f".{root.name}-dist"
    return root / dest


def build_plan(
    root: Path,
    config: Config,
    *,
    kind: str,
    src: str | None = None,
    dest: str | None = None,
    root_publish: bool = False,
    bump: bool = True,
    dry_run: bool = False,
    no_cleanup: bool = False,
    public_access: bool = False,
    tag: bool = False,
    push: bool = False,
    no_git: bool = False,
    no_license: bool = False,
    prepare: bool = False,
    silent: bool = False,
    use_otp: bool = False,
    verbose: bool = False,
) -> ReleasePlan:
    source = "." if root_publish else normalize_source(src or config.publish.src)
    return ReleasePlan(
        root=root,
        kind=kind,
        source=source,
        staging_dir=staging_dir_for(root, source, dest or config.publish.dest),
        config=config,
        bump=bump,
        dry_run=dry_run,
        no_cleanup=no_cleanup,
        public_access=public_access,
        tag=tag,
        push=push,
        no_git=no_git,
        no_license=no_license,
        prepare=prepare,
        silent=silent,
        use_otp=use_otp,
        verbose=verbose,
    )


@dataclass(frozen=True, slots=True)
class VersionState:
    original: str
    next: str

    @property
    def changed(self) -> bool:
        return self.original != self.next


class Stage(Enum):
    INIT = "init"
    PREPARE = "prepare"
    VERSION = "version"
    STAGE = "stage"
    PERSIST = "persist"
    GIT_COMMIT = "git commit"
    GIT_TAG = "git tag"
    GIT_PUSH = "git push"
    PUBLISH = "publish"
    CLEANUP = "cleanup"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class StageFailure:
    stage: Stage
    cause: ReleaseFailure


@dataclass(frozen=True, slots=True)
class StagedTree:
    root: Path
    files: tuple[PurePosixPath, ...]
    manifest_path: Path


@dataclass(frozen=True, slots=True)
class ReleaseSummary:
    name: str
    version: VersionState
    published: bool
    staging_dir: Path | None = None  # set when the staged tree was retained


type PipelineOutcome = Result[ReleaseSummary, StageFailure]
