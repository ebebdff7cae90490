"""Assemble the publishable tree in the staging directory."""

from __future__ import annotations

import shutil
from pathlib import Path, PurePosixPath

from shipwright.core.result import Err, Ok, Result
from shipwright.core.structured import StrDict
from shipwright.output.console import ConsoleProtocol, Style
from shipwright.platform.files import ExcludeFn, copy_tree, reset_dir
from shipwright.release.errors import FilesystemError, SourceMissing
from shipwright.release.manifest import strip_export_prefix, with_version, write_manifest
from shipwright.release.model import MANIFEST_FILENAME, ReleasePlan, StagedTree

__all__ = ["root_files_for", "stage"]

# Never published, whatever the source directory.
_DEPENDENCY_DIRS = frozenset({"node_modules"})
# Additionally skipped when the project root itself is the source.
_ROOT_ONLY_EXCLUDES = frozenset({".DS_Store", "coverage", ".nyc_output"})
# Top-level entries starting with this are VCS metadata (.git, .github, .gitignore).
_VCS_PREFIX = ".git"


def root_files_for(plan: ReleasePlan) -> tuple[str, ...]:
    """Project-root files copied next to the build output."""
    files = plan.config.publish.root_files
    if plan.no_license:
        return files
    return (*files, plan.config.publish.license_file)


def _excluder(plan: ReleasePlan) -> ExcludeFn:
    source = plan.source_dir.resolve()
    staging = plan.staging_dir.resolve()

    def exclude(rel: PurePosixPath) -> bool:
        if any(part in _DEPENDENCY_DIRS for part in rel.parts):
            return True
        if plan.is_root_publish:
            if rel.parts[0].startswith(_VCS_PREFIX):
                return True
            if any(part in _ROOT_ONLY_EXCLUDES for part in rel.parts):
                return True
        return source.joinpath(*rel.parts) == staging

    return exclude


def _list_files(root: Path) -> tuple[PurePosixPath, ...]:
    return tuple(
        sorted(PurePosixPath(p.relative_to(root).as_posix()) for p in root.rglob("*") if p.is_file())
    )


def stage(
    plan: ReleasePlan,
    manifest: StrDict,
    version: str,
    *,
    console: ConsoleProtocol,
) -> Result[StagedTree, SourceMissing | FilesystemError]:
    """Rebuild the staging directory from scratch.

    Previous staging content is always discarded first, so staging the same
    plan twice produces the same tree. Root files are copied after the source
    tree and win on name clashes; the manifest is written last.
    """
    if not plan.source_dir.is_dir():
        return Err(SourceMissing(path=plan.source_dir, source=plan.source))

    staging = plan.staging_dir
    verbose = plan.verbose

    try:
        if verbose:
            console.print(f"Preparing {staging}", Style.DIM)
        reset_dir(staging)

        if verbose:
            console.print(f"Copying {plan.source}/ to {staging}", Style.DIM)
        copy_tree(plan.source_dir, staging, exclude=_excluder(plan))

        if not plan.is_root_publish:
            for name in root_files_for(plan):
                src_file = plan.root / name
                if not src_file.is_file():
                    continue
                if verbose:
                    console.print(f"Copying {name}", Style.DIM)
                dest_file = staging / name
                dest_file.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(src_file, dest_file)
    except OSError as e:
        return Err(FilesystemError(path=Path(e.filename or staging), reason=e.strerror or str(e)))

    staged_manifest = with_version(manifest, version)
    if not plan.is_root_publish:
        staged_manifest = strip_export_prefix(staged_manifest, plan.source)

    manifest_path = staging / MANIFEST_FILENAME
    if verbose:
        console.print(f"Writing {MANIFEST_FILENAME} (v{version})", Style.DIM)
    written = write_manifest(manifest_path, staged_manifest)
    if isinstance(written, Err):
        return written

    return Ok(StagedTree(root=staging, files=_list_files(staging), manifest_path=manifest_path))
