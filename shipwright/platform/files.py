"""Filesystem helpers."""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path, PurePosixPath

__all__ = ["ExcludeFn", "atomic_write_text", "copy_tree", "remove_tree", "reset_dir"]

ExcludeFn = Callable[[PurePosixPath], bool]


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to path atomically using temp file + replace."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def remove_tree(path: Path) -> None:
    """Delete a directory tree; a missing path is not an error."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def reset_dir(path: Path) -> None:
    """Discard everything under ``path`` and leave an empty directory."""
    remove_tree(path)
    path.mkdir(parents=True, exist_ok=True)


def copy_tree(src: Path, dest: Path, *, exclude: ExcludeFn | None = None) -> None:
    """Copy ``src`` into ``dest``, merging with existing content.

    ``exclude`` receives each entry's path relative to ``src`` (POSIX form) and
    returns True to skip it. Skipping a directory skips everything under it.
    """

    def ignore(directory: str, names: list[str]) -> set[str]:
        if exclude is None:
            return set()
        rel_dir = PurePosixPath(Path(directory).relative_to(src).as_posix())
        return {name for name in names if exclude(rel_dir / name)}

    shutil.copytree(src, dest, ignore=ignore, dirs_exist_ok=True)
