"""Package manifest (``package.json``) access and export-path rewriting."""

from __future__ import annotations

import json
from pathlib import Path

from shipwright.core.result import Err, Ok, Result
from shipwright.core.structured import StrDict, as_str_dict, get_str, map_leaves
from shipwright.platform.files import atomic_write_text
from shipwright.release.errors import FilesystemError, ManifestUnreadable
from shipwright.release.model import normalize_source

__all__ = [
    "load_manifest",
    "manifest_name",
    "manifest_version",
    "strip_export_prefix",
    "with_version",
    "write_manifest",
]


def load_manifest(path: Path) -> Result[StrDict, ManifestUnreadable]:
    """Read a manifest and check it has string ``name`` and ``version`` fields."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ManifestUnreadable(path=path, reason="file not found"))
    except OSError as e:
        return Err(ManifestUnreadable(path=path, reason=e.strerror or str(e)))

    try:
        data_obj: object = json.loads(raw)
    except json.JSONDecodeError as e:
        return Err(ManifestUnreadable(path=path, reason=f"invalid JSON: {e}"))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ManifestUnreadable(path=path, reason="root must be a JSON object"))
    for key in ("name", "version"):
        if get_str(data, key) is None:
            return Err(ManifestUnreadable(path=path, reason=f"missing string field '{key}'"))
    return Ok(data)


def manifest_name(manifest: StrDict) -> str:
    return get_str(manifest, "name") or ""


def manifest_version(manifest: StrDict) -> str:
    return get_str(manifest, "version") or ""


def with_version(manifest: StrDict, version: str) -> StrDict:
    """Copy of ``manifest`` with ``version`` replaced, key order preserved."""
    return {**manifest, "version": version}


def write_manifest(path: Path, manifest: StrDict) -> Result[None, FilesystemError]:
    content = json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"
    try:
        atomic_write_text(path, content)
    except OSError as e:
        return Err(FilesystemError(path=path, reason=e.strerror or str(e)))
    return Ok(None)


def strip_export_prefix(manifest: StrDict, prefix_dir: str) -> StrDict:
    """Rewrite ``./<prefix_dir>/<rest>`` export targets to ``./<rest>``.

    Walks ``exports`` at any depth (subpath and condition maps, fallback
    arrays). Targets outside the prefix and every other manifest field are
    kept as-is. Returns a new manifest; the input is not modified.
    """
    prefix = normalize_source(prefix_dir)
    if prefix == "." or "exports" not in manifest:
        return dict(manifest)

    marker = f"./{prefix}/"

    def strip(target: str) -> str:
        if target.startswith(marker):
            return "./" + target[len(marker) :]
        return target

    return {**manifest, "exports": map_leaves(manifest["exports"], strip)}
