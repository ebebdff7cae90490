"""Next-version computation.

Versions are ``MAJOR.MINOR.PATCH`` optionally followed by pre-release
segments of the form ``-<tag>.<n>``. Standard kinds bump a numeric component;
any other kind is a pre-release tag name.
"""

from __future__ import annotations

import re

from shipwright.core.result import Err, Ok, Result
from shipwright.release.errors import InvalidReleaseKind, InvalidVersionFormat, VersionError

__all__ = ["bump_version", "resolve_release_kind"]

_VERSION_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)((?:-[0-9A-Za-z][0-9A-Za-z-]*\.\d+)*)$"
)
_KIND_RE = re.compile(r"^[0-9A-Za-z][0-9A-Za-z-]*$")


def resolve_release_kind(
    *,
    major: bool = False,
    minor: bool = False,
    patch: bool = False,
    custom: str | None = None,
) -> str:
    """Pick the release kind from command-line flags.

    Boolean flags win over ``--type`` in the order major, minor, patch, so
    ``--type=major`` is only reached when no boolean flag is set. Defaults to
    patch.
    """
    if major:
        return "major"
    if minor:
        return "minor"
    if patch:
        return "patch"
    if custom is not None and custom.strip():
        return custom.strip()
    return "patch"


def _bump_prerelease(current: str, tag: str) -> str:
    matches = list(re.finditer(rf"-{re.escape(tag)}\.(\d+)", current))
    if not matches:
        return f"{current}-{tag}.0"
    last = matches[-1]
    # Anything after the matched segment is dropped along with the old counter.
    return f"{current[: last.start()]}-{tag}.{int(last.group(1)) + 1}"


def bump_version(current: str, kind: str) -> Result[str, VersionError]:
    """Compute the version that follows ``current`` for a release ``kind``.

    Standard kinds drop any pre-release suffix:
        bump_version("1.2.3", "minor") -> Ok("1.3.0")
        bump_version("1.2.3-rc.1", "patch") -> Ok("1.2.4")

    Any other kind is a pre-release tag:
        bump_version("1.2.3", "alpha") -> Ok("1.2.3-alpha.0")
        bump_version("1.2.3-alpha.0", "alpha") -> Ok("1.2.3-alpha.1")
        bump_version("1.0.0-alpha.0", "beta") -> Ok("1.0.0-alpha.0-beta.0")
    """
    m = _VERSION_RE.match(current.strip())
    if m is None:
        return Err(InvalidVersionFormat(version=current))

    major, minor, patch = int(m.group(1)), int(m.group(2)), int(m.group(3))

    match kind:
        case "major":
            return Ok(f"{major + 1}.0.0")
        case "minor":
            return Ok(f"{major}.{minor + 1}.0")
        case "patch":
            return Ok(f"{major}.{minor}.{patch + 1}")
        case _:
            pass

    if _KIND_RE.match(kind) is None:
        return Err(InvalidReleaseKind(kind=kind))
    return Ok(_bump_prerelease(current.strip(), kind))
