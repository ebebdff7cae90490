"""Test doubles shared by the release tests."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from shipwright.core.result import Err, Ok, Result
from shipwright.platform.process import CommandError, CommandFailed, CommandOutput, Reporter
from shipwright.release.errors import OtpMissing, UserCancelled


@dataclass
class Call:
    cmd: list[str]
    cwd: Path
    stream: bool


class FakeRunner:
    """Records commands; fails any command whose argv contains ``fail_on``."""

    def __init__(self, *, fail_on: str | None = None, stderr: str = "") -> None:
        self.calls: list[Call] = []
        self.fail_on = fail_on
        self.stderr = stderr

    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        stream: bool = False,
        report: Reporter | None = None,
    ) -> Result[CommandOutput, CommandError]:
        self.calls.append(Call(cmd=list(cmd), cwd=cwd, stream=stream))
        if self.fail_on is not None and self.fail_on in cmd:
            if report is not None and self.stderr:
                report(self.stderr)
            return Err(CommandFailed(command=tuple(cmd), returncode=1, stderr=self.stderr))
        return Ok(CommandOutput(command=tuple(cmd)))

    @property
    def commands(self) -> list[list[str]]:
        return [c.cmd for c in self.calls]


class FakeSession:
    """Raw session fed from a fixed key sequence."""

    def __init__(self, keys: list[str]) -> None:
        self._keys = list(keys)
        self.output: list[str] = []

    def read_key(self) -> str:
        if not self._keys:
            raise EOFError("no more keys")
        return self._keys.pop(0)

    def write(self, text: str) -> None:
        self.output.append(text)


@dataclass
class SessionTracker:
    """Session factory that records whether the raw session is held."""

    keys: list[str]
    opened: int = 0
    closed: int = 0
    session: FakeSession | None = None

    @property
    def active(self) -> bool:
        return self.opened > self.closed

    @contextmanager
    def __call__(self) -> Iterator[FakeSession]:
        self.opened += 1
        self.session = FakeSession(self.keys)
        try:
            yield self.session
        finally:
            self.closed += 1


@dataclass
class ScriptedPrompter:
    """Answers the pipeline's prompts without a terminal."""

    message: Result[str, UserCancelled] | None = None
    code: Result[str, UserCancelled | OtpMissing] = field(default_factory=lambda: Ok("123456"))
    asked: list[str] = field(default_factory=lambda: [])

    def commit_message(self, default: str, *, silent: bool) -> Result[str, UserCancelled]:
        self.asked.append("commit")
        if self.message is None or silent:
            return Ok(default)
        return self.message

    def otp(self) -> Result[str, UserCancelled | OtpMissing]:
        self.asked.append("otp")
        return self.code


def make_project(
    root: Path,
    *,
    version: str = "1.2.3",
    exports: object | None = None,
    scripts: dict[str, str] | None = None,
    with_dist: bool = True,
) -> Path:
    """Lay out a minimal package with a built ``dist/`` and root files."""
    root.mkdir(parents=True, exist_ok=True)
    manifest: dict[str, object] = {"name": "demo-pkg", "version": version}
    if exports is not None:
        manifest["exports"] = exports
    if scripts is not None:
        manifest["scripts"] = scripts
    (root / "package.json").write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
    (root / "README.md").write_text("# demo\n", encoding="utf-8")
    (root / "LICENSE").write_text("MIT\n", encoding="utf-8")
    if with_dist:
        (root / "dist").mkdir()
        (root / "dist" / "index.mjs").write_text("export default 1\n", encoding="utf-8")
        (root / "dist" / "index.d.ts").write_text("export {}\n", encoding="utf-8")
    return root


def read_version(root: Path) -> str:
    data = json.loads((root / "package.json").read_text(encoding="utf-8"))
    return str(data["version"])
