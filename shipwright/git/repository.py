"""Git repository abstraction.

Wraps the handful of git commands a release needs. Every method goes through
the injected runner and returns its Result unchanged, so callers see
``CommandFailed``/``CommandNotFound`` exactly as the process layer reports
them.

Usage:
    repo = Repository(root, stream=verbose)
    match repo.tag_annotated("v1.2.4", "released v1.2.4"):
        case Ok(_):
            print("tagged")
        case Err(e):
            print(e)
"""

from __future__ import annotations

from pathlib import Path

from shipwright.core.result import Result
from shipwright.platform.process import CommandError, CommandOutput, Reporter, Runner
from shipwright.platform.process import run as run_process

__all__ = ["Repository"]


class Repository:
    """Git working tree at ``path``.

    Attributes:
        path: Repository root
        stream: Show git's own output instead of buffering it
    """

    def __init__(
        self,
        path: Path,
        *,
        stream: bool = False,
        report: Reporter | None = None,
        runner: Runner = run_process,
        executable: str = "git",
    ) -> None:
        self.path = path
        self.stream = stream
        self._report = report
        self._runner = runner
        self._git = executable

    def command(self, *args: str) -> list[str]:
        """Full command line for ``git <args>``."""
        return [self._git, *args]

    def add_all(self) -> Result[CommandOutput, CommandError]:
        return self._run("add", ".")

    def commit(self, message: str) -> Result[CommandOutput, CommandError]:
        return self._run("commit", "-m", message)

    def tag_annotated(self, name: str, message: str) -> Result[CommandOutput, CommandError]:
        return self._run("tag", "-a", name, "-m", message)

    def push(self) -> Result[CommandOutput, CommandError]:
        return self._run("push")

    def push_tags(self) -> Result[CommandOutput, CommandError]:
        return self._run("push", "--tags")

    def _run(self, *args: str) -> Result[CommandOutput, CommandError]:
        return self._runner(
            self.command(*args),
            self.path,
            stream=self.stream,
            report=self._report,
        )
