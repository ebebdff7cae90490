"""Tests for shipwright.git.repository module."""

from __future__ import annotations

from pathlib import Path

from shipwright.core.result import Err, Ok, Result
from shipwright.git.repository import Repository
from shipwright.platform.process import CommandError, CommandFailed, CommandOutput, Reporter


class RecordingRunner:
    def __init__(self, fail_on: str | None = None) -> None:
        self.calls: list[tuple[list[str], Path, bool]] = []
        self.fail_on = fail_on

    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        stream: bool = False,
        report: Reporter | None = None,
    ) -> Result[CommandOutput, CommandError]:
        self.calls.append((cmd, cwd, stream))
        if self.fail_on is not None and self.fail_on in cmd:
            return Err(CommandFailed(command=tuple(cmd), returncode=1))
        return Ok(CommandOutput(command=tuple(cmd)))


class TestRepository:
    def test_command(self, tmp_path: Path) -> None:
        assert Repository(tmp_path).command("status") == ["git", "status"]
        assert Repository(tmp_path, executable="/usr/bin/git").command("push")[0] == "/usr/bin/git"

    def test_release_commands(self, tmp_path: Path) -> None:
        runner = RecordingRunner()
        repo = Repository(tmp_path, runner=runner)

        repo.add_all()
        repo.commit("released v1.2.4 - fixes")
        repo.tag_annotated("v1.2.4", "released v1.2.4 - fixes")
        repo.push()
        repo.push_tags()

        assert [call[0] for call in runner.calls] == [
            ["git", "add", "."],
            ["git", "commit", "-m", "released v1.2.4 - fixes"],
            ["git", "tag", "-a", "v1.2.4", "-m", "released v1.2.4 - fixes"],
            ["git", "push"],
            ["git", "push", "--tags"],
        ]
        assert all(call[1] == tmp_path for call in runner.calls)

    def test_stream_flag_is_forwarded(self, tmp_path: Path) -> None:
        runner = RecordingRunner()
        Repository(tmp_path, stream=True, runner=runner).push()

        assert runner.calls[0][2] is True

    def test_failure_is_returned_unchanged(self, tmp_path: Path) -> None:
        runner = RecordingRunner(fail_on="commit")
        result = Repository(tmp_path, runner=runner).commit("msg")

        assert isinstance(result, Err)
        assert isinstance(result.error, CommandFailed)
        assert result.error.command == ("git", "commit", "-m", "msg")
