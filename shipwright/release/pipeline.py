"""Release orchestration.

Stages run strictly in order:

    init -> prepare? -> version -> stage -> persist -> git commit? -> git tag?
         -> git push? -> publish -> cleanup

Nothing on disk outside the staging directory changes before ``persist``.
From ``persist`` on, any failure (or a cancelled prompt) restores the
manifest's original version and removes the staging directory before the
failure is returned.
"""

from __future__ import annotations

from shipwright.core.result import Err, Ok, Result
from shipwright.core.structured import StrDict
from shipwright.git.repository import Repository
from shipwright.output.console import ConsoleProtocol, Style
from shipwright.platform.files import remove_tree
from shipwright.platform.process import Runner, format_command
from shipwright.platform.process import run as run_process
from shipwright.release.editor import Prompter, TerminalPrompter
from shipwright.release.errors import SourceMissing, UserCancelled
from shipwright.release.manifest import (
    load_manifest,
    manifest_name,
    manifest_version,
    with_version,
    write_manifest,
)
from shipwright.release.model import (
    PipelineOutcome,
    ReleasePlan,
    ReleaseSummary,
    Stage,
    StagedTree,
    StageFailure,
    VersionState,
)
from shipwright.release.prepare import run_checks
from shipwright.release.registry import publish, publish_command
from shipwright.release.staging import stage
from shipwright.release.version import bump_version

__all__ = ["ReleaseOrchestrator", "run_release"]


def _mask_otp(cmd: list[str]) -> list[str]:
    return ["--otp=******" if arg.startswith("--otp=") else arg for arg in cmd]


class ReleaseOrchestrator:
    """Runs one release for one plan. Not reusable across invocations."""

    def __init__(
        self,
        plan: ReleasePlan,
        *,
        console: ConsoleProtocol,
        prompter: Prompter | None = None,
        runner: Runner = run_process,
    ) -> None:
        self.plan = plan
        self.console = console
        self.prompter: Prompter = prompter or TerminalPrompter()
        self.runner = runner
        self.version: VersionState | None = None
        self._persisted = False

    def run(self) -> PipelineOutcome:
        plan = self.plan

        loaded = load_manifest(plan.manifest_path)
        if isinstance(loaded, Err):
            return Err(StageFailure(Stage.INIT, loaded.error))
        manifest = loaded.value
        name = manifest_name(manifest)
        original = manifest_version(manifest)

        if plan.prepare:
            checked = run_checks(
                plan.root,
                manifest,
                console=self.console,
                client=plan.config.publish.client,
                verbose=plan.verbose,
                runner=self.runner,
            )
            if isinstance(checked, Err):
                return Err(StageFailure(Stage.PREPARE, checked.error))

        next_version = original
        if plan.bump:
            bumped = bump_version(original, plan.kind)
            if isinstance(bumped, Err):
                return Err(StageFailure(Stage.VERSION, bumped.error))
            next_version = bumped.value
        self.version = VersionState(original=original, next=next_version)

        self.console.print(f"{name} v{original} → v{next_version}", Style.BOLD)
        self._detail(f"Source: {plan.source}/")

        staged = stage(plan, manifest, next_version, console=self.console)
        if isinstance(staged, Err):
            if isinstance(staged.error, SourceMissing):
                return Err(StageFailure(Stage.STAGE, staged.error))
            return self._abort(StageFailure(Stage.STAGE, staged.error))

        released = self._release(name, manifest, staged.value)
        if isinstance(released, Err):
            return self._abort(released.error)
        return released

    def _release(
        self, name: str, manifest: StrDict, tree: StagedTree
    ) -> Result[ReleaseSummary, StageFailure]:
        plan = self.plan
        assert self.version is not None
        next_version = self.version.next

        if not plan.dry_run:
            self._detail(f"Updating {plan.manifest_path.name} to v{next_version}")
            self._persisted = True
            written = write_manifest(plan.manifest_path, with_version(manifest, next_version))
            if isinstance(written, Err):
                return Err(StageFailure(Stage.PERSIST, written.error))

        if not plan.no_git and not plan.dry_run:
            committed = self._git(next_version)
            if isinstance(committed, Err):
                return committed

        published = False
        if plan.dry_run:
            self.console.info("Dry run - skipping publish")
        else:
            pushed = self._publish(tree)
            if isinstance(pushed, Err):
                return pushed
            published = True

        retained = tree.root if plan.no_cleanup else None
        if not plan.no_cleanup:
            self._detail(f"Cleaning up {tree.root}")
            self._remove_staging()

        self.console.success(f"Successfully released {name}@{next_version}")
        return Ok(
            ReleaseSummary(name=name, version=self.version, published=published, staging_dir=retained)
        )

    def _git(self, version: str) -> Result[None, StageFailure]:
        plan = self.plan
        git_cfg = plan.config.git
        repo = Repository(
            plan.root, stream=plan.verbose, report=self._report, runner=self.runner
        )
        message = git_cfg.default_message(version)

        if plan.commits:
            asked = self.prompter.commit_message(message, silent=plan.silent)
            if isinstance(asked, Err):
                return Err(StageFailure(Stage.GIT_COMMIT, asked.error))
            message = asked.value

            self.console.print("Committing changes")
            self._detail(format_command(repo.command("add", ".")))
            added = repo.add_all()
            if isinstance(added, Err):
                return Err(StageFailure(Stage.GIT_COMMIT, added.error))
            self._detail(format_command(repo.command("commit", "-m", message)))
            committed = repo.commit(message)
            if isinstance(committed, Err):
                return Err(StageFailure(Stage.GIT_COMMIT, committed.error))

        if plan.tag:
            tag_name = git_cfg.tag_name(version)
            self.console.print(f"Creating git tag {tag_name}")
            tagged = repo.tag_annotated(tag_name, message)
            if isinstance(tagged, Err):
                return Err(StageFailure(Stage.GIT_TAG, tagged.error))

        if plan.push:
            self.console.print("Pushing to remote")
            pushed = repo.push()
            if isinstance(pushed, Err):
                return Err(StageFailure(Stage.GIT_PUSH, pushed.error))
            if plan.tag:
                self.console.print("Pushing tags")
                pushed_tags = repo.push_tags()
                if isinstance(pushed_tags, Err):
                    return Err(StageFailure(Stage.GIT_PUSH, pushed_tags.error))

        return Ok(None)

    def _publish(self, tree: StagedTree) -> Result[None, StageFailure]:
        plan = self.plan

        otp: str | None = None
        if plan.use_otp:
            asked = self.prompter.otp()
            if isinstance(asked, Err):
                return Err(StageFailure(Stage.PUBLISH, asked.error))
            otp = asked.value

        self.console.print(f"Publishing to {plan.config.publish.registry}")
        self._detail(format_command(_mask_otp(publish_command(plan, otp=otp))))
        result = publish(plan, tree.root, otp=otp, runner=self.runner)
        if isinstance(result, Err):
            return Err(StageFailure(Stage.PUBLISH, result.error))
        return Ok(None)

    def _abort(self, failure: StageFailure) -> Err[StageFailure]:
        """Undo persisted state, then return ``failure`` unchanged."""
        if isinstance(failure.cause, UserCancelled):
            self.console.cancelled("reverting version and exiting")
        if self._persisted:
            self._revert()
        if not self.plan.no_cleanup:
            self._remove_staging()
        return Err(failure)

    def _revert(self) -> None:
        assert self.version is not None
        original = self.version.original
        path = self.plan.manifest_path

        loaded = load_manifest(path)
        if isinstance(loaded, Err):
            self.console.error(f"Failed to revert version: {loaded.error.reason}")
            return

        current = manifest_version(loaded.value)
        if current == original:
            return

        self._detail(f"Reverting version from v{current} to v{original}")
        written = write_manifest(path, with_version(loaded.value, original))
        if isinstance(written, Err):
            self.console.error(f"Failed to revert version: {written.error.reason}")
            return
        self.console.success(f"Version reverted to v{original}")

    def _remove_staging(self) -> None:
        staging = self.plan.staging_dir
        try:
            remove_tree(staging)
        except OSError as e:
            # Not fatal: the outcome is already decided.
            self.console.warning(f"could not remove {staging}: {e.strerror or e}")

    def _detail(self, message: str) -> None:
        if self.plan.verbose:
            self.console.print(message, Style.DIM)

    def _report(self, text: str) -> None:
        self.console.print(text, Style.ERROR)


def run_release(
    plan: ReleasePlan,
    *,
    console: ConsoleProtocol,
    prompter: Prompter | None = None,
    runner: Runner = run_process,
) -> PipelineOutcome:
    """Run the full release pipeline for ``plan``."""
    return ReleaseOrchestrator(plan, console=console, prompter=prompter, runner=runner).run()

