"""End-to-end tests for one wrapped invocation."""

from __future__ import annotations

from unittest import mock

from typer.testing import CliRunner

from claude_wrapper import cli
from claude_wrapper.app import cleanup, run
from claude_wrapper.exceptions import GitCommandError, ProgramNotFoundError, RepoDetectionError, SyncError
from claude_wrapper.exclude import exclude_path
from claude_wrapper.models import Settings

from tests.support import FakeBranchLister, WorkspaceTestCase

NOW = 1_700_000_000


class RunTests(WorkspaceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.settings = Settings(store_root=self.store_base.parent)
        self.lister = FakeBranchLister({"main", "feature/x"})

    def _session(self, branch: str):
        return mock.patch("claude_wrapper.app.build_session", return_value=self.context(branch))

    def test_syncs_around_program_and_returns_its_exit_code(self) -> None:
        self.write(self.store_base / "CLAUDE.md", "default config")

        def fake_program(program, args):
            self.assertEqual((self.repo / "CLAUDE.md").read_text(), "default config")
            (self.repo / "CLAUDE.md").write_text("custom")
            return 7

        with self._session("feature/x"), mock.patch("claude_wrapper.runner.run_program", side_effect=fake_program) as prog:
            code = run(["--continue"], settings=self.settings, lister=self.lister, clock=lambda: NOW)

        self.assertEqual(code, 7)
        prog.assert_called_once_with("claude", ["--continue"])
        branch_copy = self.store_base / "branches" / "feature%2Fx" / "CLAUDE.md"
        self.assertEqual(branch_copy.read_text(), "custom")
        self.assertEqual((self.store_base / "CLAUDE.md").read_text(), "default config")

    def test_passes_through_outside_a_repository(self) -> None:
        failure = GitCommandError(["git", "rev-parse", "--show-toplevel"], 128)
        with mock.patch("claude_wrapper.app.build_session", side_effect=failure), mock.patch(
            "claude_wrapper.runner.exec_program", return_value=0
        ) as exec_program, mock.patch("claude_wrapper.runner.run_program") as run_program:
            run(["-p", "hi"], settings=self.settings)

        exec_program.assert_called_once_with("claude", ["-p", "hi"])
        run_program.assert_not_called()
        self.assertFalse(self.store_base.exists())

    def test_passes_through_on_detached_head(self) -> None:
        with mock.patch("claude_wrapper.app.build_session", side_effect=RepoDetectionError("not on a branch")), mock.patch(
            "claude_wrapper.runner.exec_program", return_value=0
        ) as exec_program:
            run([], settings=self.settings)

        exec_program.assert_called_once_with("claude", [])

    def test_sync_out_runs_when_program_is_missing(self) -> None:
        self.write(self.repo / "CLAUDE.md", "edited")
        self.write(exclude_path(self.repo), "CLAUDE.md\n")

        with self._session("main"), mock.patch(
            "claude_wrapper.runner.run_program", side_effect=ProgramNotFoundError("claude")
        ):
            with self.assertRaises(ProgramNotFoundError):
                run([], settings=self.settings, lister=self.lister)

        self.assertEqual((self.store_base / "CLAUDE.md").read_text(), "edited")

    def test_sync_in_failure_stops_before_program(self) -> None:
        with self._session("main"), mock.patch(
            "claude_wrapper.app.sync_in", side_effect=SyncError("in", "CLAUDE.md", OSError("denied"))
        ), mock.patch("claude_wrapper.runner.run_program") as run_program:
            with self.assertRaises(SyncError):
                run([], settings=self.settings, lister=self.lister)

        run_program.assert_not_called()

    def test_runs_cleanup_after_sync_out(self) -> None:
        stale = self.store_base / "branches" / "gone"
        self.write(stale / "CLAUDE.md", "old")

        with self._session("main"), mock.patch("claude_wrapper.runner.run_program", return_value=0):
            run([], settings=self.settings, lister=self.lister, clock=lambda: NOW)

        self.assertEqual((stale / ".deleted_at").read_text(), str(NOW))

    def test_cleanup_can_be_disabled(self) -> None:
        stale = self.store_base / "branches" / "gone"
        self.write(stale / "CLAUDE.md", "old")
        self.settings.cleanup = False

        with self._session("main"), mock.patch("claude_wrapper.runner.run_program", return_value=0):
            run([], settings=self.settings, lister=self.lister, clock=lambda: NOW)

        self.assertFalse((stale / ".deleted_at").exists())
        self.assertEqual(self.lister.calls, 0)


class CleanupTests(WorkspaceTestCase):
    def test_failures_are_logged_not_raised(self) -> None:
        self.write(self.store_base / "branches" / "gone" / "CLAUDE.md", "old")

        class BrokenLister:
            def live_branches(self) -> set[str]:
                raise GitCommandError(["git", "branch"], 1)

        with self.assertLogs("claude_wrapper.app", level="WARNING") as logs:
            self.assertIsNone(cleanup(self.context("main"), BrokenLister()))

        self.assertIn("cleanup failed", logs.output[0])


class CliTests(WorkspaceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.runner = CliRunner()

    def test_forwards_all_arguments_and_exit_code(self) -> None:
        settings = Settings(store_root=self.store_base.parent)
        with mock.patch("claude_wrapper.cli.load_settings", return_value=settings), mock.patch(
            "claude_wrapper.cli.run", return_value=4
        ) as run_mock:
            result = self.runner.invoke(cli.app, ["--help", "-p", "explain this", "--model", "opus"])

        self.assertEqual(result.exit_code, 4)
        run_mock.assert_called_once_with(["--help", "-p", "explain this", "--model", "opus"], settings=settings)

    def test_wrapper_errors_exit_with_message(self) -> None:
        settings = Settings(store_root=self.store_base.parent)
        with mock.patch("claude_wrapper.cli.load_settings", return_value=settings), mock.patch(
            "claude_wrapper.cli.run", side_effect=SyncError("out", "CLAUDE.md", OSError("disk full"))
        ):
            result = self.runner.invoke(cli.app, [])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("sync out failed for CLAUDE.md", result.output)
