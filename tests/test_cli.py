import contextlib
import io
import os
import tempfile
import unittest
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console

from claude_launcher.__main__ import run
from claude_launcher.config.models import AccountProfile
from claude_launcher.launcher import LaunchOptions
from claude_launcher.ui import Printer


class FakeLauncher:
    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.launched: List[LaunchOptions] = []

    def launch(self, options: LaunchOptions) -> int:
        self.launched.append(options)
        return self.returncode


class FakePrompt:
    def __init__(self, answer: bool = True) -> None:
        self.answer = answer

    def ask_continue(self) -> bool:
        return self.answer


class FakeSelector:
    def __init__(self, index: int = 0) -> None:
        self.index = index
        self.calls = 0

    def select(self, accounts: Sequence[AccountProfile]) -> AccountProfile:
        self.calls += 1
        return accounts[self.index]


class RunTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.base = os.path.realpath(self._tmp.name)
        self.allowed = os.path.join(self.base, "projects")
        self.outside = os.path.join(self.base, "elsewhere")
        os.makedirs(os.path.join(self.allowed, "app"))
        os.makedirs(self.outside)
        self.config_path = str(Path(self.base) / "config.json")
        self.output = io.StringIO()
        self.printer = Printer(Console(file=self.output, width=300))
        self.launcher = FakeLauncher()
        self.selector = FakeSelector()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_cli(
        self,
        *argv: str,
        environ: Optional[dict] = None,
        cwd: Optional[str] = None,
        prompt: Optional[FakePrompt] = None,
    ) -> int:
        if environ is None:
            environ = {"CLAUDE_SAFE_DIRS": self.allowed}
        return run(
            ["--config", self.config_path, "--no-dotenv", *argv],
            environ=environ,
            cwd=cwd if cwd is not None else os.path.join(self.allowed, "app"),
            printer=self.printer,
            launcher=self.launcher,
            selector=self.selector,
            prompt=prompt or FakePrompt(),
        )

    def test_launches_with_default_profile(self) -> None:
        self.assertEqual(self.run_cli(), 0)
        self.assertEqual(self.launcher.launched, [LaunchOptions(continue_session=True, args=[], profile_dir=None)])
        self.assertIn("Directory allowed", self.output.getvalue())
        self.assertIn("Using default Claude configuration", self.output.getvalue())

    def test_fresh_session_and_passthrough_args(self) -> None:
        code = self.run_cli("--", "--model", "opus", prompt=FakePrompt(answer=False))
        self.assertEqual(code, 0)
        options = self.launcher.launched[0]
        self.assertFalse(options.continue_session)
        self.assertEqual(list(options.args), ["--model", "opus"])
        self.assertIn("Starting new session", self.output.getvalue())

    def test_child_exit_status_is_returned(self) -> None:
        self.launcher.returncode = 7
        self.assertEqual(self.run_cli(), 7)

    def test_access_denied(self) -> None:
        self.assertEqual(self.run_cli(cwd=self.outside), 1)
        self.assertEqual(self.launcher.launched, [])
        output = self.output.getvalue()
        self.assertIn("Access denied", output)
        self.assertIn(f"Current directory: {self.outside}", output)
        self.assertIn(f"  - {self.allowed}", output)

    def test_missing_configuration(self) -> None:
        self.assertEqual(self.run_cli(environ={"CLAUDE_SAFE_DIRS": ""}), 1)
        self.assertIn("No allowed directories configured", self.output.getvalue())
        self.assertEqual(self.launcher.launched, [])

    def test_allow_list_from_file(self) -> None:
        Path(self.config_path).write_text(f'{{"allowedDirs": ["{self.allowed}"]}}', encoding="utf-8")
        self.assertEqual(self.run_cli(environ={}), 0)

    def test_show_dirs(self) -> None:
        self.assertEqual(self.run_cli("--show-dirs"), 0)
        self.assertIn(f"  - {self.allowed}", self.output.getvalue())
        self.assertEqual(self.launcher.launched, [])

    def test_explicit_account(self) -> None:
        environ = {"CLAUDE_SAFE_DIRS": self.allowed, "CLAUDE_ACCOUNTS": "Personal:/p,Work:/w"}
        self.assertEqual(self.run_cli("--account", "Work", environ=environ), 0)
        self.assertEqual(self.launcher.launched[0].profile_dir, "/w")
        self.assertEqual(self.selector.calls, 0)
        self.assertIn("Account: Work (/w)", self.output.getvalue())

    def test_unknown_account_falls_back_to_selection(self) -> None:
        environ = {"CLAUDE_SAFE_DIRS": self.allowed, "CLAUDE_ACCOUNTS": "Personal:/p,Work:/w"}
        self.assertEqual(self.run_cli("-a", "Home", environ=environ), 0)
        self.assertEqual(self.selector.calls, 1)
        self.assertEqual(self.launcher.launched[0].profile_dir, "/p")
        self.assertIn("'Home' not found", self.output.getvalue())

    def test_version(self) -> None:
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            self.assertEqual(self.run_cli("--version"), 0)
        self.assertIn("claude-launcher", stdout.getvalue())

    def test_unusable_log_file_does_not_abort(self) -> None:
        log_path = os.path.join(self.config_path, "launcher.log")
        Path(self.config_path).write_text(
            f'{{"allowedDirs": ["{self.allowed}"], "logging": {{"file": {{"path": "{log_path}"}}}}}}',
            encoding="utf-8",
        )
        self.assertEqual(self.run_cli("--show-dirs", environ={}), 0)
        self.assertIn(f"  - {self.allowed}", self.output.getvalue())

    def test_show_config_missing_file(self) -> None:
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            self.assertEqual(self.run_cli("--show-config"), 0)
        self.assertIn(f"Config file: {self.config_path}", stdout.getvalue())
        self.assertIn("(file does not exist)", stdout.getvalue())


if __name__ == "__main__":
    unittest.main()
