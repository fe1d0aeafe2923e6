import io
import tempfile
import unittest
from pathlib import Path
from typing import List, Sequence
from unittest import mock

from rich.console import Console

from claude_launcher.account.registry import AccountRegistry
from claude_launcher.account.selector import InteractiveSelector
from claude_launcher.config.chain import PrecedenceChain
from claude_launcher.config.loader import accounts_chain
from claude_launcher.config.models import AccountProfile, ConfigLoadRequest
from claude_launcher.errors import AccountLookupError, SelectionError

PERSONAL = AccountProfile("Personal", "/home/u/.c-p")
WORK = AccountProfile("Work", "/home/u/.c-w")


class RecordingSelector:
    def __init__(self, index: int = 0) -> None:
        self.index = index
        self.calls: List[Sequence[AccountProfile]] = []

    def select(self, accounts: Sequence[AccountProfile]) -> AccountProfile:
        self.calls.append(accounts)
        return accounts[self.index]


class FailingSelector:
    def select(self, accounts: Sequence[AccountProfile]) -> AccountProfile:
        raise SelectionError("no terminal")


class BrokenSource:
    name = "broken"

    def load(self):
        raise RuntimeError("disk on fire")


class AccountRegistryTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.request = ConfigLoadRequest(config_path=str(Path(self._tmp.name) / "config.json"), load_dotenv=False)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def registry(self, accounts: str = "", selector=None) -> AccountRegistry:
        environ = {"CLAUDE_ACCOUNTS": accounts} if accounts else {}
        return AccountRegistry(accounts_chain(environ, self.request), selector=selector)

    def test_find_by_name_from_environment(self) -> None:
        registry = self.registry("Personal:/home/u/.c-p,Work:/home/u/.c-w")
        self.assertEqual(registry.find_by_name("Work"), (WORK, True))

    def test_find_by_name_single_entry(self) -> None:
        self.assertEqual(self.registry("X:/x").find_by_name("X"), (AccountProfile("X", "/x"), True))

    def test_find_by_name_without_accounts(self) -> None:
        self.assertEqual(self.registry().find_by_name("Work"), (None, False))

    def test_find_by_name_no_match_or_empty_name(self) -> None:
        registry = self.registry("Personal:/home/u/.c-p,Work:/home/u/.c-w")
        self.assertEqual(registry.find_by_name("Home"), (None, False))
        self.assertEqual(registry.find_by_name("work"), (None, False))
        self.assertEqual(registry.find_by_name(""), (None, False))

    def test_first_duplicate_wins(self) -> None:
        account, found = self.registry("Work:/first,Work:/second").find_by_name("Work")
        self.assertTrue(found)
        self.assertEqual(account.profile_dir, "/first")

    def test_select_without_accounts_returns_none(self) -> None:
        selector = RecordingSelector()
        self.assertIsNone(self.registry(selector=selector).select_interactively())
        self.assertEqual(selector.calls, [])

    def test_single_account_skips_selector(self) -> None:
        registry = self.registry("Work:/home/u/.c-w", selector=FailingSelector())
        self.assertEqual(registry.select_interactively(), WORK)

    def test_multiple_accounts_use_selector(self) -> None:
        selector = RecordingSelector(index=1)
        registry = self.registry("Personal:/home/u/.c-p,Work:/home/u/.c-w", selector=selector)
        self.assertEqual(registry.select_interactively(), WORK)
        self.assertEqual(list(selector.calls[0]), [PERSONAL, WORK])

    def test_selection_failure_propagates(self) -> None:
        registry = self.registry("Personal:/home/u/.c-p,Work:/home/u/.c-w", selector=FailingSelector())
        with self.assertRaises(SelectionError):
            registry.select_interactively()

    def test_multiple_accounts_without_selector(self) -> None:
        with self.assertRaises(SelectionError):
            self.registry("Personal:/home/u/.c-p,Work:/home/u/.c-w").select_interactively()

    def test_deeply_nested_file_means_no_accounts(self) -> None:
        Path(self.request.config_path).write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
        self.assertEqual(self.registry().find_by_name("Work"), (None, False))

    def test_unexpected_load_failure(self) -> None:
        registry = AccountRegistry(PrecedenceChain([BrokenSource()]))
        with self.assertRaises(AccountLookupError):
            registry.find_by_name("Work")

    def test_resolve_by_name(self) -> None:
        selector = RecordingSelector()
        registry = self.registry("Personal:/home/u/.c-p,Work:/home/u/.c-w", selector=selector)
        self.assertEqual(registry.resolve("Work"), WORK)
        self.assertEqual(selector.calls, [])

    def test_resolve_unknown_name_falls_back_to_selection(self) -> None:
        selector = RecordingSelector(index=0)
        missing: List[str] = []
        registry = self.registry("Personal:/home/u/.c-p,Work:/home/u/.c-w", selector=selector)
        self.assertEqual(registry.resolve("Home", on_not_found=missing.append), PERSONAL)
        self.assertEqual(missing, ["Home"])
        self.assertEqual(len(selector.calls), 1)

    def test_resolve_without_name(self) -> None:
        selector = RecordingSelector(index=1)
        registry = self.registry("Personal:/home/u/.c-p,Work:/home/u/.c-w", selector=selector)
        self.assertEqual(registry.resolve(None), WORK)


class InteractiveSelectorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.output = io.StringIO()
        self.console = Console(file=self.output, width=200)

    def test_single_account_needs_no_terminal(self) -> None:
        selector = InteractiveSelector(console=self.console, is_interactive=lambda: False)
        self.assertEqual(selector.select([WORK]), WORK)

    def test_empty_list_fails(self) -> None:
        selector = InteractiveSelector(console=self.console, is_interactive=lambda: True)
        with self.assertRaises(SelectionError):
            selector.select([])

    def test_requires_terminal(self) -> None:
        selector = InteractiveSelector(console=self.console, is_interactive=lambda: False)
        with self.assertRaises(SelectionError):
            selector.select([PERSONAL, WORK])

    def test_prompts_with_numbered_menu(self) -> None:
        selector = InteractiveSelector(console=self.console, is_interactive=lambda: True)
        with mock.patch("claude_launcher.account.selector.IntPrompt.ask", return_value=2) as ask:
            self.assertEqual(selector.select([PERSONAL, WORK]), WORK)
        self.assertEqual(ask.call_args.kwargs["choices"], ["1", "2"])
        self.assertIn("1) Personal (/home/u/.c-p)", self.output.getvalue())
        self.assertIn("2) Work (/home/u/.c-w)", self.output.getvalue())

    def test_closed_input_fails(self) -> None:
        selector = InteractiveSelector(console=self.console, is_interactive=lambda: True)
        with mock.patch("claude_launcher.account.selector.IntPrompt.ask", side_effect=EOFError):
            with self.assertRaises(SelectionError):
                selector.select([PERSONAL, WORK])


if __name__ == "__main__":
    unittest.main()
