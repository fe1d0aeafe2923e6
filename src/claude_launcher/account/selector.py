from __future__ import annotations

import sys
from typing import Callable, Optional, Protocol, Sequence

from rich.console import Console
from rich.prompt import IntPrompt
from rich.text import Text

from claude_launcher.config.models import AccountProfile
from claude_launcher.errors import SelectionError


class AccountSelector(Protocol):
    def select(self, accounts: Sequence[AccountProfile]) -> AccountProfile:
        """Let the user pick one of `accounts`, or raise `SelectionError`."""


class InteractiveSelector:
    """
    Numbered single-choice menu on the terminal.

    A sole account is returned without prompting. Anything else needs a TTY on
    stdin; without one the selection fails instead of blocking forever.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        is_interactive: Optional[Callable[[], bool]] = None,
    ) -> None:
        self._console = console or Console(stderr=True, highlight=False)
        self._is_interactive = is_interactive or sys.stdin.isatty

    def select(self, accounts: Sequence[AccountProfile]) -> AccountProfile:
        if not accounts:
            raise SelectionError("no accounts to select from")
        if len(accounts) == 1:
            return accounts[0]
        if not self._is_interactive():
            raise SelectionError(
                "account selection requires an interactive terminal; pass --account NAME instead"
            )

        self._console.print(Text("Select Claude account", style="bold"))
        for index, account in enumerate(accounts, start=1):
            self._console.print(Text.assemble((f"  {index}) ", "cyan"), account.label))

        try:
            choice = IntPrompt.ask(
                "Account",
                console=self._console,
                choices=[str(i) for i in range(1, len(accounts) + 1)],
                show_choices=False,
            )
        except EOFError as e:
            raise SelectionError("account selection failed: input closed") from e

        selected = accounts[choice - 1]
        self._console.print(Text.assemble(("✔ ", "green"), (selected.label, "green")))
        return selected
