from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from claude_launcher.account.selector import AccountSelector
from claude_launcher.config.chain import PrecedenceChain
from claude_launcher.config.models import AccountProfile, AccountRegistrySnapshot
from claude_launcher.errors import AccountLookupError, SelectionError

logger = logging.getLogger(__name__)


class AccountRegistry:
    """
    Named Claude accounts, loaded fresh from the account chain on every call.

    An unconfigured registry is not an error: callers fall back to Claude's
    default profile location.
    """

    def __init__(
        self,
        chain: PrecedenceChain[AccountRegistrySnapshot],
        selector: Optional[AccountSelector] = None,
    ) -> None:
        self._chain = chain
        self._selector = selector

    def load_snapshot(self) -> AccountRegistrySnapshot:
        try:
            snapshot = self._chain.load_optional()
        except Exception as e:
            raise AccountLookupError(f"failed to load account config: {e}") from e
        return snapshot or AccountRegistrySnapshot()

    def find_by_name(self, name: str) -> Tuple[Optional[AccountProfile], bool]:
        """
        Look up an account by exact, case-sensitive name.

        Returns `(account, True)` on a match and `(None, False)` when no
        accounts are configured, the name is empty, or nothing matches.
        """
        snapshot = self.load_snapshot()
        if not snapshot.accounts or not name:
            return None, False

        account = snapshot.find(name)
        if account is None:
            logger.info("account.not_found name=%s configured=%d", name, len(snapshot))
            return None, False
        return account, True

    def select_interactively(self) -> Optional[AccountProfile]:
        snapshot = self.load_snapshot()
        if not snapshot.accounts:
            return None
        if len(snapshot.accounts) == 1:
            logger.info("account.auto_selected name=%s", snapshot.accounts[0].name)
            return snapshot.accounts[0]

        if self._selector is None:
            raise SelectionError("multiple accounts configured but no interactive selector is available")
        account = self._selector.select(snapshot.accounts)
        logger.info("account.selected name=%s", account.name)
        return account

    def resolve(
        self,
        name: Optional[str] = None,
        on_not_found: Optional[Callable[[str], None]] = None,
    ) -> Optional[AccountProfile]:
        """
        Pick the account for this invocation.

        An explicit name that matches wins. Otherwise, after `on_not_found` is
        told about an unmatched name, the user chooses interactively. There is
        no retry: a failed selection propagates.
        """
        if name:
            account, found = self.find_by_name(name)
            if found:
                return account
            if on_not_found is not None:
                on_not_found(name)
        return self.select_interactively()
