"""Account profiles: lookup by name and interactive selection."""

from claude_launcher.account.registry import AccountRegistry
from claude_launcher.account.selector import AccountSelector, InteractiveSelector

__all__ = ["AccountRegistry", "AccountSelector", "InteractiveSelector"]
