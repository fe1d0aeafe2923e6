from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.text import Text


class Printer:
    """Colored status output for the launcher, written to stderr by default."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(stderr=True, highlight=False)

    def success(self, message: str) -> None:
        self.console.print(Text(message, style="green"))

    def error(self, message: str) -> None:
        self.console.print(Text(message, style="red"))

    def warning(self, message: str) -> None:
        self.console.print(Text(message, style="bold yellow"))

    def print(self, message: str = "", end: str = "\n") -> None:
        self.console.print(Text(message), end=end)

    def _mark(self, mark: str, message: str) -> None:
        self.console.print(Text.assemble((mark, "green"), f" {message}"))

    def show_allowed_dirs(self, dirs: Sequence[str]) -> None:
        self.print("Allowed directories:")
        for directory in dirs:
            self.print(f"  - {directory}")

    def show_access_denied(self, current_dir: str, allowed_dirs: Sequence[str]) -> None:
        self.error("✗ Access denied")
        self.print()
        self.print(f"Current directory: {current_dir}")
        self.print()
        self.print("Claude Code is not allowed to run in this directory.")
        self.show_allowed_dirs(allowed_dirs)
        self.print()

    def show_config_error(self, config_path: str) -> None:
        self.error("Error: No allowed directories configured")
        self.print()
        self.print("Please set allowed directories using one of these methods:")
        self.print()
        self.print("1. Environment variable (colon-separated):")
        self.print('   export CLAUDE_SAFE_DIRS="$HOME/projects:$HOME/work"')
        self.print()
        self.print(f"2. Create {config_path}:")
        self.print('   {"allowedDirs": ["/home/user/projects"]}')
        self.print()

    def show_directory_allowed(self) -> None:
        self._mark("✓", "Directory allowed")
        self.print()

    def show_account_selected(self, name: str, profile_dir: str) -> None:
        self._mark("✓", f"Account: {name} ({profile_dir})")
        self.print()

    def show_account_not_found(self, name: str) -> None:
        self.warning(f"Account {name!r} not found in configuration")
        self.print()

    def show_no_accounts_configured(self) -> None:
        self.print("Using default Claude configuration")
        self.print()

    def show_continuing_session(self) -> None:
        self._mark("→", "Continuing previous session...")

    def show_starting_new_session(self) -> None:
        self._mark("→", "Starting new session...")
