from __future__ import annotations

from typing import Optional, Sequence, Tuple


class LauncherError(Exception):
    """Base exception for all launcher failures surfaced to the CLI."""


class ConfigSourceError(LauncherError):
    """A single configuration source could not produce a valid result."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"{source}: {message}")


class SourceUnavailable(ConfigSourceError):
    """The source is not configured (variable unset, file absent, section empty)."""


class ConfigurationMalformed(ConfigSourceError):
    """The source is present but its content is unparsable or structurally invalid."""


class ConfigurationMissing(LauncherError):
    """
    No source of a required chain succeeded.

    `failures` keeps the per-source errors in the order the sources were tried.
    """

    def __init__(self, failures: Sequence[ConfigSourceError], message: Optional[str] = None) -> None:
        self.failures: Tuple[ConfigSourceError, ...] = tuple(failures)
        if message is None:
            if self.failures:
                details = "; ".join(str(f) for f in self.failures)
                message = f"all configuration sources failed: {details}"
            else:
                message = "no configuration sources configured"
        super().__init__(message)


class ResolutionError(LauncherError):
    """Raised when a path cannot be made absolute."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"failed to resolve path {path!r}: {reason}")


class AccessDenied(LauncherError):
    """
    The candidate directory resolved but matched no allow-list entry.

    Both attributes hold resolved paths so the user sees what was actually compared.
    """

    def __init__(self, candidate: str, allowed_dirs: Sequence[str]) -> None:
        self.candidate = candidate
        self.allowed_dirs: Tuple[str, ...] = tuple(allowed_dirs)
        super().__init__(f"directory {candidate!r} is not in the allowed directories")


class AccountLookupError(LauncherError):
    """Loading the account configuration failed unexpectedly."""


class SelectionError(LauncherError):
    """The interactive account selection could not be completed."""


class InputError(LauncherError):
    """Reading the session continuation answer failed."""


class LaunchError(LauncherError):
    """The Claude executable could not be started."""
