from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from claude_launcher.errors import ResolutionError

CONFIG_DIR_PARTS = (".config", "claude-launcher")
CONFIG_FILENAME = "config.json"
DOTENV_FILENAME = ".env"


def home_directory() -> str:
    try:
        return str(Path.home())
    except RuntimeError as exc:
        raise ResolutionError("~", f"failed to get home directory: {exc}") from exc


def expand_path(path: str, home: Optional[str] = None) -> str:
    """
    Expand a leading `~` to the home directory.

    Only `~` and `~/rest` are expansion targets; `~user/...` and any other
    tilde form is returned unchanged.
    """
    if not path.startswith("~"):
        return path
    if path != "~" and not path.startswith("~/"):
        return path

    home_dir = home if home is not None else home_directory()
    if path == "~":
        return home_dir
    return os.path.join(home_dir, path[2:])


def default_config_dir(home: Optional[str] = None) -> Path:
    home_dir = home if home is not None else home_directory()
    return Path(home_dir).joinpath(*CONFIG_DIR_PARTS)


def default_config_path(home: Optional[str] = None) -> Path:
    return default_config_dir(home) / CONFIG_FILENAME


def default_dotenv_path(home: Optional[str] = None) -> Path:
    return default_config_dir(home) / DOTENV_FILENAME


def clean_path(path: str) -> str:
    """Normalize redundant separators and `.`/`..` components without touching the filesystem."""
    return os.path.normpath(path)


@dataclass(frozen=True, slots=True)
class PathResolver:
    """
    Resolves paths to their canonical absolute form.

    Symlinks are followed when every component exists. When symlink evaluation
    fails (typically because part of the path does not exist yet) the cleaned
    absolute path is returned instead, so `resolve` only raises when the path
    cannot be made absolute at all.
    """

    cwd: Optional[str] = None

    def absolute(self, path: str) -> str:
        if not path:
            raise ResolutionError(path, "empty path")
        try:
            if os.path.isabs(path):
                return clean_path(path)
            base = self.cwd if self.cwd is not None else os.getcwd()
            return clean_path(os.path.join(base, path))
        except (OSError, ValueError) as exc:
            raise ResolutionError(path, f"failed to get absolute path: {exc}") from exc

    def resolve(self, path: str) -> str:
        abs_path = self.absolute(path)
        try:
            return os.path.realpath(abs_path, strict=True)
        except (OSError, ValueError):
            return abs_path
