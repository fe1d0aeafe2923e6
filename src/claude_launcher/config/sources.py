from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

import yaml
from pydantic import ValidationError

from claude_launcher.config.models import (
    AccountProfile,
    AccountRegistrySnapshot,
    AccountsFileSection,
    AllowListConfig,
    AllowListFileSection,
)
from claude_launcher.errors import ConfigurationMalformed, LauncherError, SourceUnavailable
from claude_launcher.paths import default_config_path, expand_path

logger = logging.getLogger(__name__)

SAFE_DIRS_ENV = "CLAUDE_SAFE_DIRS"
ACCOUNTS_ENV = "CLAUDE_ACCOUNTS"
ACCOUNT_SEPARATOR = ","
ACCOUNT_FIELD_SEPARATOR = ":"

ReadText = Callable[[Path], str]


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def read_config_mapping(path: Path, source: str, read_text: ReadText = _read_text) -> Dict[str, Any]:
    """
    Read the configuration file and return its top-level mapping.

    `.yaml`/`.yml` files are parsed with PyYAML, everything else as JSON.
    """
    try:
        raw = read_text(path)
    except FileNotFoundError as e:
        raise SourceUnavailable(source, f"config file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationMalformed(source, f"failed to read config file {path}: {e}") from e

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except (yaml.YAMLError, ValueError, RecursionError) as e:
        raise ConfigurationMalformed(source, f"failed to parse config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationMalformed(
            source, f"top-level config must be a mapping, got: {type(data).__name__}"
        )
    return data


def _expand(path: str, home: Optional[str], source: str) -> str:
    try:
        return expand_path(path, home)
    except LauncherError as e:
        raise ConfigurationMalformed(source, f"failed to expand path {path}: {e}") from e


def _resolve_file(path: Optional[str], home: Optional[str], source: str) -> Path:
    if path:
        return Path(path)
    try:
        return default_config_path(home)
    except LauncherError as e:
        raise SourceUnavailable(source, str(e)) from e


@dataclass(frozen=True, slots=True)
class EnvironmentAllowListSource:
    """Allowed directories from a path-list environment variable (`CLAUDE_SAFE_DIRS`)."""

    environ: Mapping[str, str]
    variable: str = SAFE_DIRS_ENV
    separator: str = os.pathsep
    home: Optional[str] = None

    @property
    def name(self) -> str:
        return f"env:{self.variable}"

    def load(self) -> AllowListConfig:
        value = self.environ.get(self.variable, "")
        if not value:
            raise SourceUnavailable(self.name, f"{self.variable} environment variable not set")

        dirs = [_expand(segment, self.home, self.name) for segment in value.split(self.separator) if segment]
        if not dirs:
            raise SourceUnavailable(self.name, f"no valid directories in {self.variable}")
        return AllowListConfig(allowed_dirs=tuple(dirs))


@dataclass(frozen=True, slots=True)
class FileAllowListSource:
    """Allowed directories from the `allowedDirs` array of the config file."""

    path: Optional[str] = None
    home: Optional[str] = None
    read_text: ReadText = field(default=_read_text)

    @property
    def name(self) -> str:
        return "file:allowedDirs"

    def load(self) -> AllowListConfig:
        config_path = _resolve_file(self.path, self.home, self.name)
        data = read_config_mapping(config_path, self.name, self.read_text)
        try:
            section = AllowListFileSection.model_validate(data)
        except ValidationError as e:
            raise ConfigurationMalformed(self.name, f"invalid allowedDirs in {config_path}: {e}") from e

        dirs = [_expand(entry, self.home, self.name) for entry in section.allowed_dirs if entry]
        if not dirs:
            raise SourceUnavailable(self.name, f"no allowedDirs found in {config_path}")
        return AllowListConfig(allowed_dirs=tuple(dirs))


def parse_accounts(value: str, source: str, home: Optional[str] = None) -> List[AccountProfile]:
    """
    Parse `Name:Dir` pairs separated by commas.

    Only the first colon separates name from directory. Blank entries are
    skipped, but any other entry that is not a complete pair fails the whole
    value.
    """
    accounts: List[AccountProfile] = []
    for entry in value.split(ACCOUNT_SEPARATOR):
        entry = entry.strip()
        if not entry:
            continue

        name, sep, profile_dir = entry.partition(ACCOUNT_FIELD_SEPARATOR)
        if not sep:
            raise ConfigurationMalformed(
                source, f"invalid account entry {entry!r}: expected format Name:ProfileDir"
            )
        name = name.strip()
        profile_dir = profile_dir.strip()
        if not name or not profile_dir:
            raise ConfigurationMalformed(
                source, f"invalid account entry {entry!r}: name and profile dir cannot be empty"
            )

        accounts.append(AccountProfile(name=name, profile_dir=_expand(profile_dir, home, source)))
    return accounts


@dataclass(frozen=True, slots=True)
class EnvironmentAccountsSource:
    """Accounts from the `CLAUDE_ACCOUNTS` environment variable."""

    environ: Mapping[str, str]
    variable: str = ACCOUNTS_ENV
    home: Optional[str] = None

    @property
    def name(self) -> str:
        return f"env:{self.variable}"

    def load(self) -> AccountRegistrySnapshot:
        value = self.environ.get(self.variable, "")
        if not value:
            raise SourceUnavailable(self.name, f"{self.variable} environment variable not set")

        accounts = parse_accounts(value, self.name, self.home)
        if not accounts:
            raise SourceUnavailable(self.name, f"no valid accounts in {self.variable}")
        return AccountRegistrySnapshot(accounts=tuple(accounts))


@dataclass(frozen=True, slots=True)
class FileAccountsSource:
    """Accounts from the `accounts` array of the config file."""

    path: Optional[str] = None
    home: Optional[str] = None
    read_text: ReadText = field(default=_read_text)

    @property
    def name(self) -> str:
        return "file:accounts"

    def load(self) -> AccountRegistrySnapshot:
        config_path = _resolve_file(self.path, self.home, self.name)
        data = read_config_mapping(config_path, self.name, self.read_text)
        try:
            section = AccountsFileSection.model_validate(data)
        except ValidationError as e:
            raise ConfigurationMalformed(self.name, f"invalid accounts in {config_path}: {e}") from e

        if not section.accounts:
            raise SourceUnavailable(self.name, f"no accounts found in {config_path}")

        accounts: List[AccountProfile] = []
        for entry in section.accounts:
            if not entry.name or not entry.profile_dir:
                raise ConfigurationMalformed(
                    self.name, "invalid account: name and profileDir cannot be empty"
                )
            accounts.append(
                AccountProfile(name=entry.name, profile_dir=_expand(entry.profile_dir, self.home, self.name))
            )
        return AccountRegistrySnapshot(accounts=tuple(accounts))
