from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


@dataclass(frozen=True, slots=True)
class AllowListConfig:
    """Allowed directories in source order. Never empty once loaded."""

    allowed_dirs: Sequence[str]


@dataclass(frozen=True, slots=True)
class AccountProfile:
    name: str
    profile_dir: str

    @property
    def label(self) -> str:
        return f"{self.name} ({self.profile_dir})"


@dataclass(frozen=True, slots=True)
class AccountRegistrySnapshot:
    """
    Accounts loaded for a single invocation.

    Names are not required to be unique; lookups take the first match.
    """

    accounts: Sequence[AccountProfile] = ()

    def __len__(self) -> int:
        return len(self.accounts)

    def find(self, name: str) -> Optional[AccountProfile]:
        for account in self.accounts:
            if account.name == name:
                return account
        return None


class FileRotationSettings(BaseModel):
    """Daily rotation, mapped onto TimedRotatingFileHandler."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    backup_count: int = 5


class FileLoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    path: Optional[str] = None
    rotation: FileRotationSettings = Field(default_factory=FileRotationSettings)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    level: str = "WARNING"
    file: FileLoggingSettings = Field(default_factory=FileLoggingSettings)


# On-disk schema. Each section is parsed on its own so that a broken `accounts`
# array cannot take the allow-list down with it. Unknown keys are ignored because
# the same file carries every section.


class AllowListFileSection(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    allowed_dirs: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("allowedDirs", "allowed_dirs"),
    )


class AccountFileEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    profile_dir: str = Field(
        default="",
        validation_alias=AliasChoices("profileDir", "configDir", "profile_dir"),
    )


class AccountsFileSection(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    accounts: List[AccountFileEntry] = Field(default_factory=list)


class LoggingFileSection(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@dataclass(frozen=True, slots=True)
class ConfigLoadRequest:
    """
    Inputs controlling where configuration is read from.

    `config_path=None` means the default `~/.config/claude-launcher/config.json`.
    """

    config_path: Optional[str] = None
    dotenv_path: Optional[str] = None
    load_dotenv: bool = True
