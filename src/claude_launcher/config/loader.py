from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values
from pydantic import ValidationError

from claude_launcher.config.chain import PrecedenceChain
from claude_launcher.config.models import (
    AccountRegistrySnapshot,
    AllowListConfig,
    ConfigLoadRequest,
    LoggingFileSection,
    LoggingSettings,
)
from claude_launcher.config.sources import (
    EnvironmentAccountsSource,
    EnvironmentAllowListSource,
    FileAccountsSource,
    FileAllowListSource,
    read_config_mapping,
)
from claude_launcher.errors import LauncherError
from claude_launcher.paths import default_config_path, default_dotenv_path

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "CLAUDE_LAUNCHER_LOG_LEVEL"


def config_file_path(request: ConfigLoadRequest, home: Optional[str] = None) -> Path:
    if request.config_path:
        return Path(request.config_path).expanduser()
    return default_config_path(home)


def build_environment(
    request: ConfigLoadRequest,
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[str] = None,
) -> Dict[str, str]:
    """
    Snapshot the environment the sources will read.

    Values from the launcher's `.env` (next to the default config file) fill in
    variables the process environment does not set; the process environment
    always wins. The working directory's `.env` is never consulted.
    """
    base = dict(os.environ if environ is None else environ)
    if not request.load_dotenv:
        return base

    try:
        dotenv_path = Path(request.dotenv_path) if request.dotenv_path else default_dotenv_path(home)
    except LauncherError as e:
        logger.debug("config.dotenv_skipped error=%s", e)
        return base
    if not dotenv_path.is_file():
        return base

    try:
        loaded = dotenv_values(dotenv_path)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("config.dotenv_skipped path=%s error=%s", dotenv_path, e)
        return base

    values = {k: v for k, v in loaded.items() if v is not None}
    logger.debug("config.dotenv_loaded path=%s keys=%d", dotenv_path, len(values))
    values.update(base)
    return values


def allow_list_chain(
    environ: Mapping[str, str],
    request: ConfigLoadRequest = ConfigLoadRequest(),
    home: Optional[str] = None,
) -> PrecedenceChain[AllowListConfig]:
    return PrecedenceChain(
        [
            EnvironmentAllowListSource(environ=environ, home=home),
            FileAllowListSource(path=_path_arg(request), home=home),
        ]
    )


def accounts_chain(
    environ: Mapping[str, str],
    request: ConfigLoadRequest = ConfigLoadRequest(),
    home: Optional[str] = None,
) -> PrecedenceChain[AccountRegistrySnapshot]:
    return PrecedenceChain(
        [
            EnvironmentAccountsSource(environ=environ, home=home),
            FileAccountsSource(path=_path_arg(request), home=home),
        ]
    )


def load_allow_list(
    environ: Mapping[str, str],
    request: ConfigLoadRequest = ConfigLoadRequest(),
    home: Optional[str] = None,
) -> AllowListConfig:
    """Load allowed directories: `CLAUDE_SAFE_DIRS` first, then the config file."""
    return allow_list_chain(environ, request, home).load()


def load_logging_settings(
    environ: Mapping[str, str],
    request: ConfigLoadRequest = ConfigLoadRequest(),
    home: Optional[str] = None,
    level_override: Optional[str] = None,
) -> LoggingSettings:
    """
    Best-effort logging settings.

    Runs before logging exists, so a missing or broken file silently yields
    defaults; the real sources report their own errors later.
    """
    settings = LoggingSettings()
    try:
        data = read_config_mapping(config_file_path(request, home), "file:logging")
        settings = LoggingFileSection.model_validate(data).logging
    except (LauncherError, ValidationError):
        pass

    level = level_override or environ.get(LOG_LEVEL_ENV)
    if level:
        settings = settings.model_copy(update={"level": level})
    return settings


def _path_arg(request: ConfigLoadRequest) -> Optional[str]:
    if not request.config_path:
        return None
    return str(Path(request.config_path).expanduser())
