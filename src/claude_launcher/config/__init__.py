"""Configuration sources, precedence chains and file schema."""

from claude_launcher.config.chain import PrecedenceChain
from claude_launcher.config.interfaces import ConfigSource
from claude_launcher.config.loader import (
    accounts_chain,
    allow_list_chain,
    build_environment,
    config_file_path,
    load_allow_list,
    load_logging_settings,
)
from claude_launcher.config.models import (
    AccountProfile,
    AccountRegistrySnapshot,
    AllowListConfig,
    ConfigLoadRequest,
    LoggingSettings,
)
from claude_launcher.config.sources import (
    EnvironmentAccountsSource,
    EnvironmentAllowListSource,
    FileAccountsSource,
    FileAllowListSource,
)

__all__ = [
    "AccountProfile",
    "AccountRegistrySnapshot",
    "AllowListConfig",
    "ConfigLoadRequest",
    "ConfigSource",
    "EnvironmentAccountsSource",
    "EnvironmentAllowListSource",
    "FileAccountsSource",
    "FileAllowListSource",
    "LoggingSettings",
    "PrecedenceChain",
    "accounts_chain",
    "allow_list_chain",
    "build_environment",
    "config_file_path",
    "load_allow_list",
    "load_logging_settings",
]
