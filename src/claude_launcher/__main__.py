from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Mapping, Optional, Sequence

from claude_launcher import __version__
from claude_launcher.account import AccountRegistry, AccountSelector, InteractiveSelector
from claude_launcher.config import (
    ConfigLoadRequest,
    accounts_chain,
    build_environment,
    config_file_path,
    load_allow_list,
    load_logging_settings,
)
from claude_launcher.errors import AccessDenied, ConfigurationMissing, LauncherError
from claude_launcher.launcher import Launcher, LaunchOptions
from claude_launcher.logging import init_logging
from claude_launcher.security import DirectoryGate
from claude_launcher.session import ContinuationPrompt
from claude_launcher.ui import Printer

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130

_EPILOG = """\
configuration (priority order):
  allowed directories:
    1. CLAUDE_SAFE_DIRS        colon-separated list of directories
                               export CLAUDE_SAFE_DIRS="$HOME/projects:$HOME/work"
    2. config file             "allowedDirs" array
                               {"allowedDirs": ["/home/user/projects"]}

  accounts (optional):
    1. CLAUDE_ACCOUNTS         comma-separated Name:ProfileDir pairs
                               export CLAUDE_ACCOUNTS="Personal:~/.claude-personal,Work:~/.claude-work"
    2. config file             "accounts" array
                               {"accounts": [{"name": "Work", "profileDir": "~/.claude-work"}]}

  The config file defaults to ~/.config/claude-launcher/config.json (.yaml/.yml also
  accepted via --config). Variables in ~/.config/claude-launcher/.env fill in anything
  the environment does not set.

examples:
  claude-launcher                     interactive account selection
  claude-launcher --account Personal  skip account selection
  claude-launcher -- --model opus     pass arguments through to claude
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claude-launcher",
        description=(
            "Launch Claude Code only inside allowed directories, with optional account "
            "selection and session continuation."
        ),
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("-v", "--version", action="store_true", help="Show version information")
    parser.add_argument("-l", "--show-dirs", action="store_true", help="Show configured allowed directories")
    parser.add_argument(
        "-c",
        "--show-config",
        action="store_true",
        help="Show configuration file path and contents",
    )
    parser.add_argument(
        "-a",
        "--account",
        default="",
        help="Account name to use (skips interactive selection when it exists)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the config file (default: ~/.config/claude-launcher/config.json)",
    )
    parser.add_argument(
        "--no-dotenv",
        action="store_true",
        help="Do not read ~/.config/claude-launcher/.env",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: WARNING, or CLAUDE_LAUNCHER_LOG_LEVEL)",
    )
    return parser


def _split_claude_args(extra: Sequence[str]) -> List[str]:
    args = list(extra)
    if args and args[0] == "--":
        args = args[1:]
    return args


def _show_version() -> None:
    print(f"claude-launcher {__version__}")


def _show_config_file(request: ConfigLoadRequest) -> int:
    try:
        path = config_file_path(request)
    except LauncherError as e:
        print(f"Error: {e}")
        return EXIT_ERROR

    print(f"Config file: {path}\n")
    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        print("(file does not exist)")
        print("\nCreate it with:")
        print(f"  mkdir -p {path.parent}")
        print(f"  echo '{{\"allowedDirs\": []}}' > {path}")
        return EXIT_SUCCESS
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading file: {e}")
        return EXIT_ERROR

    print("Contents:")
    print(contents)
    return EXIT_SUCCESS


def _config_path_for_display(request: ConfigLoadRequest) -> str:
    try:
        return str(config_file_path(request))
    except LauncherError:
        return "~/.config/claude-launcher/config.json"


def run(
    argv: Optional[Sequence[str]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[str] = None,
    printer: Optional[Printer] = None,
    launcher: Optional[Launcher] = None,
    selector: Optional[AccountSelector] = None,
    prompt: Optional[ContinuationPrompt] = None,
) -> int:
    parser = _build_parser()
    args, extra = parser.parse_known_args(argv)
    claude_args = _split_claude_args(extra)

    request = ConfigLoadRequest(config_path=args.config, load_dotenv=not args.no_dotenv)
    env = build_environment(request, environ)
    init_logging(load_logging_settings(env, request, level_override=args.log_level))

    if args.version:
        _show_version()
        return EXIT_SUCCESS
    if args.show_config:
        return _show_config_file(request)

    printer = printer or Printer()

    try:
        allow_list = load_allow_list(env, request)
    except ConfigurationMissing as e:
        logger.info("app.config_missing error=%s", e)
        printer.show_config_error(_config_path_for_display(request))
        return EXIT_ERROR

    if args.show_dirs:
        printer.show_allowed_dirs(allow_list.allowed_dirs)
        return EXIT_SUCCESS

    try:
        current_dir = cwd if cwd is not None else os.getcwd()
    except OSError as e:
        printer.error(f"Failed to get current directory: {e}")
        return EXIT_ERROR

    gate = DirectoryGate()
    try:
        gate.ensure_allowed(current_dir, allow_list.allowed_dirs)
    except AccessDenied as e:
        printer.show_access_denied(e.candidate, e.allowed_dirs)
        return EXIT_ERROR
    except LauncherError as e:
        printer.error(f"Failed to check directory: {e}")
        return EXIT_ERROR
    printer.show_directory_allowed()

    registry = AccountRegistry(
        accounts_chain(env, request),
        selector=selector or InteractiveSelector(console=printer.console),
    )
    try:
        account = registry.resolve(args.account, on_not_found=printer.show_account_not_found)
    except LauncherError as e:
        printer.error(f"Failed to select account: {e}")
        return EXIT_ERROR

    profile_dir: Optional[str] = None
    if account is not None:
        printer.show_account_selected(account.name, account.profile_dir)
        profile_dir = account.profile_dir
    else:
        printer.show_no_accounts_configured()

    prompt = prompt or ContinuationPrompt(printer)
    try:
        should_continue = prompt.ask_continue()
    except LauncherError as e:
        printer.error(f"Failed to read input: {e}")
        return EXIT_ERROR

    if should_continue:
        printer.show_continuing_session()
    else:
        printer.show_starting_new_session()

    launcher = launcher or Launcher(environ=env)
    try:
        return launcher.launch(
            LaunchOptions(continue_session=should_continue, args=claude_args, profile_dir=profile_dir)
        )
    except LauncherError as e:
        printer.error(f"Failed to launch Claude: {e}")
        return EXIT_ERROR


def main() -> None:
    try:
        code = run()
    except KeyboardInterrupt:
        logger.info("app.interrupted_by_user")
        code = EXIT_INTERRUPTED
    sys.exit(code)


if __name__ == "__main__":
    main()
