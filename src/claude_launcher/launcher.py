from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from claude_launcher.errors import LaunchError

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "CLAUDE_CONFIG_DIR"


@dataclass(frozen=True, slots=True)
class LaunchOptions:
    continue_session: bool = False
    args: Sequence[str] = ()
    # Exported as CLAUDE_CONFIG_DIR when set.
    profile_dir: Optional[str] = None


class Launcher:
    def __init__(self, executable: str = "claude", environ: Optional[Mapping[str, str]] = None) -> None:
        self.executable = executable
        self._environ = environ

    def build_command(self, options: LaunchOptions) -> List[str]:
        command = [self.executable]
        if options.continue_session:
            command.append("--continue")
        command.extend(options.args)
        return command

    def build_env(self, options: LaunchOptions) -> Dict[str, str]:
        env = dict(os.environ if self._environ is None else self._environ)
        if options.profile_dir:
            env[CONFIG_DIR_ENV] = options.profile_dir
        return env

    def launch(self, options: LaunchOptions) -> int:
        """Run Claude in the foreground with inherited stdio; return its exit status."""
        command = self.build_command(options)
        logger.info("launcher.exec command=%s profile_dir=%s", command, options.profile_dir)
        try:
            completed = subprocess.run(command, env=self.build_env(options), check=False)
        except OSError as e:
            raise LaunchError(f"failed to run {self.executable}: {e}") from e
        logger.info("launcher.exited returncode=%d", completed.returncode)
        return completed.returncode
