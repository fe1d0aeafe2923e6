from __future__ import annotations

import sys
from typing import Optional, TextIO

from claude_launcher.errors import InputError
from claude_launcher.ui import Printer

_NO_ANSWERS = ("n", "no")


class ContinuationPrompt:
    """
    Asks whether to continue the previous Claude session.

    The default is yes: end of input, a blank line and unrecognised answers all
    continue; only `n`/`no` starts fresh.
    """

    def __init__(self, printer: Printer, stream: Optional[TextIO] = None) -> None:
        self._printer = printer
        self._stream = stream

    def ask_continue(self) -> bool:
        self._printer.warning("Continue previous Claude session?")
        self._printer.print("  [Y/n] (default: y): ", end="")

        stream = self._stream if self._stream is not None else sys.stdin
        try:
            line = stream.readline()
        except (OSError, ValueError) as e:
            raise InputError(f"failed to read input: {e}") from e

        return line.strip().lower() not in _NO_ANSWERS
