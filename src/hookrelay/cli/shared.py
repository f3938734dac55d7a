# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Console output and error plumbing shared by every hookrelay command."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

import typer

from ..core.logging import fail, info, ok, warn


class CLIError(RuntimeError):
    """A command failure reported to the user, carrying the process exit code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Record ``message`` and the status the command should exit with.

        Args:
            message: Explanation already shown to the user.
            exit_code: Status passed to :class:`typer.Exit`.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(frozen=True, slots=True)
class CLILogger:
    """Route command messages through the Rich helpers with one emoji setting."""

    use_emoji: bool

    def fail(self, message: str) -> None:
        fail(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        warn(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        ok(message, use_emoji=self.use_emoji)

    def info(self, message: str) -> None:
        info(message, use_emoji=self.use_emoji)

    def echo(self, message: str) -> None:
        """Write ``message`` verbatim, without styling or glyphs."""

        typer.echo(message)


def build_cli_logger(*, emoji: bool) -> CLILogger:
    """Return the logger commands use for the ``--emoji/--no-emoji`` choice."""

    return CLILogger(use_emoji=emoji)


__all__: Final = ["CLIError", "CLILogger", "build_cli_logger"]
