# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer option declarations shared by hookrelay commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer


class NewScriptPolicy(str, Enum):
    """How scripts discovered for the first time are handled."""

    ASK = "ask"
    ENABLE = "enable"
    DISABLE = "disable"


ROOT_OPTION = Annotated[
    Path | None,
    typer.Option("--root", "-r", help="Any path inside the repository."),
]
NEW_SCRIPTS_OPTION = Annotated[
    NewScriptPolicy,
    typer.Option(
        "--new-scripts",
        case_sensitive=False,
        help="Enable, disable, or ask about scripts seen for the first time.",
    ),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Stream diagnostic logging to stderr."),
]


@dataclass(slots=True)
class CommonOptions:
    """Capture the options every repository-bound command accepts."""

    root: Path
    new_scripts: NewScriptPolicy
    emoji: bool
    debug: bool

    @classmethod
    def from_cli(
        cls,
        root: Path | None,
        *,
        new_scripts: NewScriptPolicy,
        emoji: bool,
        debug: bool,
    ) -> CommonOptions:
        """Return options with ``root`` resolved against the working directory."""

        return cls(
            root=(root or Path.cwd()).resolve(),
            new_scripts=new_scripts,
            emoji=emoji,
            debug=debug,
        )


__all__ = [
    "CommonOptions",
    "DEBUG_OPTION",
    "EMOJI_OPTION",
    "NEW_SCRIPTS_OPTION",
    "NewScriptPolicy",
    "ROOT_OPTION",
]
