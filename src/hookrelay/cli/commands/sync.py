# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""One-shot reconciliation of the scripts folder with the registry."""

from __future__ import annotations

import typer

from ..options import DEBUG_OPTION, EMOJI_OPTION, NEW_SCRIPTS_OPTION, ROOT_OPTION, CommonOptions, NewScriptPolicy
from ..services import emit_report, managed_repository
from ..shared import CLIError, build_cli_logger


def sync(
    root: ROOT_OPTION = None,
    new_scripts: NEW_SCRIPTS_OPTION = NewScriptPolicy.ASK,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Reconcile the scripts folder with the registry and regenerate changed dispatchers."""

    options = CommonOptions.from_cli(root, new_scripts=new_scripts, emoji=emoji, debug=debug)
    logger = build_cli_logger(emoji=emoji)
    try:
        with managed_repository(options, logger=logger) as (_manager, result):
            emit_report(result.report, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc


def register(app: typer.Typer) -> None:
    """Register the ``sync`` command on ``app``."""

    app.command(name="sync")(sync)


__all__ = ["register", "sync"]
