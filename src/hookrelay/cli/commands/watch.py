# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Keep dispatchers current while the scripts folder changes."""

from __future__ import annotations

import threading

import typer

from ..options import DEBUG_OPTION, EMOJI_OPTION, NEW_SCRIPTS_OPTION, ROOT_OPTION, CommonOptions, NewScriptPolicy
from ..services import emit_report, managed_repository
from ..shared import CLIError, build_cli_logger


def watch(
    root: ROOT_OPTION = None,
    new_scripts: NEW_SCRIPTS_OPTION = NewScriptPolicy.ASK,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Reconcile once, then follow the scripts folder until interrupted."""

    options = CommonOptions.from_cli(root, new_scripts=new_scripts, emoji=emoji, debug=debug)
    logger = build_cli_logger(emoji=emoji)
    try:
        with managed_repository(options, logger=logger, watch=True) as (_manager, result):
            emit_report(result.report, logger=logger)
            if result.layout is not None:
                logger.info(f"Watching {result.layout.scripts_root} (Ctrl+C to stop)")
            _wait_for_interrupt()
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc
    logger.ok("Stopped watching")


def _wait_for_interrupt() -> None:
    stop = threading.Event()
    try:
        while not stop.wait(timeout=1.0):
            pass
    except KeyboardInterrupt:
        stop.set()


def register(app: typer.Typer) -> None:
    """Register the ``watch`` command on ``app``."""

    app.command(name="watch")(watch)


__all__ = ["register", "watch"]
