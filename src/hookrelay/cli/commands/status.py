# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Report which hook folders and dispatchers hookrelay manages."""

from __future__ import annotations

import typer
from rich import box
from rich.table import Table

from ...core.logging import section
from ...discovery.scripts import category_folders
from ...hooks.catalog import available_categories, folder_name_of
from ...hooks.dispatcher import dispatcher_path, is_generated_dispatcher
from ...registry.store import load_registry_state
from ...runtime.console import detect_tty, get_console_manager
from ..options import DEBUG_OPTION, EMOJI_OPTION, ROOT_OPTION, CommonOptions, NewScriptPolicy
from ..services import resolve_layout
from ..shared import CLIError, build_cli_logger


def status(
    root: ROOT_OPTION = None,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Show the scripts folder, registry and dispatcher state without changing anything."""

    options = CommonOptions.from_cli(root, new_scripts=NewScriptPolicy.DISABLE, emoji=emoji, debug=debug)
    logger = build_cli_logger(emoji=emoji)
    try:
        layout = resolve_layout(options, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    color = detect_tty()
    section("hookrelay status", use_color=color)
    logger.echo(f"Repository root:   {layout.repo_root}")
    logger.echo(f"Dispatcher folder: {layout.dispatcher_dir}")
    if not layout.scripts_root.is_dir():
        logger.warn(f"{layout.scripts_root.name} folder not available")
        raise typer.Exit(code=1)
    logger.ok(f"{layout.scripts_root.name} folder available")

    folders = {category: folder for category, folder in category_folders(layout.scripts_root)}
    state = load_registry_state(layout.storage_path)
    table = Table(box=box.SIMPLE_HEAVY)
    for column in ("hook", "folder", "scripts", "enabled", "dispatcher"):
        table.add_column(column)
    for category in available_categories():
        entries = state.get(category, [])
        hook_file = dispatcher_path(layout.dispatcher_dir, category)
        if is_generated_dispatcher(hook_file):
            dispatcher = "managed"
        elif hook_file.exists():
            dispatcher = "foreign"
        else:
            dispatcher = "missing"
        table.add_row(
            folder_name_of(category),
            "yes" if category in folders else "no",
            str(len(entries)),
            str(sum(1 for entry in entries if entry.enabled)),
            dispatcher,
        )
    get_console_manager().print(table, emoji=emoji)


def register(app: typer.Typer) -> None:
    """Register the ``status`` command on ``app``."""

    app.command(name="status")(status)


__all__ = ["register", "status"]
