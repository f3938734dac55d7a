# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""List, toggle and regenerate registered hook scripts."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer
from rich import box
from rich.table import Table

from ...engine import HookFolderManager
from ...hooks.catalog import HookCategory, available_categories, folder_name_of
from ...registry.store import load_registry_state
from ...runtime.console import get_console_manager
from ..options import DEBUG_OPTION, EMOJI_OPTION, NEW_SCRIPTS_OPTION, ROOT_OPTION, CommonOptions, NewScriptPolicy
from ..services import managed_repository, resolve_layout
from ..shared import CLIError, CLILogger, build_cli_logger

SCRIPT_ARGUMENT = Annotated[
    Path,
    typer.Argument(help="Script path as registered (absolute or relative to the working directory)."),
]
CATEGORY_OPTION = Annotated[
    HookCategory | None,
    typer.Option("--category", "-c", case_sensitive=False, help="Restrict the change to one hook."),
]


def list_scripts(
    root: ROOT_OPTION = None,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """List registered scripts per hook in invocation order."""

    options = CommonOptions.from_cli(root, new_scripts=NewScriptPolicy.DISABLE, emoji=emoji, debug=debug)
    logger = build_cli_logger(emoji=emoji)
    try:
        layout = resolve_layout(options, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    state = load_registry_state(layout.storage_path)
    if not any(state.values()):
        logger.warn("No scripts registered")
        return
    table = Table(box=box.SIMPLE_HEAVY)
    for column in ("hook", "#", "enabled", "script"):
        table.add_column(column)
    for category in available_categories():
        for index, entry in enumerate(state.get(category, []), start=1):
            table.add_row(folder_name_of(category), str(index), "yes" if entry.enabled else "no", entry.path)
    get_console_manager().print(table, emoji=emoji)


def enable(
    script: SCRIPT_ARGUMENT,
    category: CATEGORY_OPTION = None,
    root: ROOT_OPTION = None,
    new_scripts: NEW_SCRIPTS_OPTION = NewScriptPolicy.DISABLE,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Enable a registered script and regenerate its dispatcher."""

    _toggle(script, category, enabled=True, options=_options(root, new_scripts, emoji, debug))


def disable(
    script: SCRIPT_ARGUMENT,
    category: CATEGORY_OPTION = None,
    root: ROOT_OPTION = None,
    new_scripts: NEW_SCRIPTS_OPTION = NewScriptPolicy.DISABLE,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Disable a registered script and regenerate its dispatcher."""

    _toggle(script, category, enabled=False, options=_options(root, new_scripts, emoji, debug))


def regenerate(
    root: ROOT_OPTION = None,
    new_scripts: NEW_SCRIPTS_OPTION = NewScriptPolicy.DISABLE,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Rewrite every dispatcher from the registry."""

    options = _options(root, new_scripts, emoji, debug)
    logger = build_cli_logger(emoji=emoji)
    try:
        with managed_repository(options, logger=logger) as (manager, _result):
            for written in manager.regenerate():
                logger.ok(f"Regenerated {written}")
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc


def _options(
    root: Path | None,
    new_scripts: NewScriptPolicy,
    emoji: bool,
    debug: bool,
) -> CommonOptions:
    return CommonOptions.from_cli(root, new_scripts=new_scripts, emoji=emoji, debug=debug)


def _toggle(script: Path, category: HookCategory | None, *, enabled: bool, options: CommonOptions) -> None:
    logger = build_cli_logger(emoji=options.emoji)
    try:
        with managed_repository(options, logger=logger) as (manager, _result):
            _apply_toggle(manager, script, category, enabled=enabled, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc


def _apply_toggle(
    manager: HookFolderManager,
    script: Path,
    category: HookCategory | None,
    *,
    enabled: bool,
    logger: CLILogger,
) -> None:
    """Toggle ``script`` in every matching category.

    Raises:
        CLIError: If the script is not registered for any candidate category.
    """

    candidates = _candidate_paths(script)
    categories = (category,) if category is not None else available_categories()
    verb = "Enabled" if enabled else "Disabled"
    updated = 0
    for target in categories:
        for entry in manager.entries(target):
            if entry.path not in candidates:
                continue
            if manager.set_enabled(target, entry.path, enabled=enabled):
                updated += 1
                logger.ok(f"{verb} {entry.path} for {folder_name_of(target)}")
    if not updated:
        message = f"Script not registered: {script}"
        logger.fail(message)
        raise CLIError(message)


def _candidate_paths(script: Path) -> set[str]:
    absolute = Path(os.path.abspath(script))
    return {str(script), str(absolute), str(absolute.resolve())}


def register(app: typer.Typer) -> None:
    """Register the script management commands on ``app``."""

    app.command(name="list")(list_scripts)
    app.command(name="enable")(enable)
    app.command(name="disable")(disable)
    app.command(name="regenerate")(regenerate)


__all__ = ["disable", "enable", "list_scripts", "regenerate", "register"]
