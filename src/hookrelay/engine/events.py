# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Apply individual filesystem events to the registry and dispatchers."""

from __future__ import annotations

import logging
from pathlib import Path

from ..discovery.scripts import has_script_suffix
from ..hooks.catalog import HookCategory, parse_category
from .context import HookSyncContext
from .models import EventKind, EventOutcome, HookEvent
from .reconcile import discover_category_scripts, reconcile_category

LOGGER = logging.getLogger(__name__)


def resolve_script_target(path: Path, scripts_root: Path) -> tuple[HookCategory, str] | None:
    """Return the category and registry path for a script event.

    Only ``<scripts_root>/<category folder>/<file>`` qualifies; anything
    nested deeper, placed directly in the root, or under an unknown folder
    is rejected.

    Args:
        path: Path reported by the filesystem watch.
        scripts_root: Root of the user scripts tree.

    Returns:
        tuple[HookCategory, str] | None: Category and absolute script path,
        or ``None`` when the event does not concern a hook script.
    """

    try:
        relative = path.relative_to(scripts_root)
    except ValueError:
        return None
    if len(relative.parts) != 2:
        return None
    folder, file_name = relative.parts
    category = parse_category(folder)
    if category is None:
        return None
    return category, str(scripts_root / folder / file_name)


def resolve_folder_target(path: Path, scripts_root: Path) -> HookCategory | None:
    """Return the category of a folder directly below ``scripts_root``."""

    try:
        relative = path.relative_to(scripts_root)
    except ValueError:
        return None
    if len(relative.parts) != 1:
        return None
    return parse_category(relative.parts[0])


def apply_event(context: HookSyncContext, event: HookEvent) -> EventOutcome:
    """Apply ``event`` to the registry and regenerate the affected dispatcher.

    Args:
        context: Engine context bound to the managed repository.
        event: Filesystem change to apply.

    Returns:
        EventOutcome: ``APPLIED`` when state changed, ``IGNORED`` otherwise.

    Raises:
        RegistryError: If the registry cannot be persisted.
        DispatcherWriteError: If the dispatcher cannot be written.
    """

    scripts_root = context.layout.scripts_root
    if event.kind is EventKind.MODIFIED:
        return EventOutcome.IGNORED
    if event.kind is EventKind.FOLDER_CHANGED:
        return _apply_folder_change(context, event)

    target = resolve_script_target(event.path, scripts_root)
    if target is None:
        LOGGER.debug("file %s is not inside a hook folder", event.path)
        return EventOutcome.IGNORED
    category, script = target
    if event.kind is EventKind.CREATED:
        return _apply_created(context, category, script)
    return _apply_deleted(context, category, script)


def _apply_created(context: HookSyncContext, category: HookCategory, script: str) -> EventOutcome:
    registry = context.registry
    if not has_script_suffix(Path(script), context.settings):
        LOGGER.debug("ignoring created file %s: not a shell script name", script)
        return EventOutcome.IGNORED
    if registry.exists(category, script):
        LOGGER.debug("created file %s already registered", script)
        return EventOutcome.IGNORED
    enabled = context.prompt(Path(script).name, category)
    planned = registry.enabled_paths(category) + ([script] if enabled else [])
    context.commit(category, planned, lambda: registry.add(category, script, enabled=enabled))
    LOGGER.info("added %s script %s (enabled=%s)", category.value, script, enabled)
    return EventOutcome.APPLIED


def _apply_deleted(context: HookSyncContext, category: HookCategory, script: str) -> EventOutcome:
    registry = context.registry
    if not registry.exists(category, script):
        LOGGER.debug("deleted file %s was not registered", script)
        return EventOutcome.IGNORED
    planned = [path for path in registry.enabled_paths(category) if path != script]
    context.commit(category, planned, lambda: registry.remove(category, script))
    LOGGER.info("removed %s script %s", category.value, script)
    return EventOutcome.APPLIED


def _apply_folder_change(context: HookSyncContext, event: HookEvent) -> EventOutcome:
    category = resolve_folder_target(event.path, context.layout.scripts_root)
    if category is None:
        return EventOutcome.IGNORED
    discovered = discover_category_scripts(context)
    if category not in discovered:
        LOGGER.debug("%s folder is gone; keeping its registry entries", category.value)
        return EventOutcome.IGNORED
    change = reconcile_category(context, category, discovered[category])
    return EventOutcome.APPLIED if change is not None else EventOutcome.IGNORED


__all__ = ["apply_event", "resolve_folder_target", "resolve_script_target"]
