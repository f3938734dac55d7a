# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Converge the registry and dispatchers with the scripts found on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from ..discovery.scripts import category_folders, valid_scripts
from ..hooks.catalog import HookCategory
from ..registry.models import ScriptEntry
from .context import HookSyncContext
from .models import CategoryChange, ReconcileReport

LOGGER = logging.getLogger(__name__)


def discover_category_scripts(context: HookSyncContext) -> dict[HookCategory, list[str]]:
    """Return the valid scripts of every category folder under the scripts root.

    Several folders may map to one category when they differ only by case;
    their scripts are merged so that neither folder evicts the other.

    Args:
        context: Engine context supplying the layout and settings.

    Returns:
        dict[HookCategory, list[str]]: Valid script paths per category.
    """

    discovered: dict[HookCategory, list[str]] = {}
    for category, folder in category_folders(context.layout.scripts_root):
        bucket = discovered.setdefault(category, [])
        bucket.extend(path for path in valid_scripts(folder, context.settings) if path not in bucket)
    return discovered


def full_reconciliation(context: HookSyncContext) -> ReconcileReport:
    """Diff every category folder against the registry and apply the differences.

    Only categories with a folder on disk are visited. Registry entries of a
    category whose folder is missing are left untouched.

    Args:
        context: Engine context bound to the managed repository.

    Returns:
        ReconcileReport: Changes applied, empty when disk and registry agree.

    Raises:
        RegistryError: If the registry cannot be persisted.
        DispatcherWriteError: If a dispatcher cannot be written.
    """

    discovered = discover_category_scripts(context)
    report = ReconcileReport()
    for category, scripts in discovered.items():
        change = reconcile_category(context, category, scripts)
        if change is not None:
            report.changes.append(change)
    return report


def reconcile_category(
    context: HookSyncContext,
    category: HookCategory,
    scripts: list[str],
) -> CategoryChange | None:
    """Bring ``category`` in line with the valid ``scripts`` on disk.

    The dispatcher is written first, from the enabled entries that survive
    the removals followed by the enabled new scripts. Only then are deleted
    entries removed from the registry and new scripts appended to it.

    Args:
        context: Engine context bound to the managed repository.
        category: Hook category being reconciled.
        scripts: Valid script paths currently present for ``category``.

    Returns:
        CategoryChange | None: Applied change, or ``None`` when the category
        was already in sync and nothing was written.
    """

    registry = context.registry
    on_disk = set(scripts)
    new_scripts: list[ScriptEntry] = []
    for path in scripts:
        if registry.exists(category, path):
            continue
        decision = context.prompt(Path(path).name, category)
        new_scripts.append(ScriptEntry(path=path, enabled=decision))
    deleted = [entry for entry in registry.entries(category) if entry.path not in on_disk]
    if not new_scripts and not deleted:
        LOGGER.debug("%s scripts already in sync", category.value)
        return None

    gone = {entry.path for entry in deleted}
    planned = [path for path in registry.enabled_paths(category) if path not in gone]
    planned.extend(entry.path for entry in new_scripts if entry.enabled)

    def _apply() -> None:
        for entry in deleted:
            registry.remove(category, entry.path)
        for entry in new_scripts:
            registry.add(category, entry.path, enabled=entry.enabled)

    dispatcher = context.commit(category, planned, _apply)

    LOGGER.info(
        "reconciled %s: %d added, %d removed",
        category.value,
        len(new_scripts),
        len(deleted),
    )
    return CategoryChange(
        category=category,
        added=tuple(new_scripts),
        removed=tuple(deleted),
        dispatcher=dispatcher,
    )


__all__ = ["discover_category_scripts", "full_reconciliation", "reconcile_category"]
