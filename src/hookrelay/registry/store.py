# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Persisted registry of user scripts and their enabled state."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable, Mapping
from dataclasses import replace
from pathlib import Path

from pydantic import ValidationError

from ..errors import RegistryError
from ..hooks.catalog import HookCategory, folder_name_of, parse_category
from .models import RegistryDocument, ScriptEntry, ScriptRecord

LOGGER = logging.getLogger(__name__)

RegistryState = dict[HookCategory, list[ScriptEntry]]


class ScriptRegistry:
    """Ordered per-category script records bound to one storage file.

    Every mutating call rewrites the storage file before returning. When the
    write fails the in-memory change is rolled back and :class:`RegistryError`
    is raised, so memory never runs ahead of disk.
    """

    def __init__(self, storage_path: Path | None = None) -> None:
        """Create an empty registry, optionally bound to ``storage_path``.

        Args:
            storage_path: Location of the JSON document. ``None`` leaves the
                registry unbound until :meth:`initialize` is called.
        """

        self._storage_path = storage_path
        self._scripts: RegistryState = {}

    @classmethod
    def open(cls, storage_path: Path) -> ScriptRegistry:
        """Return a registry hydrated from ``storage_path``."""

        registry = cls()
        registry.initialize(storage_path)
        return registry

    @property
    def storage_path(self) -> Path | None:
        """Return the bound storage location."""

        return self._storage_path

    def initialize(self, storage_path: Path) -> None:
        """Bind to ``storage_path`` and load its content.

        A missing file yields an empty registry. Unreadable or malformed
        content is logged and also yields an empty registry.

        Args:
            storage_path: Location of the persisted JSON document.
        """

        self._storage_path = storage_path
        self._scripts = load_registry_state(storage_path)

    def entries(self, category: HookCategory) -> tuple[ScriptEntry, ...]:
        """Return every record for ``category`` in registration order."""

        return tuple(self._scripts.get(category, ()))

    def enabled_entries(self, category: HookCategory) -> tuple[ScriptEntry, ...]:
        """Return the enabled records for ``category`` in registration order."""

        return tuple(entry for entry in self._scripts.get(category, ()) if entry.enabled)

    def enabled_paths(self, category: HookCategory) -> list[str]:
        """Return the paths of the enabled records for ``category``."""

        return [entry.path for entry in self.enabled_entries(category)]

    def exists(self, category: HookCategory, path: str) -> bool:
        """Return whether ``path`` is recorded for ``category``."""

        return any(entry.path == path for entry in self._scripts.get(category, ()))

    def add(self, category: HookCategory, path: str, *, enabled: bool) -> ScriptEntry:
        """Append a record for ``path`` and persist.

        Callers gate this behind :meth:`exists`; duplicates are not rejected.

        Args:
            category: Hook category receiving the script.
            path: Absolute script path.
            enabled: Whether the dispatcher should invoke the script.

        Returns:
            ScriptEntry: The appended record.

        Raises:
            RegistryError: If the registry cannot be persisted.
        """

        entry = ScriptEntry(path=path, enabled=enabled)
        self._mutate(category, lambda scripts: [*scripts, entry])
        LOGGER.debug("registered %s script %s (enabled=%s)", category.value, path, enabled)
        return entry

    def remove(self, category: HookCategory, path: str) -> int:
        """Remove every record matching ``path`` and persist.

        Args:
            category: Hook category holding the script.
            path: Script path to drop.

        Returns:
            int: Number of records removed. Nothing is written when zero.

        Raises:
            RegistryError: If the registry cannot be persisted.
        """

        current = self._scripts.get(category, [])
        remaining = [entry for entry in current if entry.path != path]
        removed = len(current) - len(remaining)
        if not removed:
            LOGGER.debug("no %s script registered for %s; nothing removed", category.value, path)
            return 0
        self._mutate(category, lambda _scripts: remaining)
        LOGGER.debug("removed %s script %s", category.value, path)
        return removed

    def set_enabled(self, category: HookCategory, path: str, *, enabled: bool) -> bool:
        """Update the enabled flag of the first record matching ``path``.

        Args:
            category: Hook category holding the script.
            path: Script path to update.
            enabled: New enabled state.

        Returns:
            bool: ``True`` when a record was updated, ``False`` when ``path``
            is not registered (logged, nothing written).

        Raises:
            RegistryError: If the registry cannot be persisted.
        """

        current = self._scripts.get(category, [])
        for index, entry in enumerate(current):
            if entry.path != path:
                continue
            updated = [*current]
            updated[index] = replace(entry, enabled=enabled)
            self._mutate(category, lambda _scripts: updated)
            LOGGER.debug("script entry updated: %s (enabled=%s)", path, enabled)
            return True
        LOGGER.warning("script entry not found for %s: %s", category.value, path)
        return False

    def save(self) -> None:
        """Serialize the registry and replace the storage file.

        Raises:
            RegistryError: If the registry is unbound or the write fails.
        """

        if self._storage_path is None:
            raise RegistryError("Script registry is not bound to a storage file", path=Path())
        save_registry_state(self._storage_path, self._scripts)

    def _mutate(
        self,
        category: HookCategory,
        transform: Callable[[list[ScriptEntry]], list[ScriptEntry]],
    ) -> None:
        """Apply ``transform`` to ``category`` and persist, rolling back on failure."""

        previous = self._scripts.get(category)
        self._scripts[category] = transform(list(previous or ()))
        try:
            self.save()
        except RegistryError:
            if previous is None:
                self._scripts.pop(category, None)
            else:
                self._scripts[category] = previous
            raise


def load_registry_state(path: Path) -> RegistryState:
    """Return the registry content stored at ``path``.

    Args:
        path: Location of the JSON document.

    Returns:
        RegistryState: Parsed records; empty when the file is missing or
        its content cannot be understood.
    """

    if not path.exists():
        LOGGER.debug("no registry found at %s; starting empty", path)
        return {}
    try:
        document = RegistryDocument.model_validate_json(path.read_bytes())
    except OSError as exc:
        LOGGER.warning("unable to read registry %s (%s); starting empty", path, exc)
        return {}
    except ValidationError as exc:
        LOGGER.warning("malformed registry %s (%d error(s)); starting empty", path, exc.error_count())
        return {}
    state = _state_from_document(document)
    LOGGER.debug("registry loaded from %s", path)
    return state


def save_registry_state(path: Path, state: Mapping[HookCategory, list[ScriptEntry]]) -> None:
    """Atomically replace ``path`` with the serialized ``state``.

    Args:
        path: Location of the JSON document.
        state: Registry content to persist.

    Raises:
        RegistryError: If the document cannot be written.
    """

    payload = _document_from_state(state).model_dump_json(indent=2) + "\n"
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            handle.write(payload)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise RegistryError(f"Unable to save registry {path}: {exc}", path=path) from exc
    LOGGER.debug("registry saved to %s", path)


def _state_from_document(document: RegistryDocument) -> RegistryState:
    state: RegistryState = {}
    for folder, records in document.hook_scripts.items():
        category = parse_category(folder)
        if category is None:
            LOGGER.warning("dropping unknown hook category %r from registry", folder)
            continue
        scripts = state.setdefault(category, [])
        seen = {entry.path for entry in scripts}
        for record in records:
            if record.path in seen:
                LOGGER.warning("dropping duplicate %s record for %s", category.value, record.path)
                continue
            seen.add(record.path)
            scripts.append(ScriptEntry(path=record.path, enabled=record.enabled))
    return state


def _document_from_state(state: Mapping[HookCategory, list[ScriptEntry]]) -> RegistryDocument:
    return RegistryDocument(
        hook_scripts={
            folder_name_of(category): [ScriptRecord(path=entry.path, enabled=entry.enabled) for entry in scripts]
            for category, scripts in state.items()
            if scripts
        },
    )


__all__ = ["ScriptRegistry", "load_registry_state", "save_registry_state"]
