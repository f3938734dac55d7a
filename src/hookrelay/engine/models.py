# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Value types exchanged by the reconciliation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..config.models import RepositoryLayout
from ..hooks.catalog import HookCategory
from ..registry.models import ScriptEntry


class EngineState(str, Enum):
    """Lifecycle states of :class:`~hookrelay.engine.manager.HookFolderManager`."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class InitializeOutcome(str, Enum):
    """Explain why an initialisation attempt ended where it did."""

    READY = "ready"
    ALREADY_READY = "already-ready"
    NO_REPOSITORY = "no-repository"
    NO_SCRIPTS_FOLDER = "no-scripts-folder"
    FAILED = "failed"


class EventKind(str, Enum):
    """Filesystem changes the engine reacts to."""

    CREATED = "created"
    DELETED = "deleted"
    MODIFIED = "modified"
    FOLDER_CHANGED = "folder-changed"


class EventOutcome(str, Enum):
    """Result of applying one filesystem event."""

    APPLIED = "applied"
    IGNORED = "ignored"
    DROPPED = "dropped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class HookEvent:
    """A filesystem change below the scripts root."""

    kind: EventKind
    path: Path


@dataclass(frozen=True, slots=True)
class CategoryChange:
    """Registry and dispatcher changes applied to one category."""

    category: HookCategory
    added: tuple[ScriptEntry, ...]
    removed: tuple[ScriptEntry, ...]
    dispatcher: Path


@dataclass(slots=True)
class ReconcileReport:
    """Per-category changes produced by one full reconciliation."""

    changes: list[CategoryChange] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """Return whether any category was touched."""

        return bool(self.changes)

    def for_category(self, category: HookCategory) -> CategoryChange | None:
        """Return the change recorded for ``category`` if any."""

        return next((change for change in self.changes if change.category is category), None)


@dataclass(frozen=True, slots=True)
class InitializeResult:
    """Outcome of :meth:`HookFolderManager.initialize`."""

    outcome: InitializeOutcome
    layout: RepositoryLayout | None = None
    report: ReconcileReport | None = None

    @property
    def ready(self) -> bool:
        """Return whether the engine is managing a repository."""

        return self.outcome in {InitializeOutcome.READY, InitializeOutcome.ALREADY_READY}


__all__ = [
    "CategoryChange",
    "EngineState",
    "EventKind",
    "EventOutcome",
    "HookEvent",
    "InitializeOutcome",
    "InitializeResult",
    "ReconcileReport",
]
