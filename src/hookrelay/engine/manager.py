# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lifecycle owner for one managed repository's hook scripts."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path

from ..config.loader import load_settings
from ..config.models import HookRelaySettings, RepositoryLayout
from ..discovery.repository import RepositoryResolver, discover_repository
from ..errors import HookRelayError
from ..hooks.catalog import HookCategory, available_categories
from ..registry.models import ScriptEntry
from ..registry.store import ScriptRegistry
from .context import HookSyncContext
from .events import apply_event
from .models import (
    EngineState,
    EventOutcome,
    HookEvent,
    InitializeOutcome,
    InitializeResult,
    ReconcileReport,
)
from .prompts import EnablePrompt
from .reconcile import full_reconciliation
from .watcher import EventWorker, ScriptFolderWatcher

LOGGER = logging.getLogger(__name__)

SettingsLoader = Callable[[Path], HookRelaySettings]


class EngineNotReadyError(HookRelayError):
    """Raised when a mutation is requested before initialisation completed."""


class HookFolderManager:
    """Reconcile a repository's scripts folder and keep dispatchers current.

    All registry mutation and dispatcher regeneration, whether triggered by
    the startup scan, a live filesystem event or a caller toggling a script,
    runs while holding one mutation lock.
    """

    def __init__(
        self,
        *,
        prompt: EnablePrompt,
        resolver: RepositoryResolver = discover_repository,
        settings_loader: SettingsLoader = load_settings,
        watch: bool = True,
    ) -> None:
        """Create an uninitialised manager.

        Args:
            prompt: Decides whether newly discovered scripts start enabled.
            resolver: Locates the repository enclosing the search path.
            settings_loader: Reads repository settings from its root.
            watch: When ``False`` no filesystem watch is started, which suits
                one-shot synchronisation.
        """

        self._prompt = prompt
        self._resolver = resolver
        self._settings_loader = settings_loader
        self._watch = watch
        self._state = EngineState.UNINITIALIZED
        self._lifecycle_lock = threading.Lock()
        self._mutation_lock = threading.RLock()
        self._context: HookSyncContext | None = None
        self._watcher: ScriptFolderWatcher | None = None
        self._worker: EventWorker | None = None

    @property
    def state(self) -> EngineState:
        """Return the current lifecycle state."""

        return self._state

    @property
    def layout(self) -> RepositoryLayout | None:
        """Return the bound repository layout while initialised."""

        return self._context.layout if self._context is not None else None

    @property
    def registry(self) -> ScriptRegistry | None:
        """Return the bound script registry while initialised."""

        return self._context.registry if self._context is not None else None

    def initialize(self, search_path: Path) -> InitializeResult:
        """Discover the repository around ``search_path`` and start managing it.

        Failures are logged and leave the manager uninitialised; this method
        never raises.

        Args:
            search_path: File or directory inside the repository.

        Returns:
            InitializeResult: Outcome plus the startup reconciliation report.
        """

        with self._lifecycle_lock:
            if self._state is EngineState.READY:
                return InitializeResult(outcome=InitializeOutcome.ALREADY_READY, layout=self.layout)
            self._state = EngineState.INITIALIZING
            try:
                return self._initialize(search_path)
            except Exception:
                LOGGER.exception("hook folder initialisation failed for %s", search_path)
                self._teardown()
                return InitializeResult(outcome=InitializeOutcome.FAILED)

    def uninitialize(self) -> None:
        """Stop watching and release the bound repository.

        Events still queued are dropped. Calling this while uninitialised is
        a no-op.
        """

        with self._lifecycle_lock:
            if self._state is EngineState.UNINITIALIZED:
                return
            self._teardown()
            LOGGER.debug("hook folder manager has been uninitialised")

    def submit_event(self, event: HookEvent) -> None:
        """Queue ``event`` for the worker, or drop it when not watching."""

        worker = self._worker
        if worker is None:
            LOGGER.debug("dropping %s event for %s: not watching", event.kind.value, event.path)
            return
        worker.submit(event)

    def wait_idle(self) -> None:
        """Block until queued events have been handled."""

        worker = self._worker
        if worker is not None:
            worker.wait_idle()

    def handle_event(self, event: HookEvent) -> EventOutcome:
        """Apply one filesystem event; never raises.

        Args:
            event: Filesystem change below the scripts root.

        Returns:
            EventOutcome: ``DROPPED`` when the manager is not ready,
            ``FAILED`` when applying the event raised, otherwise the result
            of applying it.
        """

        with self._mutation_lock:
            context = self._context
            if self._state is not EngineState.READY or context is None:
                LOGGER.debug("dropping %s event for %s: manager not ready", event.kind.value, event.path)
                return EventOutcome.DROPPED
            try:
                return apply_event(context, event)
            except Exception:
                LOGGER.exception("failed to apply %s event for %s", event.kind.value, event.path)
                return EventOutcome.FAILED

    def reconcile(self) -> ReconcileReport:
        """Run a full reconciliation against the bound repository.

        Raises:
            EngineNotReadyError: If the manager is not initialised.
            RegistryError: If the registry cannot be persisted.
            DispatcherWriteError: If a dispatcher cannot be written.
        """

        with self._mutation_lock:
            return full_reconciliation(self._require_context())

    def entries(self, category: HookCategory) -> tuple[ScriptEntry, ...]:
        """Return the registered scripts of ``category`` in order."""

        with self._mutation_lock:
            return self._require_context().registry.entries(category)

    def enabled_entries(self, category: HookCategory) -> tuple[ScriptEntry, ...]:
        """Return the enabled scripts of ``category`` in order."""

        with self._mutation_lock:
            return self._require_context().registry.enabled_entries(category)

    def set_enabled(self, category: HookCategory, path: str, *, enabled: bool) -> bool:
        """Toggle a registered script and regenerate its dispatcher.

        Args:
            category: Hook category holding the script.
            path: Registered script path.
            enabled: New enabled state.

        Returns:
            bool: ``False`` when ``path`` is not registered; nothing changes.

        Raises:
            EngineNotReadyError: If the manager is not initialised.
            RegistryError: If the registry cannot be persisted.
            DispatcherWriteError: If the dispatcher cannot be written.
        """

        with self._mutation_lock:
            context = self._require_context()
            registry = context.registry
            if not registry.exists(category, path):
                LOGGER.warning("script entry not found for %s: %s", category.value, path)
                return False
            planned = _toggled_paths(registry.entries(category), path, enabled=enabled)
            context.commit(category, planned, lambda: registry.set_enabled(category, path, enabled=enabled))
            return True

    def add_script(self, category: HookCategory, path: str, *, enabled: bool) -> bool:
        """Register ``path`` and regenerate, unless it is already registered.

        Raises:
            EngineNotReadyError: If the manager is not initialised.
            RegistryError: If the registry cannot be persisted.
            DispatcherWriteError: If the dispatcher cannot be written.
        """

        with self._mutation_lock:
            context = self._require_context()
            registry = context.registry
            if registry.exists(category, path):
                return False
            planned = registry.enabled_paths(category) + ([path] if enabled else [])
            context.commit(category, planned, lambda: registry.add(category, path, enabled=enabled))
            return True

    def remove_script(self, category: HookCategory, path: str) -> bool:
        """Unregister ``path`` and regenerate when it was registered.

        Raises:
            EngineNotReadyError: If the manager is not initialised.
            RegistryError: If the registry cannot be persisted.
            DispatcherWriteError: If the dispatcher cannot be written.
        """

        with self._mutation_lock:
            context = self._require_context()
            registry = context.registry
            if not registry.exists(category, path):
                return False
            planned = [entry for entry in registry.enabled_paths(category) if entry != path]
            context.commit(category, planned, lambda: registry.remove(category, path))
            return True

    def regenerate(self, categories: Iterable[HookCategory] | None = None) -> list[Path]:
        """Rewrite dispatchers from the registry.

        Args:
            categories: Categories to rewrite; defaults to every category.

        Returns:
            list[Path]: Dispatchers written.

        Raises:
            EngineNotReadyError: If the manager is not initialised.
            DispatcherWriteError: If a dispatcher cannot be written.
        """

        with self._mutation_lock:
            context = self._require_context()
            targets = available_categories() if categories is None else tuple(categories)
            return [context.regenerate(category) for category in targets]

    def _initialize(self, search_path: Path) -> InitializeResult:
        repository = self._resolver(search_path)
        if repository is None:
            LOGGER.debug("no git repository found for %s", search_path)
            self._state = EngineState.UNINITIALIZED
            return InitializeResult(outcome=InitializeOutcome.NO_REPOSITORY)

        settings = self._settings_loader(repository.root)
        layout = RepositoryLayout.build(repo_root=repository.root, git_dir=repository.git_dir, settings=settings)
        if not layout.scripts_root.is_dir():
            LOGGER.debug("scripts folder %s does not exist", layout.scripts_root)
            self._state = EngineState.UNINITIALIZED
            return InitializeResult(outcome=InitializeOutcome.NO_SCRIPTS_FOLDER, layout=layout)

        registry = ScriptRegistry.open(layout.storage_path)
        context = HookSyncContext(layout=layout, settings=settings, registry=registry, prompt=self._prompt)
        with self._mutation_lock:
            self._context = context
            report = full_reconciliation(context)
            self._state = EngineState.READY
        if self._watch:
            self._start_watch(layout)
        LOGGER.debug("managing hook scripts in %s", layout.scripts_root)
        return InitializeResult(outcome=InitializeOutcome.READY, layout=layout, report=report)

    def _start_watch(self, layout: RepositoryLayout) -> None:
        worker = EventWorker(self.handle_event)
        worker.start()
        self._worker = worker
        watcher = ScriptFolderWatcher(layout.scripts_root, self.submit_event)
        watcher.start()
        self._watcher = watcher

    def _teardown(self) -> None:
        with self._mutation_lock:
            self._state = EngineState.UNINITIALIZED
        watcher, self._watcher = self._watcher, None
        if watcher is not None:
            watcher.stop()
        worker, self._worker = self._worker, None
        if worker is not None:
            worker.stop()
        with self._mutation_lock:
            self._context = None

    def _require_context(self) -> HookSyncContext:
        if self._state is not EngineState.READY or self._context is None:
            raise EngineNotReadyError("hook folder manager is not initialised")
        return self._context


def _toggled_paths(entries: Iterable[ScriptEntry], path: str, *, enabled: bool) -> list[str]:
    """Return the enabled paths once the first record for ``path`` is set to ``enabled``."""

    planned: list[str] = []
    toggled = False
    for entry in entries:
        state = entry.enabled
        if not toggled and entry.path == path:
            state, toggled = enabled, True
        if state:
            planned.append(entry.path)
    return planned


__all__ = ["EngineNotReadyError", "HookFolderManager", "SettingsLoader"]
