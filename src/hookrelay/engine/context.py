# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""State shared by reconciliation and live event handling."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..config.models import HookRelaySettings, RepositoryLayout
from ..errors import RegistryError
from ..hooks.catalog import HookCategory
from ..hooks.dispatcher import write_dispatcher
from ..registry.store import ScriptRegistry
from .prompts import EnablePrompt

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HookSyncContext:
    """Bundle the collaborators bound to one managed repository.

    Callers must hold the engine's mutation lock while using the context.
    """

    layout: RepositoryLayout
    settings: HookRelaySettings
    registry: ScriptRegistry
    prompt: EnablePrompt

    def regenerate(self, category: HookCategory, scripts: list[str] | None = None) -> Path:
        """Rewrite the dispatcher of ``category``.

        Args:
            category: Hook category to regenerate.
            scripts: Explicit invocation list; defaults to the registry's
                currently enabled paths.

        Returns:
            Path: Location of the written dispatcher.
        """

        paths = self.registry.enabled_paths(category) if scripts is None else scripts
        return write_dispatcher(paths, self.layout.dispatcher_dir, category)

    def commit(self, category: HookCategory, planned: list[str], mutate: Callable[[], object]) -> Path:
        """Write the dispatcher for ``planned`` and then apply ``mutate`` to the registry.

        The dispatcher is written first, so a failed write leaves the registry
        untouched. When ``mutate`` fails to persist, the dispatcher is
        rewritten from the registry's surviving state before the error
        propagates.

        Args:
            category: Hook category being changed.
            planned: Enabled paths the registry will hold once ``mutate`` ran.
            mutate: Registry mutation matching ``planned``.

        Returns:
            Path: Location of the written dispatcher.

        Raises:
            DispatcherWriteError: If the dispatcher cannot be written.
            RegistryError: If the registry cannot be persisted.
        """

        dispatcher = self.regenerate(category, planned)
        try:
            mutate()
        except RegistryError:
            LOGGER.warning("registry update for %s failed; restoring dispatcher", category.value)
            self.regenerate(category)
            raise
        return dispatcher


__all__ = ["HookSyncContext"]
