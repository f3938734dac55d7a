# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide whether a newly discovered script should be enabled."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ..hooks.catalog import HookCategory, folder_name_of


@runtime_checkable
class EnablePrompt(Protocol):
    """Synchronous decision for a script seen for the first time."""

    def __call__(self, script_name: str, category: HookCategory) -> bool:
        """Return ``True`` to enable ``script_name`` for ``category``."""

        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class StaticPrompt:
    """Answer every prompt with the same decision."""

    decision: bool = True

    def __call__(self, script_name: str, category: HookCategory) -> bool:
        """Return the configured decision."""

        return self.decision


def enable_question(script_name: str, category: HookCategory) -> str:
    """Return the question shown to the user for a new script."""

    return f"Do you want to enable the new {folder_name_of(category)} script: {script_name} ?"


__all__ = ["EnablePrompt", "StaticPrompt", "enable_question"]
