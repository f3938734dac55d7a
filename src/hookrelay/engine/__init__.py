# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reconciliation and generation engine."""

from __future__ import annotations

from .context import HookSyncContext
from .events import apply_event, resolve_folder_target, resolve_script_target
from .manager import EngineNotReadyError, HookFolderManager
from .models import (
    CategoryChange,
    EngineState,
    EventKind,
    EventOutcome,
    HookEvent,
    InitializeOutcome,
    InitializeResult,
    ReconcileReport,
)
from .prompts import EnablePrompt, StaticPrompt, enable_question
from .reconcile import full_reconciliation, reconcile_category
from .watcher import EventWorker, ScriptFolderWatcher, translate_event

__all__ = [
    "CategoryChange",
    "EnablePrompt",
    "EngineNotReadyError",
    "EngineState",
    "EventKind",
    "EventOutcome",
    "EventWorker",
    "HookEvent",
    "HookFolderManager",
    "HookSyncContext",
    "InitializeOutcome",
    "InitializeResult",
    "ReconcileReport",
    "ScriptFolderWatcher",
    "StaticPrompt",
    "apply_event",
    "enable_question",
    "full_reconciliation",
    "reconcile_category",
    "resolve_folder_target",
    "resolve_script_target",
    "translate_event",
]
