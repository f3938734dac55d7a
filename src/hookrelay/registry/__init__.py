# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Persisted registry of user hook scripts."""

from __future__ import annotations

from .models import ScriptEntry
from .store import ScriptRegistry, load_registry_state, save_registry_state

__all__ = ["ScriptEntry", "ScriptRegistry", "load_registry_state", "save_registry_state"]
