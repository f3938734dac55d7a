# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for hookrelay."""

from __future__ import annotations

from ..errors import ConfigError
from .loader import load_settings
from .models import HookRelaySettings, RepositoryLayout

__all__ = ["ConfigError", "HookRelaySettings", "RepositoryLayout", "load_settings"]
