# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared logging helpers."""

from __future__ import annotations

from .public import MessageStyle, emoji, enable_debug_logging, fail, info, ok, section, warn

__all__ = [
    "MessageStyle",
    "emoji",
    "enable_debug_logging",
    "fail",
    "info",
    "ok",
    "section",
    "warn",
]
