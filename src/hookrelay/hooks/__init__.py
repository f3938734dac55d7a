# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Hook category catalog and dispatcher generation."""

from __future__ import annotations

from .catalog import (
    HookCategory,
    argument_template_of,
    available_categories,
    dispatcher_file_name_of,
    folder_name_of,
    parse_category,
)
from .dispatcher import dispatcher_path, is_generated_dispatcher, render_dispatcher, write_dispatcher

__all__ = [
    "HookCategory",
    "argument_template_of",
    "available_categories",
    "dispatcher_file_name_of",
    "dispatcher_path",
    "folder_name_of",
    "is_generated_dispatcher",
    "parse_category",
    "render_dispatcher",
    "write_dispatcher",
]
