# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem and dispatcher constants shared across hookrelay."""

from __future__ import annotations

from typing import Final

PACKAGE_NAME: Final[str] = "hookrelay"

SCRIPTS_DIR_NAME: Final[str] = ".githooks"
STORAGE_FILE_NAME: Final[str] = "config.json"
GIT_DIR_NAME: Final[str] = ".git"
DISPATCHER_DIR_NAME: Final[str] = "hooks"

SHELL_SCRIPT_SUFFIX: Final[str] = ".sh"
SHEBANG_MARKER: Final[str] = "#!/bin/sh"

GENERATED_MARKER: Final[str] = f"# Generated by {PACKAGE_NAME}"
DISPATCHER_BANNER: Final[str] = f'echo "{PACKAGE_NAME} is starting your scripts now"'
DISPATCHER_MODE: Final[int] = 0o755

__all__ = [
    "DISPATCHER_BANNER",
    "DISPATCHER_DIR_NAME",
    "DISPATCHER_MODE",
    "GENERATED_MARKER",
    "GIT_DIR_NAME",
    "PACKAGE_NAME",
    "SCRIPTS_DIR_NAME",
    "SHEBANG_MARKER",
    "SHELL_SCRIPT_SUFFIX",
    "STORAGE_FILE_NAME",
]
