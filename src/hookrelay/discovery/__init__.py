# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Repository and script discovery helpers."""

from __future__ import annotations

from .repository import Repository, RepositoryResolver, discover_repository
from .scripts import category_folders, has_script_suffix, is_valid_script, valid_scripts

__all__ = [
    "Repository",
    "RepositoryResolver",
    "category_folders",
    "discover_repository",
    "has_script_suffix",
    "is_valid_script",
    "valid_scripts",
]
