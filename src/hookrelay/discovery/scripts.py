# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Find category folders and the valid shell scripts they contain."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from ..config.models import HookRelaySettings
from ..hooks.catalog import HookCategory, parse_category

LOGGER = logging.getLogger(__name__)


def category_folders(scripts_root: Path) -> Iterator[tuple[HookCategory, Path]]:
    """Yield ``(category, folder)`` for each hook folder under ``scripts_root``.

    Folders whose names are not hook categories are skipped.

    Args:
        scripts_root: Directory holding one folder per hook category.

    Yields:
        tuple[HookCategory, Path]: Recognised category and its folder.
    """

    if not scripts_root.is_dir():
        return
    for child in sorted(scripts_root.iterdir()):
        if not child.is_dir():
            continue
        category = parse_category(child.name)
        if category is None:
            LOGGER.debug("ignoring folder %s: not a hook category", child)
            continue
        yield category, child


def has_script_suffix(path: Path, settings: HookRelaySettings) -> bool:
    """Return whether ``path`` has no extension or the shell-script extension."""

    return path.suffix in {"", settings.script_suffix}


def is_valid_script(path: Path, settings: HookRelaySettings) -> bool:
    """Return whether ``path`` looks like a shell script.

    Args:
        path: Candidate file.
        settings: Supplies the accepted extension and shebang marker.

    Returns:
        bool: ``True`` when the extension is accepted and the first line
        starts with the shebang marker. Only that many characters are
        read, so large files without newlines stay cheap to check.
    """

    if not has_script_suffix(path, settings):
        return False
    try:
        with path.open(encoding="utf-8", errors="replace") as handle:
            head = handle.readline(len(settings.shebang))
    except OSError:
        return False
    return head == settings.shebang


def valid_scripts(folder: Path, settings: HookRelaySettings) -> list[str]:
    """Return the absolute paths of valid scripts directly inside ``folder``.

    Args:
        folder: Hook category folder.
        settings: Supplies the accepted extension and shebang marker.

    Returns:
        list[str]: Valid script paths in name order.
    """

    if not folder.is_dir():
        return []
    scripts: list[str] = []
    for child in sorted(folder.iterdir()):
        if not child.is_file():
            continue
        if is_valid_script(child, settings):
            scripts.append(str(child.absolute()))
        else:
            LOGGER.debug("skipping %s: not a shell script", child)
    return scripts


__all__ = ["category_folders", "has_script_suffix", "is_valid_script", "valid_scripts"]
