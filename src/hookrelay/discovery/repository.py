# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate the git repository enclosing a path."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..constants import GIT_DIR_NAME

GITDIR_PREFIX: Final[str] = "gitdir:"

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Repository:
    """Working tree root and control directory of a git repository."""

    root: Path
    git_dir: Path


RepositoryResolver = Callable[[Path], Repository | None]


def discover_repository(start: Path) -> Repository | None:
    """Return the repository enclosing ``start``.

    The search walks upwards from ``start``. A ``.git`` directory marks the
    root directly; a ``.git`` file (worktrees, submodules) redirects the
    control directory to the path named on its ``gitdir:`` line.

    Args:
        start: File or directory to begin searching from.

    Returns:
        Repository | None: The enclosing repository, or ``None`` when
        ``start`` is not inside one.
    """

    current = start.resolve()
    if not current.is_dir():
        current = current.parent
    for candidate in (current, *current.parents):
        marker = candidate / GIT_DIR_NAME
        if marker.is_dir():
            return Repository(root=candidate, git_dir=marker)
        if marker.is_file():
            git_dir = _read_gitdir_pointer(marker)
            if git_dir is not None:
                return Repository(root=candidate, git_dir=git_dir)
    LOGGER.debug("no git repository found above %s", start)
    return None


def _read_gitdir_pointer(marker: Path) -> Path | None:
    """Return the control directory referenced by a ``.git`` file.

    Args:
        marker: ``.git`` file containing a ``gitdir:`` line.

    Returns:
        Path | None: Resolved control directory, or ``None`` when the file
        cannot be read or does not point at a directory.
    """

    try:
        content = marker.read_text(encoding="utf-8")
    except OSError as exc:
        LOGGER.debug("unable to read %s: %s", marker, exc)
        return None
    for line in content.splitlines():
        if not line.startswith(GITDIR_PREFIX):
            continue
        target = Path(line[len(GITDIR_PREFIX) :].strip())
        if not target.is_absolute():
            target = marker.parent / target
        target = target.resolve()
        return target if target.is_dir() else None
    return None


__all__ = ["Repository", "RepositoryResolver", "discover_repository"]
