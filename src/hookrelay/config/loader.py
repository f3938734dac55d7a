# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Load :class:`HookRelaySettings` from a repository's ``pyproject.toml``."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from ..errors import ConfigError
from .models import HookRelaySettings

PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "hookrelay"

LOGGER = logging.getLogger(__name__)


def load_settings(repo_root: Path) -> HookRelaySettings:
    """Return settings declared under ``[tool.hookrelay]`` for ``repo_root``.

    Args:
        repo_root: Repository root that may contain a ``pyproject.toml``.

    Returns:
        HookRelaySettings: Declared settings, or defaults when the file or
        section is absent.

    Raises:
        ConfigError: If the file cannot be parsed or the section is invalid.
    """

    section = _read_section(repo_root / PYPROJECT_FILE_NAME)
    try:
        return HookRelaySettings.model_validate(section)
    except ValidationError as exc:
        raise ConfigError(f"Invalid [tool.hookrelay] settings: {exc}") from exc


def _read_section(path: Path) -> Mapping[str, Any]:
    """Return the raw ``[tool.hookrelay]`` table stored in ``path``.

    Args:
        path: Location of the ``pyproject.toml`` document.

    Returns:
        Mapping[str, Any]: Section payload, empty when missing.

    Raises:
        ConfigError: If the document is unreadable or the section is not a table.
    """

    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    LOGGER.debug("loaded settings section from %s", path)
    return dict(section)


__all__ = ["PYPROJECT_SECTION_KEY", "load_settings"]
