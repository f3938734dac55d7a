# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings and resolved filesystem layout used by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath

from pydantic import BaseModel, ConfigDict, field_validator

from ..constants import (
    DISPATCHER_DIR_NAME,
    SCRIPTS_DIR_NAME,
    SHEBANG_MARKER,
    SHELL_SCRIPT_SUFFIX,
    STORAGE_FILE_NAME,
)


class HookRelaySettings(BaseModel):
    """User-tunable names read from ``[tool.hookrelay]``.

    Attributes:
        scripts_dir: Folder under the repository root holding category folders.
        storage_file: Registry file name stored inside ``scripts_dir``.
        dispatcher_dir: Folder under the git control directory receiving dispatchers.
        script_suffix: Extension accepted for scripts besides an empty one.
        shebang: Prefix the first line of a script must start with.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    scripts_dir: str = SCRIPTS_DIR_NAME
    storage_file: str = STORAGE_FILE_NAME
    dispatcher_dir: str = DISPATCHER_DIR_NAME
    script_suffix: str = SHELL_SCRIPT_SUFFIX
    shebang: str = SHEBANG_MARKER

    @field_validator("scripts_dir", "storage_file", "dispatcher_dir")
    @classmethod
    def _require_single_segment(cls, value: str) -> str:
        """Reject empty names and names containing path separators."""

        if not value or value in {".", ".."} or len(PurePath(value).parts) != 1:
            raise ValueError(f"expected a single path segment, got {value!r}")
        return value

    @field_validator("script_suffix")
    @classmethod
    def _require_dotted_suffix(cls, value: str) -> str:
        """Require suffixes to start with a dot, e.g. ``.sh``."""

        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"script suffix must look like '.sh', got {value!r}")
        return value

    @field_validator("shebang")
    @classmethod
    def _require_shebang(cls, value: str) -> str:
        """Require the marker to be an interpreter line."""

        if not value.startswith("#!"):
            raise ValueError(f"shebang must start with '#!', got {value!r}")
        return value


@dataclass(frozen=True, slots=True)
class RepositoryLayout:
    """Describe the directories bound to one managed repository."""

    repo_root: Path
    git_dir: Path
    scripts_root: Path
    dispatcher_dir: Path
    storage_path: Path

    @classmethod
    def build(cls, *, repo_root: Path, git_dir: Path, settings: HookRelaySettings) -> RepositoryLayout:
        """Return the layout derived from ``settings`` for a repository.

        Args:
            repo_root: Working tree root of the repository.
            git_dir: Control metadata directory of the repository.
            settings: Names used to derive scripts and dispatcher locations.

        Returns:
            RepositoryLayout: Absolute locations of every managed directory.
        """

        scripts_root = repo_root / settings.scripts_dir
        return cls(
            repo_root=repo_root,
            git_dir=git_dir,
            scripts_root=scripts_root,
            dispatcher_dir=git_dir / settings.dispatcher_dir,
            storage_path=scripts_root / settings.storage_file,
        )


__all__ = ["HookRelaySettings", "RepositoryLayout"]
