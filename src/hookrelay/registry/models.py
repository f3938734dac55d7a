# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Records stored in the script registry and its persisted document."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True, slots=True)
class ScriptEntry:
    """A user script tracked for one hook category.

    Identity is the exact ``path`` string; no normalisation is applied.
    """

    path: str
    enabled: bool

    @property
    def name(self) -> str:
        """Return the script's file name for display."""

        return Path(self.path).name


class ScriptRecord(BaseModel):
    """Serialized form of :class:`ScriptEntry`."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    path: str
    enabled: bool


class RegistryDocument(BaseModel):
    """Top-level JSON document keyed by hook folder name."""

    model_config = ConfigDict(extra="ignore")

    hook_scripts: dict[str, list[ScriptRecord]] = Field(default_factory=dict)


__all__ = ["RegistryDocument", "ScriptEntry", "ScriptRecord"]
