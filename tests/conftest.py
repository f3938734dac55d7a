# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from hookrelay.config import HookRelaySettings, RepositoryLayout
from hookrelay.engine import HookSyncContext, StaticPrompt
from hookrelay.hooks import HookCategory
from hookrelay.registry import ScriptRegistry

SHELL_BODY = "#!/bin/sh\necho hook\n"

ScriptWriter = Callable[..., Path]


@dataclass
class RecordingPrompt:
    """Enablement prompt returning scripted answers and recording calls."""

    decisions: dict[str, bool] = field(default_factory=dict)
    default: bool = True
    calls: list[tuple[str, HookCategory]] = field(default_factory=list)

    def __call__(self, script_name: str, category: HookCategory) -> bool:
        self.calls.append((script_name, category))
        return self.decisions.get(script_name, self.default)


def _write_script(folder: Path, name: str, body: str = SHELL_BODY) -> Path:
    folder.mkdir(parents=True, exist_ok=True)
    script = folder / name
    script.write_text(body, encoding="utf-8")
    return script


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Return a git repository root containing an empty ``.githooks`` folder."""

    root = tmp_path.resolve() / "repo"
    (root / ".git").mkdir(parents=True)
    (root / ".githooks").mkdir()
    return root


@pytest.fixture
def layout(repo_root: Path) -> RepositoryLayout:
    return RepositoryLayout.build(repo_root=repo_root, git_dir=repo_root / ".git", settings=HookRelaySettings())


@pytest.fixture
def prompt() -> RecordingPrompt:
    return RecordingPrompt()


@pytest.fixture
def context(layout: RepositoryLayout, prompt: RecordingPrompt) -> HookSyncContext:
    return HookSyncContext(
        layout=layout,
        settings=HookRelaySettings(),
        registry=ScriptRegistry.open(layout.storage_path),
        prompt=prompt,
    )


@pytest.fixture
def enable_all() -> StaticPrompt:
    return StaticPrompt(decision=True)


@pytest.fixture
def make_script() -> ScriptWriter:
    """Return a helper writing a script file, creating its folder as needed."""

    return _write_script
