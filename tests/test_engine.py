# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the hook folder manager lifecycle."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from pathlib import Path

import pytest

from hookrelay.engine import (
    EngineNotReadyError,
    EngineState,
    EventKind,
    EventOutcome,
    HookEvent,
    HookFolderManager,
    InitializeOutcome,
    StaticPrompt,
)
from hookrelay.errors import DispatcherWriteError
from hookrelay.hooks import HookCategory


def _dispatcher_lines(path: Path) -> list[str]:
    return [line for line in path.read_text(encoding="utf-8").splitlines() if line.startswith("sh ")]


def _wait_for(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.05)
    return predicate()


def test_initialize_reconciles_existing_scripts(repo_root: Path, make_script: Callable[..., Path]) -> None:
    script = make_script(repo_root / ".githooks" / "pre-commit", "lint.sh")
    manager = HookFolderManager(prompt=StaticPrompt(), watch=False)

    result = manager.initialize(repo_root / ".githooks")

    assert result.outcome is InitializeOutcome.READY
    assert result.ready
    assert manager.state is EngineState.READY
    assert result.report is not None and result.report.changed
    assert manager.entries(HookCategory.PRE_COMMIT)[0].path == str(script)
    assert (repo_root / ".git" / "hooks" / "pre-commit").is_file()
    manager.uninitialize()


def test_initialize_twice_reports_already_ready(repo_root: Path) -> None:
    manager = HookFolderManager(prompt=StaticPrompt(), watch=False)
    assert manager.initialize(repo_root).outcome is InitializeOutcome.READY
    again = manager.initialize(repo_root)
    assert again.outcome is InitializeOutcome.ALREADY_READY
    assert again.ready
    manager.uninitialize()


def test_initialize_without_repository(tmp_path: Path) -> None:
    manager = HookFolderManager(prompt=StaticPrompt(), resolver=lambda _path: None, watch=False)
    result = manager.initialize(tmp_path)
    assert result.outcome is InitializeOutcome.NO_REPOSITORY
    assert manager.state is EngineState.UNINITIALIZED


def test_initialize_without_scripts_folder(repo_root: Path) -> None:
    (repo_root / ".githooks").rmdir()
    manager = HookFolderManager(prompt=StaticPrompt(), watch=False)
    result = manager.initialize(repo_root)
    assert result.outcome is InitializeOutcome.NO_SCRIPTS_FOLDER
    assert result.layout is not None
    assert manager.state is EngineState.UNINITIALIZED
    assert not (repo_root / ".git" / "hooks").exists()


def test_initialize_failure_is_reported(repo_root: Path) -> None:
    (repo_root / "pyproject.toml").write_text('[tool.hookrelay]\nscripts_dir = "a/b"\n', encoding="utf-8")
    manager = HookFolderManager(prompt=StaticPrompt(), watch=False)
    result = manager.initialize(repo_root)
    assert result.outcome is InitializeOutcome.FAILED
    assert manager.state is EngineState.UNINITIALIZED
    assert manager.layout is None


def test_uninitialize_is_idempotent(repo_root: Path) -> None:
    manager = HookFolderManager(prompt=StaticPrompt(), watch=False)
    manager.uninitialize()
    manager.initialize(repo_root)
    manager.uninitialize()
    manager.uninitialize()
    assert manager.state is EngineState.UNINITIALIZED
    assert manager.registry is None


def test_events_are_dropped_when_not_ready(repo_root: Path, make_script: Callable[..., Path]) -> None:
    manager = HookFolderManager(prompt=StaticPrompt(), watch=False)
    script = make_script(repo_root / ".githooks" / "pre-commit", "a.sh")
    event = HookEvent(EventKind.CREATED, script)

    assert manager.handle_event(event) is EventOutcome.DROPPED
    manager.initialize(repo_root)
    manager.uninitialize()
    assert manager.handle_event(event) is EventOutcome.DROPPED


def test_operations_require_initialisation() -> None:
    manager = HookFolderManager(prompt=StaticPrompt(), watch=False)
    with pytest.raises(EngineNotReadyError):
        manager.reconcile()
    with pytest.raises(EngineNotReadyError):
        manager.set_enabled(HookCategory.PRE_COMMIT, "/x", enabled=True)


def test_set_enabled_regenerates_dispatcher(repo_root: Path, make_script: Callable[..., Path]) -> None:
    script = make_script(repo_root / ".githooks" / "post-merge", "sync.sh")
    manager = HookFolderManager(prompt=StaticPrompt(decision=False), watch=False)
    manager.initialize(repo_root)
    dispatcher = repo_root / ".git" / "hooks" / "post-merge"
    assert str(script) not in dispatcher.read_text(encoding="utf-8")

    assert manager.set_enabled(HookCategory.POST_MERGE, str(script), enabled=True)
    assert f'sh "{script}" "$1" || exit $?' in dispatcher.read_text(encoding="utf-8")
    assert not manager.set_enabled(HookCategory.POST_MERGE, "/not/registered", enabled=True)
    manager.uninitialize()


def test_add_remove_and_regenerate(repo_root: Path) -> None:
    manager = HookFolderManager(prompt=StaticPrompt(), watch=False)
    manager.initialize(repo_root)

    assert manager.add_script(HookCategory.PRE_COMMIT, "/opt/check.sh", enabled=True)
    assert not manager.add_script(HookCategory.PRE_COMMIT, "/opt/check.sh", enabled=True)
    assert [entry.path for entry in manager.enabled_entries(HookCategory.PRE_COMMIT)] == ["/opt/check.sh"]
    assert manager.remove_script(HookCategory.PRE_COMMIT, "/opt/check.sh")
    assert not manager.remove_script(HookCategory.PRE_COMMIT, "/opt/check.sh")

    written = manager.regenerate()
    assert sorted(path.name for path in written) == ["post-checkout", "post-merge", "pre-commit"]
    manager.uninitialize()


def test_concurrent_events_are_serialised(repo_root: Path, make_script: Callable[..., Path]) -> None:
    manager = HookFolderManager(prompt=StaticPrompt(), watch=False)
    manager.initialize(repo_root)
    folder = repo_root / ".githooks" / "pre-commit"
    scripts = [make_script(folder, f"script{index}.sh") for index in range(8)]
    outcomes: list[EventOutcome] = []
    barrier = threading.Barrier(len(scripts))

    def _submit(path: Path) -> None:
        barrier.wait()
        outcomes.append(manager.handle_event(HookEvent(EventKind.CREATED, path)))

    threads = [threading.Thread(target=_submit, args=(script,)) for script in scripts]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    assert outcomes.count(EventOutcome.APPLIED) == len(scripts)
    entries = manager.entries(HookCategory.PRE_COMMIT)
    assert len(entries) == len(scripts)
    assert {entry.path for entry in entries} == {str(script) for script in scripts}
    assert _dispatcher_lines(repo_root / ".git" / "hooks" / "pre-commit") == [
        f'sh "{entry.path}" "$@" || exit $?' for entry in manager.enabled_entries(HookCategory.PRE_COMMIT)
    ]
    manager.uninitialize()


def test_event_waits_for_startup_reconciliation(repo_root: Path, make_script: Callable[..., Path]) -> None:
    script = make_script(repo_root / ".githooks" / "pre-commit", "slow.sh")
    asked = threading.Event()
    release = threading.Event()
    questions: list[str] = []

    def _blocking_prompt(script_name: str, category: HookCategory) -> bool:
        questions.append(script_name)
        asked.set()
        release.wait(timeout=10)
        return True

    manager = HookFolderManager(prompt=_blocking_prompt, watch=False)
    outcomes: list[EventOutcome] = []
    starter = threading.Thread(target=manager.initialize, args=(repo_root,))
    racer = threading.Thread(
        target=lambda: outcomes.append(manager.handle_event(HookEvent(EventKind.CREATED, script))),
    )
    starter.start()
    assert asked.wait(timeout=5)
    racer.start()
    racer.join(timeout=0.3)
    assert racer.is_alive()

    release.set()
    starter.join(timeout=10)
    racer.join(timeout=10)

    assert outcomes == [EventOutcome.IGNORED]
    assert questions == ["slow.sh"]
    assert [entry.path for entry in manager.entries(HookCategory.PRE_COMMIT)] == [str(script)]
    manager.uninitialize()


def test_set_enabled_keeps_registry_when_dispatcher_write_fails(
    repo_root: Path,
    make_script: Callable[..., Path],
) -> None:
    script = make_script(repo_root / ".githooks" / "post-merge", "sync.sh")
    manager = HookFolderManager(prompt=StaticPrompt(decision=False), watch=False)
    manager.initialize(repo_root)
    dispatcher = repo_root / ".git" / "hooks" / "post-merge"
    dispatcher.unlink()
    dispatcher.mkdir()

    with pytest.raises(DispatcherWriteError):
        manager.set_enabled(HookCategory.POST_MERGE, str(script), enabled=True)
    assert manager.enabled_entries(HookCategory.POST_MERGE) == ()

    dispatcher.rmdir()
    assert manager.set_enabled(HookCategory.POST_MERGE, str(script), enabled=True)
    assert _dispatcher_lines(dispatcher) == [f'sh "{script}" "$1" || exit $?']
    manager.uninitialize()



def test_watching_manager_applies_queued_events(repo_root: Path, make_script: Callable[..., Path]) -> None:
    manager = HookFolderManager(prompt=StaticPrompt(), watch=True)
    assert manager.initialize(repo_root).ready
    try:
        script = make_script(repo_root / ".githooks" / "pre-commit", "queued.sh")
        manager.submit_event(HookEvent(EventKind.CREATED, script))
        manager.wait_idle()
        assert _wait_for(lambda: bool(manager.entries(HookCategory.PRE_COMMIT)))
        assert [entry.path for entry in manager.entries(HookCategory.PRE_COMMIT)] == [str(script)]
    finally:
        manager.uninitialize()
    manager.submit_event(HookEvent(EventKind.DELETED, script))
    assert manager.state is EngineState.UNINITIALIZED
