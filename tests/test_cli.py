# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the hookrelay command line interface."""

from __future__ import annotations

import functools
from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from hookrelay.cli.app import app
from hookrelay.engine import HookFolderManager
from hookrelay.hooks import HookCategory
from hookrelay.registry import ScriptRegistry


def _registry(repo_root: Path) -> ScriptRegistry:
    return ScriptRegistry.open(repo_root / ".githooks" / "config.json")


def test_sync_registers_and_reports(repo_root: Path, make_script: Callable[..., Path]) -> None:
    script = make_script(repo_root / ".githooks" / "pre-commit", "lint.sh")
    runner = CliRunner()

    result = runner.invoke(app, ["sync", "--root", str(repo_root), "--new-scripts", "enable", "--no-emoji"])

    assert result.exit_code == 0, result.output
    assert "Regenerated" in result.output
    assert [entry.path for entry in _registry(repo_root).enabled_entries(HookCategory.PRE_COMMIT)] == [str(script)]

    again = runner.invoke(app, ["sync", "--root", str(repo_root), "--new-scripts", "enable", "--no-emoji"])
    assert again.exit_code == 0, again.output
    assert "already in sync" in again.output


def test_sync_asks_about_new_scripts(repo_root: Path, make_script: Callable[..., Path]) -> None:
    make_script(repo_root / ".githooks" / "post-merge", "deps.sh")
    runner = CliRunner()

    result = runner.invoke(app, ["sync", "--root", str(repo_root), "--no-emoji"], input="n\n")

    assert result.exit_code == 0, result.output
    assert "Do you want to enable the new post-merge script: deps.sh ?" in result.output
    registry = _registry(repo_root)
    assert len(registry.entries(HookCategory.POST_MERGE)) == 1
    assert registry.enabled_entries(HookCategory.POST_MERGE) == ()


def test_sync_without_repository_fails(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    monkeypatch.setattr(
        "hookrelay.cli.services.HookFolderManager",
        functools.partial(HookFolderManager, resolver=lambda _path: None),
    )
    runner = CliRunner()

    result = runner.invoke(app, ["sync", "--root", str(outside), "--no-emoji"])

    assert result.exit_code == 1
    assert "No git repository found" in result.output


def test_sync_without_scripts_folder_fails(repo_root: Path) -> None:
    (repo_root / ".githooks").rmdir()
    runner = CliRunner()

    result = runner.invoke(app, ["sync", "--root", str(repo_root), "--no-emoji"])

    assert result.exit_code == 1
    assert "Scripts folder not available" in result.output


def test_list_shows_registered_scripts(repo_root: Path, make_script: Callable[..., Path]) -> None:
    runner = CliRunner()
    empty = runner.invoke(app, ["list", "--root", str(repo_root), "--no-emoji"])
    assert empty.exit_code == 0, empty.output
    assert "No scripts registered" in empty.output

    make_script(repo_root / ".githooks" / "post-checkout", "a.sh")
    runner.invoke(app, ["sync", "--root", str(repo_root), "--new-scripts", "disable", "--no-emoji"])
    listed = runner.invoke(app, ["list", "--root", str(repo_root), "--no-emoji"])

    assert listed.exit_code == 0, listed.output
    assert "post-checkout" in listed.output
    assert "no" in listed.output


def test_enable_and_disable_toggle_dispatcher(repo_root: Path, make_script: Callable[..., Path]) -> None:
    script = make_script(repo_root / ".githooks" / "pre-commit", "fmt.sh")
    dispatcher = repo_root / ".git" / "hooks" / "pre-commit"
    runner = CliRunner()
    base = ["--root", str(repo_root), "--new-scripts", "disable", "--no-emoji"]
    runner.invoke(app, ["sync", *base])
    assert str(script) not in dispatcher.read_text(encoding="utf-8")

    enabled = runner.invoke(app, ["enable", str(script), "--category", "pre-commit", *base])
    assert enabled.exit_code == 0, enabled.output
    assert "Enabled" in enabled.output
    assert f'sh "{script}" "$@" || exit $?' in dispatcher.read_text(encoding="utf-8")

    disabled = runner.invoke(app, ["disable", str(script), *base])
    assert disabled.exit_code == 0, disabled.output
    assert str(script) not in dispatcher.read_text(encoding="utf-8")


def test_toggling_registers_other_new_scripts_disabled_without_asking(
    repo_root: Path,
    make_script: Callable[..., Path],
) -> None:
    script = make_script(repo_root / ".githooks" / "pre-commit", "fmt.sh")
    runner = CliRunner()
    runner.invoke(app, ["sync", "--root", str(repo_root), "--new-scripts", "disable", "--no-emoji"])
    newcomer = make_script(repo_root / ".githooks" / "post-merge", "deps.sh")

    result = runner.invoke(app, ["enable", str(script), "--root", str(repo_root), "--no-emoji"])

    assert result.exit_code == 0, result.output
    assert "Do you want" not in result.output
    registry = _registry(repo_root)
    assert [entry.path for entry in registry.entries(HookCategory.POST_MERGE)] == [str(newcomer)]
    assert registry.enabled_entries(HookCategory.POST_MERGE) == ()
    assert [entry.path for entry in registry.enabled_entries(HookCategory.PRE_COMMIT)] == [str(script)]


def test_enable_unknown_script_fails(repo_root: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["enable", str(repo_root / "nope.sh"), "--root", str(repo_root), "--new-scripts", "enable", "--no-emoji"],
    )
    assert result.exit_code == 1
    assert "Script not registered" in result.output


def test_regenerate_writes_every_dispatcher(repo_root: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["regenerate", "--root", str(repo_root), "--new-scripts", "enable", "--no-emoji"])
    assert result.exit_code == 0, result.output
    hooks_dir = repo_root / ".git" / "hooks"
    assert sorted(path.name for path in hooks_dir.iterdir()) == ["post-checkout", "post-merge", "pre-commit"]


def test_status_reports_dispatchers(repo_root: Path, make_script: Callable[..., Path]) -> None:
    make_script(repo_root / ".githooks" / "pre-commit", "a.sh")
    hooks_dir = repo_root / ".git" / "hooks"
    hooks_dir.mkdir()
    (hooks_dir / "post-merge").write_text("#!/bin/sh\necho custom\n", encoding="utf-8")
    runner = CliRunner()
    runner.invoke(app, ["sync", "--root", str(repo_root), "--new-scripts", "enable", "--no-emoji"])

    result = runner.invoke(app, ["status", "--root", str(repo_root), "--no-emoji"])

    assert result.exit_code == 0, result.output
    assert "managed" in result.output
    assert "foreign" in result.output
    assert "missing" in result.output
    assert not (repo_root / ".git" / "hooks" / "post-checkout").exists()


def test_status_without_scripts_folder(repo_root: Path) -> None:
    (repo_root / ".githooks").rmdir()
    runner = CliRunner()
    result = runner.invoke(app, ["status", "--root", str(repo_root), "--no-emoji"])
    assert result.exit_code == 1
    assert "folder not available" in result.output

