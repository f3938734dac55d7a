# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helper services shared by repository-bound CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import typer

from ..config import ConfigError, RepositoryLayout, load_settings
from ..core.logging import enable_debug_logging
from ..discovery.repository import discover_repository
from ..engine import (
    EnablePrompt,
    HookFolderManager,
    InitializeOutcome,
    InitializeResult,
    ReconcileReport,
    StaticPrompt,
    enable_question,
)
from ..hooks.catalog import HookCategory
from .options import CommonOptions, NewScriptPolicy
from .shared import CLIError, CLILogger


def confirm_prompt(script_name: str, category: HookCategory) -> bool:
    """Ask on the terminal whether a new script should be enabled."""

    return typer.confirm(enable_question(script_name, category), default=True)


def build_prompt(policy: NewScriptPolicy) -> EnablePrompt:
    """Return the enablement prompt matching ``policy``."""

    if policy is NewScriptPolicy.ASK:
        return confirm_prompt
    return StaticPrompt(decision=policy is NewScriptPolicy.ENABLE)


def resolve_layout(options: CommonOptions, *, logger: CLILogger) -> RepositoryLayout:
    """Return the layout of the repository around ``options.root`` without mutating it.

    Raises:
        CLIError: If no repository is found or its settings are invalid.
    """

    if options.debug:
        enable_debug_logging()
    repository = discover_repository(options.root)
    if repository is None:
        message = f"No git repository found at {options.root}"
        logger.fail(message)
        raise CLIError(message)
    try:
        settings = load_settings(repository.root)
    except ConfigError as exc:
        logger.fail(str(exc))
        raise CLIError(str(exc)) from exc
    return RepositoryLayout.build(repo_root=repository.root, git_dir=repository.git_dir, settings=settings)


def describe_failure(result: InitializeResult, options: CommonOptions) -> str:
    """Return a user-facing explanation for a failed initialisation."""

    if result.outcome is InitializeOutcome.NO_REPOSITORY:
        return f"No git repository found at {options.root}"
    if result.outcome is InitializeOutcome.NO_SCRIPTS_FOLDER and result.layout is not None:
        return f"Scripts folder not available: {result.layout.scripts_root}"
    return "Unable to initialise hook management (see --debug output)"


@contextmanager
def managed_repository(
    options: CommonOptions,
    *,
    logger: CLILogger,
    watch: bool = False,
) -> Iterator[tuple[HookFolderManager, InitializeResult]]:
    """Initialise a manager for ``options.root`` and tear it down afterwards.

    Args:
        options: Common CLI options.
        logger: Logger used to report failures.
        watch: Whether to start the live filesystem watch.

    Yields:
        tuple[HookFolderManager, InitializeResult]: Ready manager and its
        initialisation result.

    Raises:
        CLIError: If the repository or scripts folder cannot be managed.
    """

    if options.debug:
        enable_debug_logging()
    manager = HookFolderManager(prompt=build_prompt(options.new_scripts), watch=watch)
    result = manager.initialize(options.root)
    if not result.ready:
        message = describe_failure(result, options)
        logger.fail(message)
        raise CLIError(message)
    try:
        yield manager, result
    finally:
        manager.uninitialize()


def emit_report(report: ReconcileReport | None, *, logger: CLILogger) -> None:
    """Summarise the changes applied by a reconciliation."""

    if report is None or not report.changed:
        logger.ok("Hook scripts already in sync")
        return
    for change in report.changes:
        for entry in change.added:
            state = "enabled" if entry.enabled else "disabled"
            logger.info(f"{change.category.value}: added {entry.name} ({state})")
        for entry in change.removed:
            logger.info(f"{change.category.value}: removed {entry.name}")
        logger.ok(f"Regenerated {change.dispatcher}")


__all__ = [
    "build_prompt",
    "confirm_prompt",
    "describe_failure",
    "emit_report",
    "managed_repository",
    "resolve_layout",
]
