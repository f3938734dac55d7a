# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render and install the dispatcher script git runs for a hook category."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from ..constants import DISPATCHER_BANNER, DISPATCHER_MODE, GENERATED_MARKER
from ..errors import DispatcherWriteError
from .catalog import HookCategory, argument_template_of, dispatcher_file_name_of

DISPATCHER_SHEBANG: Final[str] = "#!/bin/sh"
_DOUBLE_QUOTE_ESCAPES: Final[dict[str, str]] = {
    "\\": "\\\\",
    '"': '\\"',
    "$": "\\$",
    "`": "\\`",
}

LOGGER = logging.getLogger(__name__)


def quote_script_path(path: str) -> str:
    """Return ``path`` wrapped in double quotes for a POSIX shell.

    Args:
        path: Script path written into the dispatcher.

    Returns:
        str: Double-quoted path with shell-active characters escaped.
    """

    escaped = "".join(_DOUBLE_QUOTE_ESCAPES.get(char, char) for char in path)
    return f'"{escaped}"'


def render_dispatcher(scripts: Sequence[str], category: HookCategory) -> str:
    """Return the dispatcher source invoking ``scripts`` in order.

    Args:
        scripts: Enabled script paths, in invocation order.
        category: Hook category whose argument template is forwarded.

    Returns:
        str: Complete POSIX shell script text.
    """

    arguments = argument_template_of(category)
    lines = [
        DISPATCHER_SHEBANG,
        GENERATED_MARKER,
        "",
        DISPATCHER_BANNER,
        "",
    ]
    lines.extend(f"sh {quote_script_path(script)} {arguments} || exit $?" for script in scripts)
    lines.extend(["", "exit 0"])
    return "\n".join(lines) + "\n"


def dispatcher_path(dispatcher_dir: Path, category: HookCategory) -> Path:
    """Return the location git executes for ``category``."""

    return dispatcher_dir / dispatcher_file_name_of(category)


def write_dispatcher(
    scripts: Sequence[str],
    dispatcher_dir: Path,
    category: HookCategory,
) -> Path:
    """Overwrite the dispatcher for ``category`` with ``scripts``.

    Any previous content is replaced; hand edits are not merged.

    Args:
        scripts: Enabled script paths, in invocation order.
        dispatcher_dir: Directory git reads hooks from.
        category: Hook category being regenerated.

    Returns:
        Path: Location of the written dispatcher.

    Raises:
        DispatcherWriteError: If the directory or file cannot be written.
    """

    destination = dispatcher_path(dispatcher_dir, category)
    content = render_dispatcher(scripts, category)
    try:
        dispatcher_dir.mkdir(parents=True, exist_ok=True)
        destination.write_text(content, encoding="utf-8", newline="\n")
        destination.chmod(DISPATCHER_MODE)
    except OSError as exc:
        raise DispatcherWriteError(f"Unable to write {destination}: {exc}", path=destination) from exc
    LOGGER.debug("wrote %s dispatcher with %d script(s) to %s", category.value, len(scripts), destination)
    return destination


def is_generated_dispatcher(path: Path) -> bool:
    """Return whether ``path`` is a dispatcher written by hookrelay.

    Args:
        path: Candidate hook file.

    Returns:
        bool: ``True`` when the second line carries the generated marker.
    """

    try:
        with path.open(encoding="utf-8", errors="replace") as handle:
            handle.readline()
            second = handle.readline()
    except OSError:
        return False
    return second.rstrip("\r\n") == GENERATED_MARKER


__all__ = [
    "DISPATCHER_SHEBANG",
    "dispatcher_path",
    "is_generated_dispatcher",
    "quote_script_path",
    "render_dispatcher",
    "write_dispatcher",
]
