# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing console messages and the package diagnostic logger."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Final

from rich.rule import Rule
from rich.text import Text

from hookrelay.constants import PACKAGE_NAME
from hookrelay.runtime.console.manager import detect_tty, get_console_manager

DEBUG_FORMAT: Final[str] = "%(levelname)s %(name)s: %(message)s"
_DEBUG_MARKER: Final[str] = "_hookrelay_debug_handler"


@dataclass(frozen=True, slots=True)
class MessageStyle:
    """Glyph and Rich style used for one kind of console message."""

    glyph: str
    style: str


INFO_STYLE: Final = MessageStyle(glyph="ℹ️ ", style="cyan")
OK_STYLE: Final = MessageStyle(glyph="✅ ", style="green")
WARN_STYLE: Final = MessageStyle(glyph="⚠️ ", style="yellow")
FAIL_STYLE: Final = MessageStyle(glyph="❌ ", style="red")


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, else an empty string."""

    return symbol if enable else ""


def _emit(msg: str, kind: MessageStyle, *, use_emoji: bool, use_color: bool | None) -> None:
    color_enabled = detect_tty() if use_color is None else use_color
    text = Text(f"{emoji(kind.glyph, use_emoji)}{msg}")
    if color_enabled:
        text.stylize(kind.style)
    get_console_manager().get(color=color_enabled, emoji=use_emoji).print(text)


def section(title: str, *, use_color: bool) -> None:
    """Print a header separating blocks of command output.

    Args:
        title: Header text.
        use_color: Draw a Rich rule instead of a plain ``--- title ---`` line.
    """

    console = get_console_manager().get(color=use_color, emoji=True)
    if use_color:
        console.print()
        console.print(Rule(title))
    else:
        console.print(f"\n--- {title} ---")


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print an informational message on the stdout console.

    Args:
        msg: Message text.
        use_emoji: Prefix the message with its glyph.
        use_color: Force styling on or off; ``None`` styles only on a terminal.
    """

    _emit(msg, INFO_STYLE, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print a success message on the stdout console.

    Args:
        msg: Message text.
        use_emoji: Prefix the message with its glyph.
        use_color: Force styling on or off; ``None`` styles only on a terminal.
    """

    _emit(msg, OK_STYLE, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print a warning message on the stdout console.

    Args:
        msg: Message text.
        use_emoji: Prefix the message with its glyph.
        use_color: Force styling on or off; ``None`` styles only on a terminal.
    """

    _emit(msg, WARN_STYLE, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print a failure message on the stdout console.

    Args:
        msg: Message text.
        use_emoji: Prefix the message with its glyph.
        use_color: Force styling on or off; ``None`` styles only on a terminal.
    """

    _emit(msg, FAIL_STYLE, use_emoji=use_emoji, use_color=use_color)


def enable_debug_logging() -> logging.Logger:
    """Stream the package logger's records to stderr at DEBUG level.

    Repeated calls reuse the handler installed by the first one.

    Returns:
        logging.Logger: The ``hookrelay`` package logger.
    """

    logger = logging.getLogger(PACKAGE_NAME)
    logger.setLevel(logging.DEBUG)
    if any(getattr(handler, _DEBUG_MARKER, False) for handler in logger.handlers):
        return logger
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
    setattr(handler, _DEBUG_MARKER, True)
    logger.addHandler(handler)
    return logger


__all__ = [
    "MessageStyle",
    "emoji",
    "enable_debug_logging",
    "fail",
    "info",
    "ok",
    "section",
    "warn",
]
