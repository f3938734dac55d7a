# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich consoles bound to the current standard output stream."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import cache
from typing import TextIO

from rich.console import Console, RenderableType


def detect_tty(stream: TextIO | None = None) -> bool:
    """Return ``True`` when ``stream`` (default: stdout) is a terminal."""

    target = sys.stdout if stream is None else stream
    try:
        return target.isatty()
    except (AttributeError, ValueError):
        return False


@dataclass(frozen=True, slots=True)
class ConsoleKey:
    """Presentation flags and output stream a console is built for."""

    color: bool
    emoji: bool
    tty: bool
    stream_id: int


class RichConsoleManager:
    """Hand out one Rich console per presentation flags and stdout stream.

    Test runners swap ``sys.stdout`` between invocations, so the stream
    identity is part of the cache key and a console never writes to a
    stream that has since been replaced.
    """

    def __init__(self) -> None:
        self._consoles: dict[ConsoleKey, Console] = {}

    def get(self, *, color: bool, emoji: bool) -> Console:
        """Return the console for ``color``/``emoji`` bound to the current stdout.

        Args:
            color: Request ANSI styling; honoured only on a terminal.
            emoji: Let Rich render ``:emoji:`` codes.

        Returns:
            Console: Console writing to ``sys.stdout`` without soft wrapping.
        """

        stream = sys.stdout
        tty = detect_tty(stream)
        key = ConsoleKey(color=color, emoji=emoji, tty=tty, stream_id=id(stream))
        console = self._consoles.get(key)
        if console is None:
            styled = color and tty
            console = Console(
                file=stream,
                color_system="auto" if styled else None,
                force_terminal=tty,
                no_color=not styled,
                emoji=emoji,
                soft_wrap=True,
                highlight=False,
            )
            self._consoles[key] = console
        return console

    def print(self, renderable: RenderableType, *, emoji: bool) -> None:
        """Render ``renderable`` (e.g. a table) on the stdout console."""

        self.get(color=detect_tty(), emoji=emoji).print(renderable)


@cache
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide console manager."""

    return RichConsoleManager()


__all__ = ["ConsoleKey", "RichConsoleManager", "detect_tty", "get_console_manager"]
