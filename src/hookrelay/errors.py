# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by hookrelay services."""

from __future__ import annotations

from pathlib import Path


class HookRelayError(Exception):
    """Base class for recoverable hookrelay failures."""


class ConfigError(HookRelayError):
    """Raised when ``[tool.hookrelay]`` settings are invalid."""


class RegistryError(HookRelayError):
    """Raised when the script registry cannot be persisted."""

    def __init__(self, message: str, *, path: Path) -> None:
        """Initialise the error with the storage location that failed.

        Args:
            message: Human-readable description of the failure.
            path: Storage file the registry attempted to write.
        """

        super().__init__(message)
        self.path = path


class DispatcherWriteError(HookRelayError):
    """Raised when a dispatcher script cannot be written."""

    def __init__(self, message: str, *, path: Path) -> None:
        """Initialise the error with the dispatcher destination.

        Args:
            message: Human-readable description of the failure.
            path: Dispatcher file that could not be written.
        """

        super().__init__(message)
        self.path = path


__all__ = ["ConfigError", "DispatcherWriteError", "HookRelayError", "RegistryError"]
