# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Static catalog describing the git hook categories hookrelay manages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final


class HookCategory(str, Enum):
    """Enumerate git hook categories backed by a scripts folder."""

    PRE_COMMIT = "pre-commit"
    POST_CHECKOUT = "post-checkout"
    POST_MERGE = "post-merge"


@dataclass(frozen=True, slots=True)
class HookSpec:
    """Describe the on-disk conventions of one hook category."""

    folder_name: str
    dispatcher_name: str
    argument_template: str


FORWARD_ALL_ARGUMENTS: Final[str] = '"$@"'

_CATALOG: Final = MappingProxyType(
    {
        HookCategory.PRE_COMMIT: HookSpec(
            folder_name="pre-commit",
            dispatcher_name="pre-commit",
            argument_template=FORWARD_ALL_ARGUMENTS,
        ),
        HookCategory.POST_CHECKOUT: HookSpec(
            folder_name="post-checkout",
            dispatcher_name="post-checkout",
            argument_template='"$1" "$2" "$3"',
        ),
        HookCategory.POST_MERGE: HookSpec(
            folder_name="post-merge",
            dispatcher_name="post-merge",
            argument_template='"$1"',
        ),
    }
)

_BY_FOLDER: Final = MappingProxyType({spec.folder_name.casefold(): category for category, spec in _CATALOG.items()})


def available_categories() -> tuple[HookCategory, ...]:
    """Return every supported hook category in declaration order.

    Returns:
        tuple[HookCategory, ...]: Supported hook categories.
    """

    return tuple(HookCategory)


def folder_name_of(category: HookCategory) -> str:
    """Return the scripts folder name associated with ``category``."""

    return _CATALOG[category].folder_name


def dispatcher_file_name_of(category: HookCategory) -> str:
    """Return the dispatcher file name git executes for ``category``."""

    return _CATALOG[category].dispatcher_name


def argument_template_of(category: HookCategory) -> str:
    """Return the shell argument list forwarded to each script of ``category``."""

    return _CATALOG[category].argument_template


def parse_category(folder_name: str) -> HookCategory | None:
    """Return the hook category whose folder matches ``folder_name``.

    Matching ignores case but is otherwise exact.

    Args:
        folder_name: Directory name found under the scripts root.

    Returns:
        HookCategory | None: Matching category, or ``None`` when the folder
        does not belong to any hook category and should be ignored.
    """

    return _BY_FOLDER.get(folder_name.casefold())


__all__ = [
    "FORWARD_ALL_ARGUMENTS",
    "HookCategory",
    "HookSpec",
    "argument_template_of",
    "available_categories",
    "dispatcher_file_name_of",
    "folder_name_of",
    "parse_category",
]
