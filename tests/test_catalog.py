# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the hook category catalog."""

from __future__ import annotations

import pytest

from hookrelay.hooks import (
    HookCategory,
    argument_template_of,
    available_categories,
    dispatcher_file_name_of,
    folder_name_of,
    parse_category,
)


def test_available_categories_in_declaration_order() -> None:
    assert available_categories() == (
        HookCategory.PRE_COMMIT,
        HookCategory.POST_CHECKOUT,
        HookCategory.POST_MERGE,
    )


@pytest.mark.parametrize(
    ("category", "template"),
    [
        (HookCategory.PRE_COMMIT, '"$@"'),
        (HookCategory.POST_CHECKOUT, '"$1" "$2" "$3"'),
        (HookCategory.POST_MERGE, '"$1"'),
    ],
)
def test_argument_templates(category: HookCategory, template: str) -> None:
    assert argument_template_of(category) == template


def test_folder_and_dispatcher_names_match_git_hook_names() -> None:
    for category in available_categories():
        assert folder_name_of(category) == category.value
        assert dispatcher_file_name_of(category) == category.value


def test_parse_category_ignores_case() -> None:
    assert parse_category("pre-commit") is HookCategory.PRE_COMMIT
    assert parse_category("Post-Merge") is HookCategory.POST_MERGE
    assert parse_category("POST-CHECKOUT") is HookCategory.POST_CHECKOUT


@pytest.mark.parametrize("name", ["", "pre_commit", "precommit", "pre-push", " pre-commit"])
def test_parse_category_rejects_unknown_folders(name: str) -> None:
    assert parse_category(name) is None
