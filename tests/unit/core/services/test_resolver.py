from __future__ import annotations

"""
Unit tests for Destination Resolution.

Verifies:
1. Paths with either separator are walked from the root.
2. Bare names fall back to the first BFS directory.
"""

import pytest

from treefs.core.services.resolver import (
    is_path_like,
    resolve_directory,
    resolve_path,
    split_path,
)


@pytest.mark.parametrize("ref, expected", [
    ("/", True),
    ("a/b", True),
    ("a\\b", True),
    ("docs", False),
])
def test_is_path_like(ref, expected):
    assert is_path_like(ref) is expected


def test_split_path_drops_empty_segments():
    assert split_path("//src\\lib/") == ["src", "lib"]
    assert split_path("/") == []


def test_resolve_path_from_root(sample_tree):
    lib = sample_tree.find_child_directory("src").find_child_directory("lib")

    assert resolve_path(sample_tree, "/") is sample_tree
    assert resolve_path(sample_tree, "/src/lib") is lib
    assert resolve_path(sample_tree, "src\\lib") is lib
    assert resolve_path(sample_tree, "/src/ghost") is None


def test_resolve_directory_by_name(sample_tree):
    assert resolve_directory(sample_tree, "lib").name == "lib"
    assert resolve_directory(sample_tree, "/") is sample_tree
    assert resolve_directory(sample_tree, "ghost") is None
