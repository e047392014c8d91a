from __future__ import annotations

"""
Unit tests for the Disk Import Scanner.

Verifies:
1. Walk order and pruning of ignored directories.
2. Tree construction with sizes and modification stamps.
3. Failure on missing or non-directory paths.
"""

from pathlib import Path

import pytest

from treefs.core.loader.filters import IgnoreRules
from treefs.core.loader.scanner import DiskEntry, build_tree, load_directory, scan_disk


@pytest.fixture
def disk_project(tmp_path: Path) -> Path:
    """
    Structure:
    /project
      README.md
      app.exe
      .gitignore
      /src
        main.py
        /pkg
          mod.py
      /.git
        HEAD
      /build
        out.o
    """
    base = tmp_path / "project"
    (base / "src" / "pkg").mkdir(parents=True)
    (base / ".git").mkdir()
    (base / "build").mkdir()

    (base / "README.md").write_text("hello", encoding="utf-8")
    (base / "app.exe").write_bytes(b"\x00" * 4)
    (base / ".gitignore").write_text("*.o", encoding="utf-8")
    (base / "src" / "main.py").write_text("print('hi')\n", encoding="utf-8")
    (base / "src" / "pkg" / "mod.py").write_text("", encoding="utf-8")
    (base / ".git" / "HEAD").write_text("ref", encoding="utf-8")
    (base / "build" / "out.o").write_bytes(b"\x01")
    return base


def test_scan_disk_prunes_and_orders(disk_project):
    entries = list(scan_disk(str(disk_project), IgnoreRules()))
    paths = [(e.relative_path, e.is_directory) for e in entries]

    assert paths == [
        ("src", True),
        ("README.md", False),
        ("src/pkg", True),
        ("src/main.py", False),
        ("src/pkg/mod.py", False),
    ]


def test_scan_disk_reports_size_and_mtime(disk_project):
    entries = {e.relative_path: e for e in scan_disk(str(disk_project))}

    readme = entries["README.md"]
    assert readme.size == 5
    assert readme.modified


def test_build_tree_creates_intermediate_directories():
    entries = [
        DiskEntry("deep/er/file.txt", False, size=3, modified="Mon Jan  1 00:00:00 2024"),
        DiskEntry("top.txt", False, size=1),
    ]
    root = build_tree("base", entries)

    deep = root.find_child_directory("deep").find_child_directory("er")
    assert deep.find_file("file.txt").date == "Mon Jan  1 00:00:00 2024"
    assert root.find_file("top.txt").size == 1
    assert root.total_directory_count() == 3


def test_load_directory_builds_named_root(disk_project):
    root = load_directory(str(disk_project))

    assert root is not None
    assert root.name == "project"
    assert root.total_file_count() == 3
    assert root.total_directory_count() == 3
    assert root.find_child_directory(".git") is None
    assert not root.contains_file("app.exe")
    assert root.find_child_directory("src").find_file("main.py").size == len("print('hi')\n")


def test_load_directory_with_custom_rules(disk_project):
    rules = IgnoreRules(dirs=frozenset({"src"}), files=frozenset(), extensions=frozenset())
    root = load_directory(str(disk_project), rules)

    assert root.find_child_directory("src") is None
    assert root.find_child_directory(".git") is not None
    assert root.contains_file("app.exe")


def test_load_directory_rejects_missing_and_files(tmp_path):
    assert load_directory(str(tmp_path / "missing")) is None

    plain = tmp_path / "plain.txt"
    plain.write_text("x", encoding="utf-8")
    assert load_directory(str(plain)) is None
