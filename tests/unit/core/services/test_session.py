from __future__ import annotations

"""
Unit tests for the File System Session.

Verifies:
1. Every query degrades to an empty result without a tree.
2. Failed tree replacements keep the previous tree.
3. Delegation of queries and mutations to the active root.
"""

from treefs.core.services.session import FileSystemSession
from treefs.domain.constants import NodeKind
from treefs.domain.tree_models import SizedPath


def test_empty_session_defaults():
    session = FileSystemSession()

    assert session.is_loaded is False
    assert session.count_files() == 0
    assert session.count_directories() == 0
    assert session.memory() == 0
    assert session.most_elements() is None
    assert session.largest_file() is None
    assert session.search("x", NodeKind.FILE) is None
    assert session.find_all_files("x") == []
    assert session.duplicates() == {}
    assert session.has_duplicates() is False
    assert session.render_tree() == []
    assert session.move_file("x", "/") is False
    assert session.rename_files("x", "y") == 0
    assert session.write_xml("unused.xml") is False


def test_new_uses_configured_root_name():
    session = FileSystemSession(root_name="home")

    assert session.new().name == "home"
    assert session.new("other").name == "other"
    assert session.count_directories() == 1


def test_queries_delegate_to_root(sample_tree):
    session = FileSystemSession(root=sample_tree)

    assert session.count_files() == 5
    assert session.count_directories() == 5
    assert session.memory() == 385
    assert session.largest_file() == SizedPath("/src/main.py", 300)
    assert session.search("lib", NodeKind.DIRECTORY) == "/src/lib"
    assert session.has_duplicates() is True


def test_mutations_delegate_to_root(sample_tree):
    session = FileSystemSession(root=sample_tree)

    assert session.move_directory("lib", "docs") is True
    assert session.search("lib", NodeKind.DIRECTORY) == "/docs/lib"
    assert session.rename_files("util.py", "u.py") == 2
    assert session.remove_all("u.py", NodeKind.FILE) is True
    assert session.batch_copy("main", "src", "empty") is True
    assert session.find_all_files("main.py") == ["/src/main.py", "/empty/main.py"]


def test_failed_load_keeps_previous_tree(tmp_path, sample_tree):
    session = FileSystemSession(root=sample_tree)

    assert session.load(str(tmp_path / "missing")) is False
    assert session.root is sample_tree


def test_failed_import_keeps_previous_tree(tmp_path, sample_tree):
    broken = tmp_path / "broken.xml"
    broken.write_text("<Directory", encoding="utf-8")
    session = FileSystemSession(root=sample_tree)

    assert session.read_xml(str(broken)) is False
    assert session.root is sample_tree


def test_export_import_cycle(tmp_path, sample_tree):
    target = tmp_path / "state.xml"
    session = FileSystemSession(root=sample_tree)
    assert session.write_xml(str(target)) is True

    other = FileSystemSession()
    assert other.read_xml(str(target)) is True
    assert other.render_tree() == session.render_tree()


def test_render_tree_can_save(tmp_path, sample_tree):
    target = tmp_path / "tree.txt"
    lines = FileSystemSession(root=sample_tree).render_tree(save_path=str(target))

    assert target.read_text(encoding="utf-8").splitlines() == lines


def test_render_tree_reports_unwritable_target(tmp_path, sample_tree):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")

    assert FileSystemSession(root=sample_tree).render_tree(save_path=str(blocker / "t.txt")) is None
