from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr) and the persisted state file shared between
invocations.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "treefs" / "main.py"


def run_cli(args: List[str], state: Path, stdin: str | None = None) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH and points the CLI at a
    throwaway state file with the default configuration.

    Args:
        args: Command line arguments after the global options.
        state: State file shared by successive invocations.
        stdin: Optional text piped to the process.

    Returns:
        subprocess.CompletedProcess: returncode, stdout and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["PYTHONIOENCODING"] = "utf-8"

    cmd = [sys.executable, str(ENTRY_POINT), "--use-defaults", "--state", str(state)] + args

    return subprocess.run(
        cmd,
        env=env,
        input=stdin,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a dummy directory for E2E testing.

    Structure:
    /input
      /src
        access.log
      /dst
        access.log
      /.git
        HEAD
      README.md
    """
    input_dir = tmp_path / "input"
    (input_dir / "src").mkdir(parents=True)
    (input_dir / "dst").mkdir()
    (input_dir / ".git").mkdir()

    (input_dir / "src" / "access.log").write_text("0123456789", encoding="utf-8")
    (input_dir / "dst" / "access.log").write_text("x", encoding="utf-8")
    (input_dir / ".git" / "HEAD").write_text("ref", encoding="utf-8")
    (input_dir / "README.md").write_text("# Dummy", encoding="utf-8")
    return input_dir


@pytest.fixture
def state(tmp_path: Path) -> Path:
    return tmp_path / "state" / "tree.xml"


def test_help_exits_cleanly(state: Path) -> None:
    result = run_cli(["--help"], state)

    assert result.returncode == 0
    assert "usage:" in result.stdout


def test_load_query_and_copy_across_runs(sample_project: Path, state: Path) -> None:
    load = run_cli(["load", str(sample_project)], state)
    assert load.returncode == 0, load.stderr
    assert state.exists()

    dirs = run_cli(["count-dirs"], state)
    assert dirs.stdout.strip() == "3"

    copy = run_cli(["copy-batch", "LOG", "/src", "/dst"], state)
    assert copy.returncode == 0, copy.stderr

    found = run_cli(["--json", "find-files", "access_001.log"], state)
    payload = json.loads(found.stdout)
    assert payload["data"]["paths"] == ["input/dst/access_001.log"]


def test_failed_move_keeps_state(sample_project: Path, state: Path) -> None:
    run_cli(["load", str(sample_project)], state)
    before = state.read_text(encoding="utf-8")

    move = run_cli(["move-file", "access.log", "dst"], state)

    assert move.returncode == 1
    assert "ERROR:" in move.stderr
    assert state.read_text(encoding="utf-8") == before


def test_export_and_tree(sample_project: Path, state: Path, tmp_path: Path) -> None:
    run_cli(["load", str(sample_project)], state)
    export_path = tmp_path / "export.xml"
    tree_path = tmp_path / "tree.txt"

    assert run_cli(["export", str(export_path)], state).returncode == 0
    assert export_path.read_text(encoding="utf-8").startswith('<?xml version="1.0" encoding="UTF-8"?>')

    tree = run_cli(["tree", "--out", str(tree_path)], state)
    assert tree.returncode == 0
    assert tree.stdout.splitlines()[0] == "input"
    assert tree_path.read_text(encoding="utf-8").splitlines() == tree.stdout.splitlines()


def test_shell_session_is_persisted(state: Path) -> None:
    script = "mkdir docs\ncd docs\ntouch notes.txt 12\ncd ..\nmemory\nexit\n"
    shell = run_cli(["shell"], state, stdin=script)

    assert shell.returncode == 0, shell.stderr
    assert "12" in shell.stdout

    search = run_cli(["search", "notes.txt", "--file"], state)
    assert search.stdout.strip() == "/docs/notes.txt"


def test_invalid_arguments_exit_with_usage(state: Path) -> None:
    result = run_cli(["search", "x"], state)

    assert result.returncode == 2
    assert "usage:" in result.stderr


def test_load_with_undecodable_file_name_keeps_state_readable(tmp_path: Path, state: Path) -> None:
    project = tmp_path / "raw"
    project.mkdir()
    try:
        (project / os.fsdecode(b"bad\xff.txt")).write_bytes(b"1234")
    except (OSError, UnicodeError):
        pytest.skip("File system rejects non UTF-8 names")

    assert run_cli(["new", "root"], state).returncode == 0

    load = run_cli(["load", str(project)], state)
    assert load.returncode == 0, load.stderr

    count = run_cli(["count-files"], state)
    assert count.returncode == 0, count.stderr
    assert count.stdout.strip() == "1"
    assert run_cli(["memory"], state).stdout.strip() == "4"
