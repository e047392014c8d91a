from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Runs main() in-process against a temporary state file to verify the
auto-import/auto-export policy, output rendering and exit codes.
"""

import json

import pytest

from treefs.interface.cli.app import main
from treefs.interface.cli.state import build_session, persist_state, restore_state


@pytest.fixture
def state_args(tmp_path):
    """Global options pointing the CLI at a throwaway state file."""
    state = tmp_path / "state.xml"
    return state, ["--use-defaults", "--state", str(state)]


def test_new_then_query_persists_between_runs(state_args, capsys):
    state, opts = state_args

    assert main(opts + ["new"]) == 0
    assert state.exists()

    assert main(opts + ["count-dirs"]) == 0
    assert capsys.readouterr().out.strip().splitlines()[-1] == "1"


def test_load_directory_and_search(tmp_path, state_args, capsys):
    _, opts = state_args
    base = tmp_path / "proj"
    (base / "a" / "b").mkdir(parents=True)
    (base / "a" / "b" / "f.txt").write_text("x" * 100, encoding="utf-8")

    assert main(opts + ["load", str(base)]) == 0
    capsys.readouterr()

    assert main(opts + ["search", "f.txt", "--file"]) == 0
    assert capsys.readouterr().out.strip() == "proj/a/b/f.txt"

    assert main(opts + ["memory"]) == 0
    assert capsys.readouterr().out.strip() == "100"


def test_json_output(state_args, capsys):
    _, opts = state_args
    main(opts + ["new"])
    capsys.readouterr()

    assert main(opts + ["--json", "memory"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["ok"] is True
    assert payload["data"] == {"value": 0}


def test_no_autosave_leaves_state_untouched(state_args):
    state, opts = state_args
    main(opts + ["new"])
    before = state.read_text(encoding="utf-8")

    assert main(opts + ["--no-autosave", "new", "other"]) == 0
    assert state.read_text(encoding="utf-8") == before


def test_missing_tree_and_not_found_exit_codes(state_args, capsys):
    _, opts = state_args

    assert main(opts + ["count-files"]) == 1
    assert "No tree loaded" in capsys.readouterr().err

    main(opts + ["new"])
    assert main(opts + ["file-date", "ghost"]) == 1


def test_invalid_load_path(tmp_path, state_args):
    _, opts = state_args
    assert main(opts + ["load", str(tmp_path / "missing")]) == 2


def test_corrupt_state_file_is_invalid_input(state_args, capsys):
    state, opts = state_args
    state.write_text("<Directory", encoding="utf-8")

    assert main(opts + ["memory"]) == 2
    assert "Could not import" in capsys.readouterr().err


def test_dump_config(state_args, capsys):
    state, opts = state_args

    assert main(opts + ["--no-autosave", "dump-config"]) == 0
    cfg = json.loads(capsys.readouterr().out)
    assert cfg["state_file"] == str(state)
    assert cfg["auto_export"] is False


def test_no_command_prints_help(state_args, capsys):
    _, opts = state_args
    assert main(opts) == 2
    assert "usage:" in capsys.readouterr().out


def test_state_helpers_respect_flags(tmp_path, mock_config_dict):
    session = build_session(mock_config_dict)

    # Nothing to restore yet: not an error
    assert restore_state(session, mock_config_dict) is True
    assert session.is_loaded is False
    assert persist_state(session, mock_config_dict) is False

    session.new()
    mock_config_dict["auto_export"] = False
    assert persist_state(session, mock_config_dict) is False

    mock_config_dict["auto_export"] = True
    assert persist_state(session, mock_config_dict) is True

    restored = build_session(mock_config_dict)
    assert restore_state(restored, mock_config_dict) is True
    assert restored.root.name == "/"
