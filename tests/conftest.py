from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: a small sample tree and a complete configuration dict.
"""

import os
import sys
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from treefs.domain.tree_models import Directory  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_tree() -> Directory:
    """
    Build a small tree exercising nesting, duplicates and empty directories.

    Structure:
    /
      readme.md (10)
      src/
        main.py (300)
        util.py (50)
        lib/
          util.py (20)
      docs/
        readme.md (5)
      empty/
    """
    root = Directory("/")
    root.add_file("readme.md", 10)

    src = root.add_child_directory("src")
    src.add_file("main.py", 300)
    src.add_file("util.py", 50)
    lib = src.add_child_directory("lib")
    lib.add_file("util.py", 20)

    docs = root.add_child_directory("docs")
    docs.add_file("readme.md", 5)

    root.add_child_directory("empty")
    return root


@pytest.fixture
def mock_config_dict(tmp_path: Any) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'treefs.domain.config'; the state file
    lives in the test's temporary directory.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        "version": "1.0.0",

        # Persistence policy
        "state_file": str(tmp_path / "state.xml"),
        "auto_import": True,
        "auto_export": True,
        "root_name": "/",

        # Disk import filters
        "ignore_dirs": [".git", ".vscode", "bin", "obj", "build"],
        "ignore_files": [".gitignore", ".DS_Store"],
        "ignore_extensions": [".exe"],

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }
