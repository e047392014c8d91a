from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the node kind selector, path separators, the date stamp layout
and the default ignore lists used when importing a real directory.
"""

from enum import Enum
from typing import List, Tuple

CURRENT_CONFIG_VERSION = "1.0.0"
DEFAULT_ROOT_NAME = "/"

# Separator used when building absolute paths
PATH_SEPARATOR = "/"

# Separators accepted in destination references ("/a/b" or "a\\b")
ACCEPTED_SEPARATORS: Tuple[str, ...] = ("/", "\\")

# Layout of the stamp given to newly created files (e.g. 2024|03|07)
DATE_FORMAT = "%Y|%m|%d"

# Zero-padded suffix appended by batch copies on name collisions
COPY_SUFFIX_FORMAT = "_{:03d}"

# -----------------------------------------------------------------------------
# DISK IMPORT DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_IGNORE_DIRS: List[str] = [".git", ".vscode", "bin", "obj", "build"]
DEFAULT_IGNORE_FILES: List[str] = [".gitignore", ".DS_Store"]
DEFAULT_IGNORE_EXTENSIONS: List[str] = [".exe"]

# -----------------------------------------------------------------------------
# NODE KINDS
# -----------------------------------------------------------------------------

class NodeKind(Enum):
    """Selector for operations that target either files or directories."""
    DIRECTORY = "dir"
    FILE = "file"

    @classmethod
    def parse(cls, value: "str | NodeKind") -> "NodeKind":
        """
        Resolve a NodeKind from its value or a common alias.

        Accepts "dir", "directory", "DIR", "file", "FILE" and NodeKind members.

        Raises:
            ValueError: If the value names no known kind.
        """
        if isinstance(value, NodeKind):
            return value

        key = str(value).strip().lower()
        if key in ("dir", "directory", "d", "1"):
            return cls.DIRECTORY
        if key in ("file", "f", "0"):
            return cls.FILE
        raise ValueError(f"Unknown node kind '{value}': expected 'dir' or 'file'.")
