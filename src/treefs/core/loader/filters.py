from __future__ import annotations

"""
Disk Import Filtering Engine.

Decides which real directories and files are skipped when a directory is
imported into the simulated tree: version-control and build directories,
VCS housekeeping files and executable extensions by default, extended by
the user's configuration.
"""

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from treefs.domain.constants import (
    DEFAULT_IGNORE_DIRS,
    DEFAULT_IGNORE_EXTENSIONS,
    DEFAULT_IGNORE_FILES,
)

# -----------------------------------------------------------------------------
# RULE SET
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class IgnoreRules:
    """
    Names and extensions excluded from a disk import.

    Attributes:
        dirs: Directory names pruned with their whole subtree.
        files: Exact file names skipped.
        extensions: Lower-case extensions (dot included) skipped.
    """
    dirs: FrozenSet[str] = field(default_factory=lambda: frozenset(DEFAULT_IGNORE_DIRS))
    files: FrozenSet[str] = field(default_factory=lambda: frozenset(DEFAULT_IGNORE_FILES))
    extensions: FrozenSet[str] = field(default_factory=lambda: frozenset(DEFAULT_IGNORE_EXTENSIONS))


def build_ignore_rules(
        dirs: Optional[Iterable[str]] = None,
        files: Optional[Iterable[str]] = None,
        extensions: Optional[Iterable[str]] = None,
) -> IgnoreRules:
    """
    Build an IgnoreRules instance, falling back to the defaults per field.

    Args:
        dirs: Directory names to prune (None keeps the defaults).
        files: File names to skip (None keeps the defaults).
        extensions: Extensions to skip (None keeps the defaults).

    Returns:
        IgnoreRules: The frozen rule set.
    """
    defaults = IgnoreRules()
    return IgnoreRules(
        dirs=frozenset(dirs) if dirs is not None else defaults.dirs,
        files=frozenset(files) if files is not None else defaults.files,
        extensions=(
            frozenset(e.lower() for e in extensions) if extensions is not None else defaults.extensions
        ),
    )

# -----------------------------------------------------------------------------
# MATCHING
# -----------------------------------------------------------------------------

def is_ignored_directory(name: str, rules: IgnoreRules) -> bool:
    return name in rules.dirs


def is_ignored_file(name: str, rules: IgnoreRules) -> bool:
    """
    Check a file name against the exact-name and extension rules.

    Args:
        name: Base name of the file.
        rules: Active rule set.

    Returns:
        bool: True if the file must be skipped.
    """
    if name in rules.files:
        return True
    _, ext = os.path.splitext(name)
    return ext.lower() in rules.extensions
