from __future__ import annotations

"""
Disk Import Scanner.

Walks a real directory and folds what it finds into the simulated tree.
The walk yields a flat, ordered sequence of DiskEntry records (already
filtered by the ignore rules); build_tree() replays that sequence through
the Directory operations, creating intermediate directories on demand.
"""

import logging
import os
import time
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from treefs.core.loader.filters import (
    IgnoreRules,
    is_ignored_directory,
    is_ignored_file,
)
from treefs.domain.constants import PATH_SEPARATOR
from treefs.domain.tree_models import Directory

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DiskEntry:
    """
    One directory or file found under the imported base path.

    Attributes:
        relative_path: Path relative to the base, '/'-separated.
        is_directory: True for directories.
        size: File size in bytes (0 for directories).
        modified: Modification stamp (time.ctime layout), if known.
    """
    relative_path: str
    is_directory: bool
    size: int = 0
    modified: Optional[str] = None

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def scan_disk(base_path: str, rules: Optional[IgnoreRules] = None) -> Iterator[DiskEntry]:
    """
    Walk `base_path` top-down and yield its filtered entries.

    Directories and files are visited in sorted order. Ignored directories
    are pruned during the walk, so nothing below them is yielded. Files that
    cannot be stat'ed are skipped.

    Args:
        base_path: Real directory to scan.
        rules: Ignore rules (defaults when None).

    Yields:
        DiskEntry: Entries in walk order, each directory before its contents.
    """
    rules = rules or IgnoreRules()
    base_abs = os.path.abspath(base_path)

    for current, dirs, files in os.walk(base_abs):
        # In-place pruning stops os.walk from descending into ignored dirs
        dirs[:] = sorted(d for d in dirs if not is_ignored_directory(d, rules))
        files.sort()

        rel_root = os.path.relpath(current, base_abs)
        rel_root = "" if rel_root == "." else rel_root.replace(os.sep, PATH_SEPARATOR)

        for d in dirs:
            yield DiskEntry(relative_path=_join(rel_root, d), is_directory=True)

        for file_name in files:
            if is_ignored_file(file_name, rules):
                continue
            full_path = os.path.join(current, file_name)
            try:
                st = os.stat(full_path)
            except OSError as e:
                logger.debug(f"Skipping unreadable file '{full_path}': {e}")
                continue
            yield DiskEntry(
                relative_path=_join(rel_root, file_name),
                is_directory=False,
                size=st.st_size,
                modified=time.ctime(st.st_mtime),
            )


def build_tree(root_name: str, entries: Iterable[DiskEntry]) -> Directory:
    """
    Fold a sequence of disk entries into a new tree.

    Args:
        root_name: Name given to the root directory.
        entries: Entries with '/'-separated relative paths.

    Returns:
        Directory: The populated root.
    """
    root = Directory(root_name)

    for entry in entries:
        segments = [s for s in entry.relative_path.split(PATH_SEPARATOR) if s]
        if not segments:
            continue

        if entry.is_directory:
            _ensure_directory(root, segments)
            continue

        owner = _ensure_directory(root, segments[:-1])
        added = owner.add_file(segments[-1], entry.size)
        if entry.modified:
            added.date = entry.modified

    return root


def load_directory(base_path: str, rules: Optional[IgnoreRules] = None) -> Optional[Directory]:
    """
    Import a real directory as a new tree.

    Args:
        base_path: Real directory to import.
        rules: Ignore rules (defaults when None).

    Returns:
        Optional[Directory]: The new root named after the directory, or None
                             when the path is not a readable directory.
    """
    if not os.path.isdir(base_path):
        logger.error(f"Cannot load '{base_path}': not an existing directory.")
        return None

    base_abs = os.path.abspath(base_path)
    root_name = os.path.basename(base_abs.rstrip(os.sep)) or base_abs

    try:
        root = build_tree(root_name, scan_disk(base_abs, rules))
    except OSError as e:
        logger.error(f"Failed to load '{base_path}': {e}")
        return None

    logger.info(
        f"Loaded '{base_abs}': {root.total_directory_count()} directories, "
        f"{root.total_file_count()} files."
    )
    return root

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _join(rel_root: str, name: str) -> str:
    return f"{rel_root}{PATH_SEPARATOR}{name}" if rel_root else name


def _ensure_directory(root: Directory, segments: Iterable[str]) -> Directory:
    """Walk `segments` from the root, creating missing directories."""
    current = root
    for segment in segments:
        nxt = current.find_child_directory(segment)
        if nxt is None:
            nxt = current.add_child_directory(segment)
        current = nxt
    return current
