from __future__ import annotations

"""
Tree Mutation Service.

Whole-tree operations that need validation before touching the structure:
moving files and directories, removing every entry with a given name,
pattern-based batch copies and bulk renames.

Every operation is all-or-nothing. Validation happens first; when an
operation both adds and removes, the additive step runs before the
destructive one so that a rejected move never loses data. Rejections are
reported as a False result and logged with their reason.
"""

import logging
from typing import List, Tuple

from treefs.core.analysis.traversal import (
    absolute_path,
    find_directory_with_parent,
    find_file_with_owner,
    iter_bfs,
)
from treefs.core.services.resolver import resolve_directory
from treefs.domain.constants import COPY_SUFFIX_FORMAT, NodeKind
from treefs.domain.tree_models import Directory, File

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# MOVES
# -----------------------------------------------------------------------------

def move_file(root: Directory, name: str, dest_ref: str) -> bool:
    """
    Move the first file named `name` (BFS order) into another directory.

    Args:
        root: Tree root.
        name: Exact file name.
        dest_ref: Path from the root ("/a/b") or a directory name.

    Returns:
        bool: True if the file was moved.
    """
    hit = find_file_with_owner(root, name)
    if hit is None:
        logger.debug(f"move_file: no file named '{name}'.")
        return False
    source_dir, target = hit

    destination = resolve_directory(root, dest_ref)
    if destination is None:
        logger.debug(f"move_file: destination '{dest_ref}' not found.")
        return False

    if destination is source_dir:
        logger.info(f"move_file: '{name}' already lives in '{absolute_path(destination)}'.")
        return False

    if destination.contains_file(target.name):
        logger.info(
            f"move_file: '{absolute_path(destination)}' already contains a file named '{target.name}'."
        )
        return False

    moved = destination.add_file(target.name, target.size)
    moved.date = target.date
    source_dir.discard_file(target)

    logger.info(f"Moved file '{name}' to '{absolute_path(destination)}'.")
    return True


def move_directory(root: Directory, old_name: str, dest_ref: str) -> bool:
    """
    Move the first directory named `old_name` (BFS order) with its subtree.

    The move is rejected when the directory is the root, when the
    destination cannot be resolved, or when the destination is the moved
    directory itself or lies inside it.

    Args:
        root: Tree root.
        old_name: Exact name of the directory to move.
        dest_ref: Path from the root ("/a/b") or a directory name.

    Returns:
        bool: True if the subtree was re-parented.
    """
    hit = find_directory_with_parent(root, old_name)
    if hit is None:
        logger.debug(f"move_directory: no directory named '{old_name}'.")
        return False
    source, parent = hit

    if parent is None:
        logger.info("move_directory: the root directory cannot be moved.")
        return False

    destination = resolve_directory(root, dest_ref)
    if destination is None:
        logger.debug(f"move_directory: destination '{dest_ref}' not found.")
        return False

    if destination.is_descendant_of(source):
        logger.info(
            f"move_directory: '{absolute_path(destination)}' is inside '{absolute_path(source)}'."
        )
        return False

    subtree = parent.detach_child_directory(source.name)
    if subtree is None:
        return False
    destination.attach_child_directory(subtree)

    logger.info(f"Moved directory '{old_name}' to '{absolute_path(destination)}'.")
    return True

# -----------------------------------------------------------------------------
# BULK REMOVAL AND RENAME
# -----------------------------------------------------------------------------

def remove_all_by_name(root: Directory, name: str, kind: NodeKind) -> bool:
    """
    Remove every file, or every directory, named `name`.

    Files: every directory of the tree drops all of its files with that name.
    Directories: every matching child is removed with its subtree and is not
    descended into; the root itself is never removed.

    Args:
        root: Tree root.
        name: Exact name to remove.
        kind: NodeKind.FILE or NodeKind.DIRECTORY.

    Returns:
        bool: True if anything was removed.
    """
    kind = NodeKind.parse(kind)
    removed = _remove_all(root, name, kind)
    if removed:
        logger.info(f"Removed every {kind.value} named '{name}'.")
    return removed


def _remove_all(directory: Directory, name: str, kind: NodeKind) -> bool:
    removed = False

    if kind is NodeKind.FILE:
        while directory.contains_file(name):
            directory.remove_file(name)
            removed = True

    # Iterate over a snapshot: matching children are removed during the walk
    for child in list(directory.children):
        if kind is NodeKind.DIRECTORY and child.name == name:
            directory.remove_child_directory(name)
            removed = True
        elif _remove_all(child, name, kind):
            removed = True

    return removed


def rename_all_by_name(root: Directory, old_name: str, new_name: str) -> int:
    """
    Rename in place every file named `old_name`.

    Siblings are not checked for collisions: several files may end up
    sharing `new_name` in the same directory.

    Returns:
        int: Number of files renamed.
    """
    renamed = 0
    for directory in iter_bfs(root):
        for f in directory.files:
            if f.name == old_name:
                f.name = new_name
                renamed += 1

    if renamed:
        logger.info(f"Renamed {renamed} file(s) '{old_name}' -> '{new_name}'.")
    return renamed

# -----------------------------------------------------------------------------
# BATCH COPY
# -----------------------------------------------------------------------------

def batch_copy(root: Directory, pattern: str, source_ref: str, dest_ref: str) -> bool:
    """
    Copy every file of a subtree whose name contains `pattern` (case-insensitive).

    Name collisions in the destination are solved by inserting a zero-padded
    counter before the extension: "access.log" becomes "access_001.log",
    then "access_002.log" and so on.

    Args:
        root: Tree root.
        pattern: Substring to look for in file names.
        source_ref: Source directory (path or name).
        dest_ref: Destination directory (path or name).

    Returns:
        bool: True if at least one file was copied.
    """
    source = resolve_directory(root, source_ref)
    if source is None:
        logger.debug(f"batch_copy: source '{source_ref}' not found.")
        return False

    destination = resolve_directory(root, dest_ref)
    if destination is None:
        logger.debug(f"batch_copy: destination '{dest_ref}' not found.")
        return False

    needle = pattern.lower()
    # Snapshot before copying: the destination may lie inside the source
    candidates: List[File] = [
        f
        for directory in source.iter_directories()
        for f in directory.files
        if needle in f.name.lower()
    ]

    for f in candidates:
        copy = destination.add_file(free_name(destination, f.name), f.size)
        copy.date = f.date

    if candidates:
        logger.info(
            f"Copied {len(candidates)} file(s) matching '{pattern}' to '{absolute_path(destination)}'."
        )
    return bool(candidates)


def free_name(directory: Directory, name: str) -> str:
    """
    Return `name`, or the first suffixed variant not used by a file of `directory`.

    The extension starts at the last '.' of the name; a name without '.'
    gets the suffix appended at the end.
    """
    if not directory.contains_file(name):
        return name

    base, ext = split_extension(name)
    seq = 1
    while True:
        candidate = f"{base}{COPY_SUFFIX_FORMAT.format(seq)}{ext}"
        if not directory.contains_file(candidate):
            return candidate
        seq += 1


def split_extension(name: str) -> Tuple[str, str]:
    pos = name.rfind(".")
    if pos < 0:
        return name, ""
    return name[:pos], name[pos:]
