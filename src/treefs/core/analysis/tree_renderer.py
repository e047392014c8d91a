from __future__ import annotations

"""
Tree Renderer.

Converts a Directory tree into visual ASCII lines using the standard
connectors (├──, └──). Files are listed before subdirectories, each group
in insertion order, mirroring the order of the XML export.
"""

import logging
from typing import List, Union

from treefs.domain.tree_models import Directory, File
from treefs.infra.fs import write_text_file

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(root: Directory) -> List[str]:
    """
    Render the whole tree, starting with the root name.

    Args:
        root: Directory to render.

    Returns:
        List[str]: Visual lines of the tree.
    """
    lines: List[str] = [root.name]
    render_tree_structure(root, lines, prefix="")
    return lines


def render_tree_structure(directory: Directory, lines: List[str], prefix: str = "") -> None:
    """
    Recursively append the entries of `directory` to `lines`.

    Args:
        directory: Current node to process.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    entries: List[Union[File, Directory]] = [*directory.files, *directory.children]
    total = len(entries)

    for i, entry in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        if isinstance(entry, Directory):
            lines.append(f"{prefix}{connector}{entry.name}/")
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_structure(entry, lines, prefix=new_prefix)
            continue

        lines.append(f"{prefix}{connector}{format_file(entry)}")


def list_contents(directory: Directory) -> List[str]:
    """
    Describe a single level: subdirectories first, then files with sizes.

    Returns:
        List[str]: Listing lines.
    """
    lines: List[str] = [f"Directory: {directory.name}", "Subdirectories:"]
    lines.extend(f"  {child.name}/" for child in directory.children)
    lines.append("Files:")
    lines.extend(f"  {format_file(f)}" for f in directory.files)
    return lines


def format_file(f: File) -> str:
    return f"{f.name} ({f.size} bytes)"


def save_tree(lines: List[str], save_path: str) -> bool:
    """
    Persist rendered lines to a text file.

    Returns:
        bool: True if the file was written.
    """
    ok, err = write_text_file(save_path, "\n".join(lines) + "\n")
    if not ok:
        logger.error(f"Failed to save tree to '{save_path}': {err}")
        return False
    logger.info(f"Tree saved to file: {save_path}")
    return True
