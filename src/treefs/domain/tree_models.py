from __future__ import annotations

"""
Directory Tree Structure Data Models.

Defines the two node shapes of the simulated namespace (File and Directory)
and the structural operations every higher layer is built on: ownership
changes (add/remove/detach/attach), first-match lookups and recursive
aggregations.

Ownership rules:
- A File lives in exactly one Directory.files list.
- A Directory lives in exactly one parent's children list (or is a root).
- Directory.parent is a back reference only; it never keeps a subtree alive
  on its own and is cleared when the subtree is detached.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List, Optional

from treefs.domain.constants import DATE_FORMAT


def today_stamp() -> str:
    """Return the current day formatted with DATE_FORMAT."""
    return datetime.now().strftime(DATE_FORMAT)

# -----------------------------------------------------------------------------
# LEAF NODES
# -----------------------------------------------------------------------------

@dataclass
class File:
    """
    Represents a leaf entry (file) in the directory tree.

    Attributes:
        name: File name, unique only by convention.
        size: Size in bytes.
        date: Opaque stamp; never interpreted by the core.
    """
    name: str
    size: int = 0
    date: str = field(default_factory=today_stamp)

    def __post_init__(self) -> None:
        if self.size < 0:
            self.size = 0


@dataclass(frozen=True)
class SizedPath:
    """Absolute path paired with a size in bytes (query results)."""
    path: str
    size: int

# -----------------------------------------------------------------------------
# CONTAINER NODES
# -----------------------------------------------------------------------------

class Directory:
    """
    Tree node holding ordered child directories and ordered files.

    Sibling names are not required to be unique: every lookup returns the
    first match in insertion order.
    """

    def __init__(self, name: str):
        self.name = name
        self.parent: Optional[Directory] = None
        self.children: List[Directory] = []
        self.files: List[File] = []

    def __repr__(self) -> str:
        return f"Directory({self.name!r}, children={len(self.children)}, files={len(self.files)})"

    # --- Child directories ---

    def add_child_directory(self, name: str) -> Directory:
        """Create a child directory and append it to the children list."""
        return self.attach_child_directory(Directory(name))

    def find_child_directory(self, name: str) -> Optional[Directory]:
        for child in self.children:
            if child.name == name:
                return child
        return None

    def remove_child_directory(self, name: str) -> None:
        """Discard the first child named `name` with its whole subtree."""
        self.detach_child_directory(name)

    def detach_child_directory(self, name: str) -> Optional[Directory]:
        """
        Remove the first child named `name` and hand its subtree to the caller.

        Args:
            name: Name of the child directory.

        Returns:
            Optional[Directory]: The detached subtree (parent cleared) or None.
        """
        for index, child in enumerate(self.children):
            if child.name == name:
                del self.children[index]
                child.parent = None
                return child
        return None

    def attach_child_directory(self, subtree: Directory) -> Directory:
        """
        Take ownership of a detached subtree and append it to the children list.

        Args:
            subtree: A root or previously detached directory.

        Returns:
            Directory: The attached subtree.

        Raises:
            ValueError: If the subtree still belongs to a parent.
        """
        if subtree.parent is not None:
            raise ValueError(
                f"Directory '{subtree.name}' is still attached to '{subtree.parent.name}'."
            )
        subtree.parent = self
        self.children.append(subtree)
        return subtree

    # --- Files ---

    def add_file(self, name: str, size: int) -> File:
        """Create a file stamped with today's date and append it."""
        new_file = File(name=name, size=size)
        self.files.append(new_file)
        return new_file

    def find_file(self, name: str) -> Optional[File]:
        for f in self.files:
            if f.name == name:
                return f
        return None

    def contains_file(self, name: str) -> bool:
        return self.find_file(name) is not None

    def remove_file(self, name: str) -> None:
        """Remove the first file named `name`; no-op when absent."""
        for index, f in enumerate(self.files):
            if f.name == name:
                del self.files[index]
                return

    def discard_file(self, target: File) -> bool:
        """Remove a specific file instance (identity match)."""
        for index, f in enumerate(self.files):
            if f is target:
                del self.files[index]
                return True
        return False

    # --- Aggregations ---

    def total_size(self) -> int:
        total = sum(f.size for f in self.files)
        for child in self.children:
            total += child.total_size()
        return total

    def total_file_count(self) -> int:
        total = len(self.files)
        for child in self.children:
            total += child.total_file_count()
        return total

    def total_directory_count(self) -> int:
        """Count directories in the subtree, the receiver included."""
        total = 1
        for child in self.children:
            total += child.total_directory_count()
        return total

    def element_count(self) -> int:
        """Direct children plus direct files (non-recursive)."""
        return len(self.children) + len(self.files)

    def find_largest_file(self) -> Optional[File]:
        """
        Find the biggest file of the subtree.

        Visits own files before descending into children; a later file only
        wins with a strictly greater size.

        Returns:
            Optional[File]: The largest file or None if the subtree has no files.
        """
        largest: Optional[File] = None
        for f in self.files:
            if largest is None or f.size > largest.size:
                largest = f
        for child in self.children:
            candidate = child.find_largest_file()
            if candidate is not None and (largest is None or candidate.size > largest.size):
                largest = candidate
        return largest

    # --- Structure ---

    def is_descendant_of(self, other: Directory) -> bool:
        """True if `other` is this directory or one of its ancestors."""
        walker: Optional[Directory] = self
        while walker is not None:
            if walker is other:
                return True
            walker = walker.parent
        return False

    def iter_directories(self) -> Iterator[Directory]:
        """Yield the subtree's directories in depth-first pre-order."""
        yield self
        for child in self.children:
            yield from child.iter_directories()
