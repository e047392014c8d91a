from __future__ import annotations

"""
Tree Traversal and Search.

Breadth-first and depth-first algorithms over a Directory tree: absolute
path construction, global lookups, extremal-directory queries, largest
file discovery, name-keyed enumeration and duplicate detection.

Ordering rules:
- BFS order (level by level, insertion order inside a level) decides the
  "first match" of every global lookup and the tie-break of every extremal
  query: comparisons are strict, so the earliest visited candidate wins.
- Within one directory, files are examined before its subdirectories.
"""

from collections import deque
from typing import Deque, Dict, Iterator, List, Optional, Tuple

from treefs.domain.constants import PATH_SEPARATOR, NodeKind
from treefs.domain.tree_models import Directory, File, SizedPath

# -----------------------------------------------------------------------------
# PATHS
# -----------------------------------------------------------------------------

def join_path(base: str, name: str) -> str:
    """Join two path segments without doubling a trailing separator."""
    if not base:
        return name
    if base.endswith(PATH_SEPARATOR):
        return base + name
    return base + PATH_SEPARATOR + name


def absolute_path(directory: Directory) -> str:
    """
    Build the path from the tree root down to `directory`.

    The root's own name is the first segment, so a root named "/" yields
    "/a/b" and a root named "home" yields "home/a/b".

    Args:
        directory: Any directory of the tree.

    Returns:
        str: Absolute path of the directory.
    """
    names: List[str] = []
    walker: Optional[Directory] = directory
    while walker is not None:
        names.append(walker.name)
        walker = walker.parent

    path = ""
    for name in reversed(names):
        path = join_path(path, name)
    return path


def file_path(owner: Directory, f: File) -> str:
    """Absolute path of a file given its owning directory."""
    return join_path(absolute_path(owner), f.name)

# -----------------------------------------------------------------------------
# ITERATION PRIMITIVES
# -----------------------------------------------------------------------------

def iter_bfs(root: Directory) -> Iterator[Directory]:
    """Yield every directory of the tree in breadth-first order."""
    queue: Deque[Directory] = deque([root])
    while queue:
        current = queue.popleft()
        yield current
        queue.extend(current.children)


def iter_bfs_with_parent(root: Directory) -> Iterator[Tuple[Directory, Optional[Directory]]]:
    """Yield (directory, parent) pairs in breadth-first order."""
    queue: Deque[Tuple[Directory, Optional[Directory]]] = deque([(root, None)])
    while queue:
        current, parent = queue.popleft()
        yield current, parent
        for child in current.children:
            queue.append((child, current))


def iter_bfs_files(root: Directory) -> Iterator[Tuple[Directory, File]]:
    """Yield (owner, file) pairs: BFS over directories, files in insertion order."""
    for directory in iter_bfs(root):
        for f in directory.files:
            yield directory, f

# -----------------------------------------------------------------------------
# GLOBAL LOOKUPS
# -----------------------------------------------------------------------------

def find_directory_by_name(root: Directory, name: str) -> Optional[Directory]:
    """First directory named `name` in BFS order (root included)."""
    for directory in iter_bfs(root):
        if directory.name == name:
            return directory
    return None


def find_directory_with_parent(
        root: Directory,
        name: str,
) -> Optional[Tuple[Directory, Optional[Directory]]]:
    """First BFS directory named `name` together with its parent (None for the root)."""
    for directory, parent in iter_bfs_with_parent(root):
        if directory.name == name:
            return directory, parent
    return None


def find_file_with_owner(root: Directory, name: str) -> Optional[Tuple[Directory, File]]:
    """First BFS file named `name` together with the directory owning it."""
    for owner, f in iter_bfs_files(root):
        if f.name == name:
            return owner, f
    return None


def search(root: Directory, name: str, kind: NodeKind) -> Optional[str]:
    """
    Locate the first directory or file named `name` and return its path.

    Args:
        root: Tree root.
        name: Exact name to look for.
        kind: NodeKind.DIRECTORY or NodeKind.FILE.

    Returns:
        Optional[str]: Absolute path of the first BFS match, or None.
    """
    kind = NodeKind.parse(kind)

    if kind is NodeKind.DIRECTORY:
        found = find_directory_by_name(root, name)
        return absolute_path(found) if found is not None else None

    hit = find_file_with_owner(root, name)
    if hit is None:
        return None
    owner, f = hit
    return file_path(owner, f)


def file_date(root: Directory, name: str) -> Optional[str]:
    """Date stamp of the first BFS file named `name`."""
    hit = find_file_with_owner(root, name)
    return hit[1].date if hit is not None else None

# -----------------------------------------------------------------------------
# EXTREMAL QUERIES
# -----------------------------------------------------------------------------

def most_elements(root: Directory) -> str:
    """Path of the directory with the most direct entries (earliest BFS on ties)."""
    best = root
    best_count = root.element_count()
    for directory in iter_bfs(root):
        count = directory.element_count()
        if count > best_count:
            best, best_count = directory, count
    return absolute_path(best)


def fewest_elements(root: Directory) -> str:
    """Path of the directory with the fewest direct entries (earliest BFS on ties)."""
    best = root
    best_count = root.element_count()
    for directory in iter_bfs(root):
        count = directory.element_count()
        if count < best_count:
            best, best_count = directory, count
    return absolute_path(best)


def most_space(root: Directory) -> SizedPath:
    """Directory whose subtree holds the most bytes, with that total."""
    best = root
    best_size = root.total_size()
    for directory in iter_bfs(root):
        size = directory.total_size()
        if size > best_size:
            best, best_size = directory, size
    return SizedPath(path=absolute_path(best), size=best_size)


def largest_file(root: Directory) -> Optional[SizedPath]:
    """
    Find the biggest file of the whole tree.

    Paths are tracked alongside the BFS queue so that no parent walk is
    needed per candidate.

    Returns:
        Optional[SizedPath]: Path and size of the winner, or None if the tree
                             holds no files.
    """
    best: Optional[SizedPath] = None
    queue: Deque[Tuple[Directory, str]] = deque([(root, root.name)])

    while queue:
        current, current_path = queue.popleft()
        for f in current.files:
            if best is None or f.size > best.size:
                best = SizedPath(path=join_path(current_path, f.name), size=f.size)
        for child in current.children:
            queue.append((child, join_path(current_path, child.name)))

    return best

# -----------------------------------------------------------------------------
# ENUMERATION
# -----------------------------------------------------------------------------

def find_all_directories_named(root: Directory, name: str) -> List[str]:
    """Absolute paths of every directory named `name`, depth-first pre-order."""
    return [
        absolute_path(directory)
        for directory in root.iter_directories()
        if directory.name == name
    ]


def find_all_files_named(root: Directory, name: str) -> List[str]:
    """Absolute paths of every file named `name`, depth-first, files before subdirectories."""
    results: List[str] = []
    for directory in root.iter_directories():
        base = absolute_path(directory)
        for f in directory.files:
            if f.name == name:
                results.append(join_path(base, f.name))
    return results


def duplicate_files(root: Directory) -> Dict[str, List[str]]:
    """
    Group file paths by name and keep the names seen more than once.

    Returns:
        Dict[str, List[str]]: Name -> absolute paths (BFS order), keys sorted.
    """
    by_name: Dict[str, List[str]] = {}
    for directory in iter_bfs(root):
        base = absolute_path(directory)
        for f in directory.files:
            by_name.setdefault(f.name, []).append(join_path(base, f.name))

    return {
        name: paths
        for name, paths in sorted(by_name.items())
        if len(paths) > 1
    }


def has_duplicate_files(root: Directory) -> bool:
    seen = set()
    for _, f in iter_bfs_files(root):
        if f.name in seen:
            return True
        seen.add(f.name)
    return False
