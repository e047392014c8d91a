from __future__ import annotations

"""
Destination Resolver.

Turns a user-supplied directory reference into a Directory of the tree. A reference
containing a separator ('/' or '\\') is a path walked from the root; any
other reference is a directory name looked up breadth-first.
"""

import re
from typing import List, Optional

from treefs.core.analysis.traversal import find_directory_by_name
from treefs.domain.constants import ACCEPTED_SEPARATORS
from treefs.domain.tree_models import Directory

_SEPARATOR_RX = re.compile("|".join(re.escape(sep) for sep in ACCEPTED_SEPARATORS))


def is_path_like(ref: str) -> bool:
    return any(sep in ref for sep in ACCEPTED_SEPARATORS)


def split_path(ref: str) -> List[str]:
    """Split a path on every accepted separator, dropping empty segments."""
    return [segment for segment in _SEPARATOR_RX.split(ref) if segment]


def resolve_path(root: Directory, ref: str) -> Optional[Directory]:
    """
    Walk `ref` segment by segment from the root.

    The root's own name is not part of the path: "/src/app" means the child
    "src" of the root, then its child "app". A path with no segments ("/")
    resolves to the root.
    """
    current = root
    for segment in split_path(ref):
        nxt = current.find_child_directory(segment)
        if nxt is None:
            return None
        current = nxt
    return current


def resolve_directory(root: Directory, ref: str) -> Optional[Directory]:
    """
    Resolve a destination reference as a path or as a directory name.

    Args:
        root: Tree root.
        ref: "/a/b", "a\\b" or a bare directory name.

    Returns:
        Optional[Directory]: The resolved directory, or None.
    """
    if is_path_like(ref):
        return resolve_path(root, ref)
    return find_directory_by_name(root, ref)
