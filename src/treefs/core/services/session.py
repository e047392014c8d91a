from __future__ import annotations

"""
File System Session.

Owns the active tree and exposes every query and mutation the interfaces
need. The root can be replaced wholesale (disk load, XML import); a failed
replacement leaves the previous tree untouched. Every query degrades to an
empty result when no tree is loaded.
"""

import logging
from typing import Dict, List, Optional

from treefs.core.analysis import traversal
from treefs.core.analysis.tree_renderer import render_tree, save_tree
from treefs.core.loader.filters import IgnoreRules
from treefs.core.loader.scanner import load_directory
from treefs.core.serialization.xml_codec import read_xml, write_xml
from treefs.core.services import mutation
from treefs.domain.constants import DEFAULT_ROOT_NAME, NodeKind
from treefs.domain.tree_models import Directory, SizedPath

logger = logging.getLogger(__name__)


class FileSystemSession:
    """
    Mutable handle on the active tree.

    Attributes:
        root: The active tree, or None before anything is loaded.
        rules: Ignore rules applied by load().
        root_name: Name given to roots created by new().
    """

    def __init__(
            self,
            root: Optional[Directory] = None,
            rules: Optional[IgnoreRules] = None,
            root_name: str = DEFAULT_ROOT_NAME,
    ):
        self.root = root
        self.rules = rules or IgnoreRules()
        self.root_name = root_name or DEFAULT_ROOT_NAME

    @property
    def is_loaded(self) -> bool:
        return self.root is not None

    # -------------------------------------------------------------------------
    # TREE REPLACEMENT
    # -------------------------------------------------------------------------

    def new(self, name: Optional[str] = None) -> Directory:
        """Replace the active tree with an empty root."""
        self.root = Directory(name or self.root_name)
        logger.info(f"Started empty tree '{self.root.name}'.")
        return self.root

    def load(self, path: str) -> bool:
        """Replace the active tree with the contents of a real directory."""
        loaded = load_directory(path, self.rules)
        if loaded is None:
            return False
        self.root = loaded
        return True

    def read_xml(self, path: str) -> bool:
        """Replace the active tree with an exported document."""
        imported = read_xml(path)
        if imported is None:
            return False
        self.root = imported
        return True

    def write_xml(self, path: str) -> bool:
        if self.root is None:
            logger.warning("Nothing to export: no tree loaded.")
            return False
        return write_xml(self.root, path)

    # -------------------------------------------------------------------------
    # COUNTERS
    # -------------------------------------------------------------------------

    def count_files(self) -> int:
        return self.root.total_file_count() if self.root else 0

    def count_directories(self) -> int:
        return self.root.total_directory_count() if self.root else 0

    def memory(self) -> int:
        """Total bytes held by the tree."""
        return self.root.total_size() if self.root else 0

    # -------------------------------------------------------------------------
    # QUERIES
    # -------------------------------------------------------------------------

    def most_elements(self) -> Optional[str]:
        return traversal.most_elements(self.root) if self.root else None

    def fewest_elements(self) -> Optional[str]:
        return traversal.fewest_elements(self.root) if self.root else None

    def most_space(self) -> Optional[SizedPath]:
        return traversal.most_space(self.root) if self.root else None

    def largest_file(self) -> Optional[SizedPath]:
        return traversal.largest_file(self.root) if self.root else None

    def search(self, name: str, kind: NodeKind) -> Optional[str]:
        return traversal.search(self.root, name, kind) if self.root else None

    def file_date(self, name: str) -> Optional[str]:
        return traversal.file_date(self.root, name) if self.root else None

    def find_all_directories(self, name: str) -> List[str]:
        return traversal.find_all_directories_named(self.root, name) if self.root else []

    def find_all_files(self, name: str) -> List[str]:
        return traversal.find_all_files_named(self.root, name) if self.root else []

    def duplicates(self) -> Dict[str, List[str]]:
        return traversal.duplicate_files(self.root) if self.root else {}

    def has_duplicates(self) -> bool:
        return traversal.has_duplicate_files(self.root) if self.root else False

    def render_tree(self, save_path: Optional[str] = None) -> Optional[List[str]]:
        """
        Render the active tree, optionally persisting it.

        Args:
            save_path: Text file receiving the rendering.

        Returns:
            Optional[List[str]]: Rendered lines (empty when no tree is loaded),
                                 or None when save_path could not be written.
        """
        if self.root is None:
            return []
        lines = render_tree(self.root)
        if save_path and not save_tree(lines, save_path):
            return None
        return lines

    # -------------------------------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------------------------------

    def remove_all(self, name: str, kind: NodeKind) -> bool:
        return mutation.remove_all_by_name(self.root, name, kind) if self.root else False

    def move_file(self, name: str, destination: str) -> bool:
        return mutation.move_file(self.root, name, destination) if self.root else False

    def move_directory(self, name: str, destination: str) -> bool:
        return mutation.move_directory(self.root, name, destination) if self.root else False

    def batch_copy(self, pattern: str, source: str, destination: str) -> bool:
        return mutation.batch_copy(self.root, pattern, source, destination) if self.root else False

    def rename_files(self, old_name: str, new_name: str) -> int:
        return mutation.rename_all_by_name(self.root, old_name, new_name) if self.root else 0
