from __future__ import annotations

"""
Session Bootstrap and State File Policy.

Builds the session from the validated configuration and applies the
auto-import/auto-export policy of the persisted XML state file. Shared by
the one-shot CLI and the interactive shell.
"""

import logging
import os
from typing import Any, Dict

from treefs.core.loader.filters import build_ignore_rules
from treefs.core.services.session import FileSystemSession

logger = logging.getLogger(__name__)


def build_session(config: Dict[str, Any]) -> FileSystemSession:
    """Create a session honoring the configured ignore lists and root name."""
    rules = build_ignore_rules(
        dirs=config.get("ignore_dirs"),
        files=config.get("ignore_files"),
        extensions=config.get("ignore_extensions"),
    )
    return FileSystemSession(rules=rules, root_name=config.get("root_name", ""))


def restore_state(session: FileSystemSession, config: Dict[str, Any]) -> bool:
    """
    Import the state file into the session when auto-import is enabled.

    A missing state file is not an error: the session simply stays empty.

    Args:
        session: Session receiving the tree.
        config: Validated configuration.

    Returns:
        bool: False only when an existing state file could not be imported.
    """
    state_file = config.get("state_file", "")
    if not config.get("auto_import") or not state_file or not os.path.isfile(state_file):
        logger.debug(f"No state restored (auto_import={config.get('auto_import')}).")
        return True
    return session.read_xml(state_file)


def persist_state(session: FileSystemSession, config: Dict[str, Any]) -> bool:
    """
    Export the session tree to the state file when auto-export is enabled.

    Returns:
        bool: True if the state file was written.
    """
    state_file = config.get("state_file", "")
    if not config.get("auto_export") or not state_file or not session.is_loaded:
        return False
    return session.write_xml(state_file)
