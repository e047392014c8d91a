from __future__ import annotations

"""
XML Tree Codec.

Exports a Directory tree to a nested tagged-attribute document and rebuilds
an equivalent tree from it:

    <?xml version="1.0" encoding="UTF-8"?>
    <Directory name="/">
      <File name="f.txt" size="100" date="2024|03|07" />
      <Directory name="a">
      </Directory>
    </Directory>

Files of a directory are written before its subdirectories; both groups keep
insertion order, so export(import(export(T))) reproduces export(T).

Import is event driven and keeps a stack of open directories. Malformed
attribute values degrade to defaults; only a structurally broken document
(or one without any Directory element) makes the import fail.
"""

import logging
import re
from typing import List, Optional, Union
from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape

from treefs.domain.tree_models import Directory
from treefs.infra.fs import write_text_file

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
DIRECTORY_TAG = "Directory"
FILE_TAG = "File"
INDENT = "  "

# escape() already handles &, < and >; whitespace is kept as character
# references so attribute-value normalization does not fold it into spaces
_ATTR_ENTITIES = {
    '"': "&quot;",
    "'": "&apos;",
    "\t": "&#9;",
    "\n": "&#10;",
    "\r": "&#13;",
}

# Anything outside the XML 1.0 Char production (C0 controls, lone surrogates,
# U+FFFE/U+FFFF) cannot appear in a well-formed document
_NON_XML_CHARS = re.compile("[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")
REPLACEMENT_CHAR = "\ufffd"

# -----------------------------------------------------------------------------
# EXPORT
# -----------------------------------------------------------------------------

def escape_attr(value: str) -> str:
    """
    Escape an attribute value so that parsing it yields the same text.

    Characters XML 1.0 cannot represent are replaced with U+FFFD (logged),
    so an exported document always reads back.
    """
    if _NON_XML_CHARS.search(value):
        logger.warning(f"Replacing characters not allowed in XML in {value!r}.")
        value = _NON_XML_CHARS.sub(REPLACEMENT_CHAR, value)
    return escape(value, _ATTR_ENTITIES)


def export_tree(root: Directory) -> str:
    """
    Serialize a tree to the XML-like text format.

    Args:
        root: Directory to export (becomes the document element).

    Returns:
        str: The complete document, newline terminated.
    """
    lines: List[str] = [XML_DECLARATION]
    _write_directory(root, 0, lines)
    return "\n".join(lines) + "\n"


def _write_directory(directory: Directory, depth: int, lines: List[str]) -> None:
    ind = INDENT * depth
    lines.append(f'{ind}<{DIRECTORY_TAG} name="{escape_attr(directory.name)}">')

    for f in directory.files:
        lines.append(
            f'{ind}{INDENT}<{FILE_TAG} name="{escape_attr(f.name)}" '
            f'size="{f.size}" date="{escape_attr(f.date)}" />'
        )

    for child in directory.children:
        _write_directory(child, depth + 1, lines)

    lines.append(f"{ind}</{DIRECTORY_TAG}>")


def write_xml(root: Directory, path: str) -> bool:
    """
    Export a tree to `path`.

    Returns:
        bool: True if the document was written.
    """
    ok, err = write_text_file(path, export_tree(root))
    if not ok:
        logger.error(f"Failed to write XML to '{path}': {err}")
        return False
    logger.info(f"Tree exported to {path}")
    return True

# -----------------------------------------------------------------------------
# IMPORT
# -----------------------------------------------------------------------------

def import_tree(document: Union[str, bytes]) -> Optional[Directory]:
    """
    Rebuild a tree from the XML-like text format.

    Args:
        document: Full document as text or UTF-8 bytes.

    Returns:
        Optional[Directory]: The rebuilt root, or None when the document is
                             structurally unparseable or has no Directory.
    """
    data = document.encode("utf-8") if isinstance(document, str) else document

    parser = ET.XMLPullParser(events=("start", "end"))
    stack: List[Directory] = []
    root: Optional[Directory] = None

    # Syntax errors raised by feed() are queued and resurface in read_events()
    try:
        parser.feed(data)
        parser.close()
        events = list(parser.read_events())
    except ET.ParseError as e:
        logger.error(f"XML parse failure: {e}")
        return None

    for event, elem in events:
        if elem.tag == DIRECTORY_TAG:
            if event == "start":
                name = elem.get("name", "")
                if stack:
                    directory = stack[-1].add_child_directory(name)
                elif root is None:
                    directory = Directory(name)
                    root = directory
                else:
                    logger.warning(f"Ignoring extra top-level directory '{name}'.")
                    continue
                stack.append(directory)
            elif stack:
                stack.pop()

        elif elem.tag == FILE_TAG and event == "start":
            if not stack:
                logger.warning("Ignoring file entry outside any directory.")
                continue
            added = stack[-1].add_file(elem.get("name", ""), _parse_size(elem.get("size")))
            date = elem.get("date")
            if date is not None:
                added.date = date

    if root is None:
        logger.error("XML document holds no Directory element.")
    return root


def _parse_size(raw: Optional[str]) -> int:
    """Parse a size attribute, degrading to 0 on missing or malformed values."""
    if raw is None:
        return 0
    try:
        return max(int(raw.strip()), 0)
    except ValueError:
        logger.warning(f"Malformed size attribute '{raw}'. Using 0.")
        return 0


def read_xml(path: str) -> Optional[Directory]:
    """
    Import a tree from the file at `path`.

    Returns:
        Optional[Directory]: The rebuilt root, or None on I/O or parse failure.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        logger.error(f"Failed to read XML from '{path}': {e}")
        return None

    root = import_tree(data)
    if root is not None:
        logger.info(f"Tree imported from {path}")
    return root
