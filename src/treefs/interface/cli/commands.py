from __future__ import annotations

"""
CLI Command Execution.

Maps a parsed command onto the FileSystemSession and packages the outcome
as a CommandResult: human-readable lines, a JSON-friendly payload and the
process exit code. Shared by the one-shot CLI and the interactive shell.
"""

import argparse
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from treefs.core.services.session import FileSystemSession
from treefs.domain.constants import NodeKind
from treefs.utils.i18n import i18n

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2

# Commands that work without an active tree
_NO_TREE_COMMANDS = frozenset({"load", "new", "import"})

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of one command.

    Attributes:
        ok: Whether the operation succeeded (or the query found something).
        command: Command name.
        lines: Text rendered for humans.
        payload: Machine-readable data for --json.
        exit_code: Process exit code.
    """
    ok: bool
    command: str
    lines: List[str] = field(default_factory=list)
    payload: Dict[str, Any] = field(default_factory=dict)
    exit_code: int = EXIT_OK


def success(command: str, lines: List[str], **payload: Any) -> CommandResult:
    return CommandResult(ok=True, command=command, lines=lines, payload=payload)


def failure(command: str, message: str, exit_code: int = EXIT_FAILED, **payload: Any) -> CommandResult:
    return CommandResult(
        ok=False, command=command, lines=[message], payload=payload, exit_code=exit_code
    )

# -----------------------------------------------------------------------------
# DISPATCH
# -----------------------------------------------------------------------------

def execute(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    """
    Run a parsed tree command against the session.

    Args:
        session: Active session.
        args: Namespace produced by the CLI parser (``args.command`` set).

    Returns:
        CommandResult: The packaged outcome.
    """
    command = args.command
    handler = _HANDLERS.get(command)
    if handler is None:
        return failure(command or "", i18n.t("shell.unknown"), EXIT_INVALID)

    if command not in _NO_TREE_COMMANDS and not session.is_loaded:
        return failure(command, i18n.t("cli.errors.no_tree"))

    logger.debug(f"Executing command '{command}'.")
    return handler(session, args)

# -----------------------------------------------------------------------------
# HANDLERS: TREE REPLACEMENT
# -----------------------------------------------------------------------------

def _load(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    if not session.load(args.path):
        return failure("load", i18n.t("cli.errors.path_not_exist", path=args.path), EXIT_INVALID)
    msg = i18n.t(
        "cli.status.loaded",
        path=args.path,
        dirs=session.count_directories(),
        files=session.count_files(),
    )
    return success("load", [msg], root=session.root.name)


def _new(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    root = session.new(args.name)
    return success("new", [i18n.t("cli.status.created", name=root.name)], root=root.name)


def _import(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    if not session.read_xml(args.path):
        return failure("import", i18n.t("cli.errors.import_failed", path=args.path), EXIT_INVALID)
    return success("import", [i18n.t("cli.status.imported", path=args.path)], path=args.path)


def _export(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    if not session.write_xml(args.path):
        return failure("export", i18n.t("cli.errors.export_failed", path=args.path))
    return success("export", [i18n.t("cli.status.exported", path=args.path)], path=args.path)

# -----------------------------------------------------------------------------
# HANDLERS: QUERIES
# -----------------------------------------------------------------------------

def _counter(command: str, fn: Callable[[FileSystemSession], int]) -> Callable[..., CommandResult]:
    def handler(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
        value = fn(session)
        return success(command, [str(value)], value=value)
    return handler


def _path_query(command: str, fn: Callable[[FileSystemSession], Any]) -> Callable[..., CommandResult]:
    def handler(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
        path = fn(session)
        return success(command, [path], path=path)
    return handler


def _sized_query(command: str, fn: Callable[[FileSystemSession], Any]) -> Callable[..., CommandResult]:
    def handler(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
        found = fn(session)
        if found is None:
            return failure(command, i18n.t("cli.errors.not_found", name=command))
        line = i18n.t("cli.status.bytes", path=found.path, size=found.size)
        return success(command, [line], path=found.path, size=found.size)
    return handler


def _search(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    path = session.search(args.name, NodeKind.parse(args.kind))
    if path is None:
        return failure("search", i18n.t("cli.errors.not_found", name=args.name))
    return success("search", [path], path=path)


def _file_date(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    date = session.file_date(args.name)
    if date is None:
        return failure("file-date", i18n.t("cli.errors.not_found", name=args.name))
    return success("file-date", [date], date=date)


def _find_dirs(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    paths = session.find_all_directories(args.name)
    if not paths:
        return failure("find-dirs", i18n.t("cli.errors.not_found", name=args.name), paths=[])
    return success("find-dirs", paths, paths=paths)


def _find_files(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    paths = session.find_all_files(args.name)
    if not paths:
        return failure("find-files", i18n.t("cli.errors.not_found", name=args.name), paths=[])
    return success("find-files", paths, paths=paths)


def _duplicates(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    dups = session.duplicates()
    if not dups:
        return success("duplicates", [i18n.t("cli.status.no_duplicates")], duplicates={})
    lines = [f"{name}: {', '.join(paths)}" for name, paths in dups.items()]
    return success("duplicates", lines, duplicates=dups)


def _tree(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    lines = session.render_tree(save_path=args.tree_file)
    if lines is None:
        return failure("tree", i18n.t("cli.errors.tree_save_failed", path=args.tree_file))
    return success("tree", lines, count=len(lines), path=args.tree_file or "")

# -----------------------------------------------------------------------------
# HANDLERS: MUTATIONS
# -----------------------------------------------------------------------------

def _remove_all(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    kind = NodeKind.parse(args.kind)
    if not session.remove_all(args.name, kind):
        return failure("remove-all", i18n.t("cli.errors.remove_failed", name=args.name))
    return success("remove-all", [i18n.t("cli.status.removed", kind=kind.value, name=args.name)])


def _move(command: str, fn: Callable[[FileSystemSession, str, str], bool]) -> Callable[..., CommandResult]:
    def handler(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
        if not fn(session, args.name, args.destination):
            return failure(
                command,
                i18n.t("cli.errors.move_failed", name=args.name, destination=args.destination),
            )
        return success(
            command, [i18n.t("cli.status.moved", name=args.name, destination=args.destination)]
        )
    return handler


def _rename(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    count = session.rename_files(args.old_name, args.new_name)
    if count == 0:
        return failure("rename", i18n.t("cli.errors.rename_failed", name=args.old_name), count=0)
    return success("rename", [i18n.t("cli.status.renamed", count=count)], count=count)


def _copy_batch(session: FileSystemSession, args: argparse.Namespace) -> CommandResult:
    if not session.batch_copy(args.pattern, args.source, args.destination):
        return failure("copy-batch", i18n.t("cli.errors.copy_failed", pattern=args.pattern))
    msg = i18n.t("cli.status.copied", pattern=args.pattern, destination=args.destination)
    return success("copy-batch", [msg])


_HANDLERS: Dict[str, Callable[[FileSystemSession, argparse.Namespace], CommandResult]] = {
    "load": _load,
    "new": _new,
    "import": _import,
    "export": _export,
    "count-files": _counter("count-files", FileSystemSession.count_files),
    "count-dirs": _counter("count-dirs", FileSystemSession.count_directories),
    "memory": _counter("memory", FileSystemSession.memory),
    "most-elements": _path_query("most-elements", FileSystemSession.most_elements),
    "fewest-elements": _path_query("fewest-elements", FileSystemSession.fewest_elements),
    "largest-file": _sized_query("largest-file", FileSystemSession.largest_file),
    "most-space": _sized_query("most-space", FileSystemSession.most_space),
    "search": _search,
    "file-date": _file_date,
    "find-dirs": _find_dirs,
    "find-files": _find_files,
    "duplicates": _duplicates,
    "tree": _tree,
    "remove-all": _remove_all,
    "move-file": _move("move-file", FileSystemSession.move_file),
    "move-dir": _move("move-dir", FileSystemSession.move_directory),
    "rename": _rename,
    "copy-batch": _copy_batch,
}
