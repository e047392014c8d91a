from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema: global options shared by every command
and one subcommand per tree operation. The same parser drives the
interactive shell, which feeds it one tokenized line at a time.
"""

import argparse
from typing import Any, Dict, Optional

from treefs.utils.i18n import i18n

# Commands that change the tree and trigger an auto-export
MUTATING_COMMANDS = frozenset({
    "load", "new", "remove-all", "move-file", "move-dir",
    "rename", "copy-batch", "import",
})

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser(prog: str = "treefs") -> argparse.ArgumentParser:
    """
    Construct the argument parser for the TreeFS CLI.

    Args:
        prog: Program name shown in usage lines.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(prog=prog, description=i18n.t("app.description"))

    # --- Session and persistence ---
    p.add_argument("--state", dest="state_file", default=None, help=i18n.t("cli.args.state"))
    p.add_argument("--no-autosave", action="store_true", help=i18n.t("cli.args.no_autosave"))
    p.add_argument("--use-defaults", action="store_true", help=i18n.t("cli.args.defaults"))

    # --- Output and diagnostics ---
    p.add_argument("--json", dest="json_output", action="store_true", help=i18n.t("cli.args.json"))
    p.add_argument("--debug", action="store_true", help=i18n.t("cli.args.debug"))

    sub = p.add_subparsers(dest="command", metavar="<command>")
    add_command_parsers(sub)

    return p


def add_command_parsers(sub: Any) -> None:
    """Register one subparser per tree command."""
    # --- Tree replacement ---
    load = sub.add_parser("load", help=i18n.t("cli.args.load"))
    load.add_argument("path")

    new = sub.add_parser("new", help=i18n.t("cli.args.new"))
    new.add_argument("name", nargs="?", default=None)

    imp = sub.add_parser("import", help=i18n.t("cli.args.import"))
    imp.add_argument("path")

    exp = sub.add_parser("export", help=i18n.t("cli.args.export"))
    exp.add_argument("path")

    # --- Aggregations and extremal queries ---
    sub.add_parser("count-files", help=i18n.t("cli.args.count_files"))
    sub.add_parser("count-dirs", help=i18n.t("cli.args.count_dirs"))
    sub.add_parser("memory", help=i18n.t("cli.args.memory"))
    sub.add_parser("most-elements", help=i18n.t("cli.args.most_elements"))
    sub.add_parser("fewest-elements", help=i18n.t("cli.args.fewest_elements"))
    sub.add_parser("largest-file", help=i18n.t("cli.args.largest_file"))
    sub.add_parser("most-space", help=i18n.t("cli.args.most_space"))
    sub.add_parser("duplicates", help=i18n.t("cli.args.duplicates"))

    # --- Lookups ---
    search = sub.add_parser("search", help=i18n.t("cli.args.search"))
    search.add_argument("name")
    _add_kind_flags(search)

    date = sub.add_parser("file-date", help=i18n.t("cli.args.file_date"))
    date.add_argument("name")

    find_dirs = sub.add_parser("find-dirs", help=i18n.t("cli.args.find_dirs"))
    find_dirs.add_argument("name")

    find_files = sub.add_parser("find-files", help=i18n.t("cli.args.find_files"))
    find_files.add_argument("name")

    tree = sub.add_parser("tree", help=i18n.t("cli.args.tree"))
    tree.add_argument("--out", dest="tree_file", default=None, help=i18n.t("cli.args.tree_out"))

    # --- Mutations ---
    remove = sub.add_parser("remove-all", help=i18n.t("cli.args.remove_all"))
    remove.add_argument("name")
    _add_kind_flags(remove)

    move_file = sub.add_parser("move-file", help=i18n.t("cli.args.move_file"))
    move_file.add_argument("name")
    move_file.add_argument("destination")

    move_dir = sub.add_parser("move-dir", help=i18n.t("cli.args.move_dir"))
    move_dir.add_argument("name")
    move_dir.add_argument("destination")

    rename = sub.add_parser("rename", help=i18n.t("cli.args.rename"))
    rename.add_argument("old_name")
    rename.add_argument("new_name")

    copy = sub.add_parser("copy-batch", help=i18n.t("cli.args.copy_batch"))
    copy.add_argument("pattern")
    copy.add_argument("source")
    copy.add_argument("destination")

    # --- Front ends and tooling ---
    sub.add_parser("shell", help=i18n.t("cli.args.shell"))
    sub.add_parser("dump-config", help=i18n.t("cli.args.dump_config"))


def _add_kind_flags(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--dir", dest="kind", action="store_const", const="dir", help=i18n.t("cli.args.kind_dir")
    )
    group.add_argument(
        "--file", dest="kind", action="store_const", const="file", help=i18n.t("cli.args.kind_file")
    )

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate global options into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["state_file"] = args.state_file

    if args.no_autosave:
        overrides["auto_export"] = False
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides


def is_mutating(command: Optional[str]) -> bool:
    return command in MUTATING_COMMANDS
