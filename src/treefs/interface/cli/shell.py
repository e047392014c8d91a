from __future__ import annotations

"""
Interactive Tree Shell.

Line-oriented front end over the session built on cmd.Cmd. Navigation and
single-level editing (mkdir, touch, cd, ls, rm, rmdir, size, pwd, tree) act
on the current directory; any other line is parsed with the one-shot CLI
grammar and dispatched to the same command handlers.
"""

import argparse
import cmd
import json
import logging
import shlex
from typing import IO, Any, Dict, List, Optional, Tuple

from treefs.core.analysis.traversal import absolute_path
from treefs.core.analysis.tree_renderer import list_contents, render_tree
from treefs.core.services.resolver import is_path_like, resolve_path
from treefs.core.services.session import FileSystemSession
from treefs.interface.cli.args import add_command_parsers
from treefs.interface.cli.commands import execute
from treefs.interface.cli.state import persist_state
from treefs.utils.i18n import i18n

logger = logging.getLogger(__name__)

# Parser entries that make no sense inside the shell
_HIDDEN_COMMANDS = frozenset({"shell"})


class ShellUsageError(Exception):
    """Raised instead of exiting when a shell line does not parse."""


class ShellArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports problems through ShellUsageError."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise ShellUsageError(f"{self.prog}: {message}")

    def exit(self, status: int = 0, message: Optional[str] = None) -> None:  # type: ignore[override]
        raise ShellUsageError(message or "")


def build_shell_parser() -> Tuple[ShellArgumentParser, Dict[str, argparse.ArgumentParser]]:
    """
    Build the parser used for tree commands typed in the shell.

    Returns:
        Tuple: The top-level parser and the subparsers keyed by command name.
    """
    parser = ShellArgumentParser(prog="treefs", add_help=False)
    sub = parser.add_subparsers(dest="command")
    add_command_parsers(sub)
    return parser, dict(sub.choices)

# -----------------------------------------------------------------------------
# SHELL
# -----------------------------------------------------------------------------

class TreeShell(cmd.Cmd):
    """
    Interactive loop bound to a session and a current directory.

    Attributes:
        session: Session owning the tree.
        config: Validated configuration (auto-export policy, state file).
        cwd: Directory targeted by the navigation and editing commands.
    """

    def __init__(
            self,
            session: FileSystemSession,
            config: Optional[Dict[str, Any]] = None,
            stdin: Optional[IO[str]] = None,
            stdout: Optional[IO[str]] = None,
    ):
        super().__init__(stdin=stdin, stdout=stdout)
        if stdin is not None:
            self.use_rawinput = False

        self.session = session
        self.config = config or {}
        if not session.is_loaded:
            session.new()
        self.cwd = session.root

        self._parser, self._commands = build_shell_parser()
        self.intro = i18n.t("app.welcome")
        self._update_prompt()

    # -------------------------------------------------------------------------
    # LOOP HOOKS
    # -------------------------------------------------------------------------

    def emptyline(self) -> bool:
        return False

    def onecmd(self, line: str) -> bool:
        """Run one line; a failing command is reported and the loop goes on."""
        try:
            return super().onecmd(line)
        except Exception as e:
            logger.exception(f"Shell command failed: {line!r}")
            self._say(i18n.t("cli.errors.unexpected", error=str(e)))
            return False

    def postcmd(self, stop: bool, line: str) -> bool:
        self._sync_cwd()
        self._update_prompt()
        return stop

    def default(self, line: str) -> bool:
        """Dispatch a line written in the one-shot CLI grammar."""
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            self._say(f"{i18n.t('shell.unknown')} ({e})")
            return False

        if not tokens or tokens[0] not in self._commands or tokens[0] in _HIDDEN_COMMANDS:
            self._say(i18n.t("shell.unknown"))
            return False

        if tokens[0] == "dump-config":
            self._say(json.dumps(self.config, ensure_ascii=False, indent=2))
            return False

        try:
            args = self._parser.parse_args(tokens)
        except ShellUsageError as e:
            if str(e):
                self._say(str(e).rstrip())
            return False

        result = execute(self.session, args)
        for text in result.lines:
            self._say(text)
        return False

    # -------------------------------------------------------------------------
    # NAVIGATION
    # -------------------------------------------------------------------------

    def do_cd(self, arg: str) -> None:
        """cd <name> | cd .. | cd / - Change the current directory."""
        target = arg.strip()
        if not target:
            self._say(i18n.t("shell.usage_name", command="cd"))
            return

        if target == "..":
            if self.cwd.parent is not None:
                self.cwd = self.cwd.parent
            return

        if is_path_like(target):
            found = resolve_path(self.session.root, target)
        else:
            found = self.cwd.find_child_directory(target)

        if found is None:
            self._say(i18n.t("shell.no_dir", name=target))
            return
        self.cwd = found

    def do_ls(self, arg: str) -> None:
        """ls - List the contents of the current directory."""
        for text in list_contents(self.cwd):
            self._say(text)

    def do_pwd(self, arg: str) -> None:
        """pwd - Print the absolute path of the current directory."""
        self._say(absolute_path(self.cwd))

    def do_size(self, arg: str) -> None:
        """size - Total bytes held below the current directory."""
        self._say(i18n.t("shell.size", size=self.cwd.total_size()))

    def do_tree(self, arg: str) -> None:
        """tree [--out FILE] - Render the current directory, or save the whole tree."""
        if arg.strip():
            self.default(f"tree {arg}")
            return
        for text in render_tree(self.cwd):
            self._say(text)

    # -------------------------------------------------------------------------
    # EDITING
    # -------------------------------------------------------------------------

    def do_mkdir(self, arg: str) -> None:
        """mkdir <name> - Create a directory in the current directory."""
        name = arg.strip()
        if not name:
            self._say(i18n.t("shell.usage_name", command="mkdir"))
            return
        self.cwd.add_child_directory(name)
        logger.debug(f"Shell created directory '{name}' in '{self.cwd.name}'.")
        self._say(i18n.t("shell.mkdir", name=name))

    def do_touch(self, arg: str) -> None:
        """touch <name> <size> - Create a file in the current directory."""
        parts = arg.split()
        if len(parts) != 2:
            self._say(i18n.t("shell.usage_touch"))
            return

        name, raw_size = parts
        try:
            size = int(raw_size)
        except ValueError:
            size = -1
        if size < 0:
            self._say(i18n.t("shell.bad_size", value=raw_size))
            return

        self.cwd.add_file(name, size)
        self._say(i18n.t("shell.touch", name=name))

    def do_rm(self, arg: str) -> None:
        """rm <name> - Remove a file from the current directory."""
        name = arg.strip()
        if not name:
            self._say(i18n.t("shell.usage_name", command="rm"))
            return
        if not self.cwd.contains_file(name):
            self._say(i18n.t("cli.errors.not_found", name=name))
            return
        self.cwd.remove_file(name)
        self._say(i18n.t("shell.rm", name=name))

    def do_rmdir(self, arg: str) -> None:
        """rmdir <name> - Remove a subdirectory and everything below it."""
        name = arg.strip()
        if not name:
            self._say(i18n.t("shell.usage_name", command="rmdir"))
            return
        if self.cwd.find_child_directory(name) is None:
            self._say(i18n.t("shell.no_dir", name=name))
            return
        self.cwd.remove_child_directory(name)
        self._say(i18n.t("shell.rmdir", name=name))

    # -------------------------------------------------------------------------
    # HELP AND EXIT
    # -------------------------------------------------------------------------

    def do_help(self, arg: str) -> None:
        """help [command] - List the commands or show the usage of one."""
        topic = arg.strip()
        if topic in self._commands and topic not in _HIDDEN_COMMANDS:
            self._say(self._commands[topic].format_help().rstrip())
            return

        super().do_help(arg)
        if not topic:
            self._say(i18n.t("shell.tree_commands"))
            self.columnize(self._tree_command_names(), displaywidth=80)

    def do_exit(self, arg: str) -> bool:
        """exit - Save (when auto-export is on) and leave the shell."""
        if persist_state(self.session, self.config):
            self._say(i18n.t("shell.saved", path=self.config.get("state_file", "")))
        self._say(i18n.t("shell.bye"))
        return True

    do_quit = do_exit

    def do_EOF(self, arg: str) -> bool:
        self._say("")
        return self.do_exit(arg)

    # -------------------------------------------------------------------------
    # INTERNAL HELPERS
    # -------------------------------------------------------------------------

    def _say(self, text: str) -> None:
        self.stdout.write(f"{text}\n")

    def _update_prompt(self) -> None:
        self.prompt = i18n.t("shell.prompt", name=self.cwd.name)

    def _sync_cwd(self) -> None:
        """Fall back to the root when the current directory left the tree."""
        if self.session.root is None:
            self.session.new()
        if not self.cwd.is_descendant_of(self.session.root):
            self.cwd = self.session.root

    def _tree_command_names(self) -> List[str]:
        return sorted(name for name in self._commands if name not in _HIDDEN_COMMANDS)


def run_shell(
        session: FileSystemSession,
        config: Dict[str, Any],
        stdin: Optional[IO[str]] = None,
        stdout: Optional[IO[str]] = None,
) -> int:
    """
    Run the interactive loop until 'exit' or end of input.

    Ctrl+C abandons the current line and returns to the prompt.

    Returns:
        int: Process exit code.
    """
    shell = TreeShell(session, config, stdin=stdin, stdout=stdout)
    while True:
        try:
            shell.cmdloop()
            return 0
        except KeyboardInterrupt:
            shell.intro = None
            shell.stdout.write("^C\n")
