from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of configuration
sources (defaults, config.json and CLI overrides), restoring the persisted
tree from the state file, command dispatch, auto-export of mutated trees and
result rendering.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from treefs.core.services.validator import validate_config
from treefs.domain.config import get_default_config, load_config
from treefs.infra.fs import get_default_state_path, normalize_path
from treefs.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from treefs.interface.cli import args as cli_args
from treefs.interface.cli.commands import (
    EXIT_FAILED,
    EXIT_INVALID,
    EXIT_OK,
    CommandResult,
    execute,
)
from treefs.interface.cli.shell import run_shell
from treefs.interface.cli.state import build_session, persist_state, restore_state
from treefs.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_INTERRUPTED = 130

# Commands that replace the tree and need no restored state
_REPLACING_COMMANDS = frozenset({"load", "new", "import"})

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 invalid input, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console only until the configuration is known)
    configure_logging(LoggingConfig(level="DEBUG" if args.debug else "INFO", console=True))

    try:
        return _run(parser, args)
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        msg = i18n.t("cli.errors.unexpected", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILED
    finally:
        shutdown_logging()


def _run(parser: Any, args: Any) -> int:
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (Default vs Persistent state)
    base_conf = get_default_config() if args.use_defaults else load_config()

    # 4. Map and merge command-line overrides
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)

    # 5. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    clean_conf["state_file"] = normalize_path(clean_conf["state_file"], get_default_state_path())

    # 6. Logging re-bootstrap with the configured level and log file
    log_file = clean_conf.get("log_file") or None
    configure_logging(
        LoggingConfig(
            level=clean_conf["log_level"],
            console=True,
            log_file=normalize_path(log_file, "") if log_file else None,
        ),
        force=True,
    )

    # Short-circuit if configuration dump is requested
    if args.command == "dump-config":
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if not args.command:
        parser.print_help()
        return EXIT_INVALID

    session = build_session(clean_conf)

    # 7. Restore the persisted tree
    if args.command not in _REPLACING_COMMANDS:
        if not restore_state(session, clean_conf):
            msg = i18n.t("cli.errors.import_failed", path=clean_conf["state_file"])
            print(f"ERROR: {msg}", file=sys.stderr)
            return EXIT_INVALID

    if args.command == "shell":
        return run_shell(session, clean_conf)

    # 8. Command execution phase
    result = execute(session, args)

    if result.ok and cli_args.is_mutating(args.command):
        persist_state(session, clean_conf)

    # 9. Output rendering phase
    if args.json_output:
        print(json.dumps(_result_to_dict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return result.exit_code

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged and None values leave the base untouched.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = ["state_file", "auto_import", "auto_export", "log_level", "log_file"]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _result_to_dict(result: CommandResult) -> Dict[str, Any]:
    return {
        "ok": result.ok,
        "command": result.command,
        "lines": list(result.lines),
        "data": dict(result.payload),
    }


def _print_human_summary(result: CommandResult) -> None:
    """Print result lines to stdout, or to stderr when the command failed."""
    if not result.ok:
        for line in result.lines:
            print(f"ERROR: {line}", file=sys.stderr)
        return

    for line in result.lines:
        print(line)

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
