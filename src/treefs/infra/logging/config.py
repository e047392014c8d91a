from __future__ import annotations

"""
Logging Configuration Models.

Declares the immutable settings consumed by the logging bootstrap and the
mapping between textual severity names and the numeric levels of the
standard 'logging' module.
"""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

# Textual severity aliases accepted from CLI flags and config.json
LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_LEVELS: FrozenSet[str] = frozenset(LEVEL_MAP)


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for a single logging bootstrap.

    Attributes:
        level: Minimum severity captured by every handler.
        console: Emit records on stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Size threshold that triggers a rollover.
        backup_count: Number of rolled-over files kept.
        console_fmt: Record layout for stderr.
        file_fmt: Record layout for the log file.
        datefmt: Timestamp layout for the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
