"""
Console logging for build tasks.

One handler on the ``kickstart`` package logger; its level follows the
``console.<mode>`` switches of the configuration:

* quiet   → WARNING (only problems)
* verbose → DEBUG   (a line per processed file)
* default → INFO    (task start/finish)
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from .config.model import ConsoleCfg

LOGGER_NAME = "kickstart"

_LOG = logging.getLogger(LOGGER_NAME)

MESSAGE_START_TASK = ">>> Running task"
MESSAGE_END_TASK = "<<< Finished task"
MESSAGE_ABORT_TASK = ">>> Aborting task"

# Characters some file systems refuse in file names.
FORBIDDEN_PATH_CHARS = frozenset("!@#$%^&*()+=[]{};':\"|,<>? ")

_FILE_OPERATIONS = {
    "message": "+++ {path}",
    "proceed": "Proceed file {path}",
    "copy": "Copy file to {path}",
    "writeto": "Write {path} → {dest}",
    "write": "Write file to {path}",
    "sourcemap": "Sourcemap generated to {path}",
    "change": "File changed: {path}",
}


def setup_logging(console: Optional[ConsoleCfg] = None) -> logging.Logger:
    """
    Install the console handler once and (re)apply the level.
    KICKSTART_DEBUG in the environment forces DEBUG.
    """
    if not getattr(setup_logging, "_inited", False):
        setup_logging._inited = True  # type: ignore[attr-defined]
        if not _LOG.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            _LOG.addHandler(h)

    _LOG.setLevel(level_for(console))
    return _LOG


def level_for(console: Optional[ConsoleCfg]) -> int:
    if os.environ.get("KICKSTART_DEBUG"):
        return logging.DEBUG
    if console is None:
        return logging.INFO
    if console.quiet:
        return logging.WARNING
    if console.verbose:
        return logging.DEBUG
    return logging.INFO


def format_file_event(operation: str, path: str, destination: str = "") -> str:
    """Human readable line for a file event (unknown operations get a generic text)."""
    template = _FILE_OPERATIONS.get(operation, "Did something with {path}")
    return template.format(path=path, dest=destination)


def has_forbidden_chars(rel_path: str) -> bool:
    return any(ch in FORBIDDEN_PATH_CHARS for ch in rel_path)


__all__ = [
    "LOGGER_NAME",
    "MESSAGE_START_TASK",
    "MESSAGE_END_TASK",
    "MESSAGE_ABORT_TASK",
    "setup_logging",
    "level_for",
    "format_file_event",
    "has_forbidden_chars",
]
