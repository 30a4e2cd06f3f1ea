"""
Collaborator interfaces of the inliner.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class ErrorReporter(Protocol):
    """
    Sink for per-placeholder failures.

    A reported error never aborts the resolution: the failing placeholder
    stays in the output verbatim and its siblings are still resolved.
    """

    def report_error(self, message: str) -> None:
        ...


class LoggingReporter:
    """Default reporter: forwards messages to a logger at ERROR level."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("kickstart.inline")

    def report_error(self, message: str) -> None:
        self.logger.error(message)


__all__ = ["ErrorReporter", "LoggingReporter"]
