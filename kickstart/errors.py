"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from KickstartUserError.

Programming errors and bugs should NOT inherit from KickstartUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import List


class KickstartUserError(Exception):
    """
    Base class for all user-facing errors of the build toolkit.

    These errors indicate problems that the user can fix:
    configuration issues, unknown task names, missing directories, etc.
    """
    pass


class UnknownTaskError(KickstartUserError):
    """Raised when a task name is not registered."""
    def __init__(self, name: str, available: List[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown task '{name}'. Available: {', '.join(available)}"
        )


__all__ = ["KickstartUserError", "UnknownTaskError"]
