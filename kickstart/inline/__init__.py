"""
Placeholder inlining for HTML templates.
"""

from __future__ import annotations

from .inliner import (
    DEFAULT_COMPONENTS_DIR,
    InlineResult,
    TemplateInliner,
    TokenResult,
    TokenStatus,
)
from .protocols import ErrorReporter, LoggingReporter
from .tokens import KINDS, Placeholder, find_placeholders, parse_placeholder

__all__ = [
    "DEFAULT_COMPONENTS_DIR",
    "ErrorReporter",
    "InlineResult",
    "KINDS",
    "LoggingReporter",
    "Placeholder",
    "TemplateInliner",
    "TokenResult",
    "TokenStatus",
    "find_placeholders",
    "parse_placeholder",
]
