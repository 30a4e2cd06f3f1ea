"""
Recursive inlining of component fragments into HTML templates.

Each placeholder found by a single left-to-right scan is turned into an
explicit TokenResult; the output is assembled from the untouched text
between placeholders and each result's replacement. Fragments may contain
placeholders themselves, they are resolved by a recursive call on the
fragment text.

Missing fragments are not an error: the placeholder stays in the output.
Read failures and inclusion cycles are reported through the ErrorReporter
and leave the placeholder verbatim as well.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import List, Optional, Tuple

from .protocols import ErrorReporter, LoggingReporter
from .tokens import Placeholder, find_placeholders
from ..utils import read_file_text

DEFAULT_COMPONENTS_DIR = "components"


class TokenStatus(str, enum.Enum):
    INLINED = "inlined"
    MISSING = "missing"
    FAILED = "failed"
    CYCLE = "cycle"


@dataclass(frozen=True)
class TokenResult:
    """Outcome of one placeholder occurrence."""
    placeholder: Placeholder
    status: TokenStatus
    path: PurePosixPath
    depth: int = 0
    text: Optional[str] = None   # resolved fragment, only for INLINED
    error: str = ""

    @property
    def replacement(self) -> str:
        if self.status is TokenStatus.INLINED and self.text is not None:
            return self.text
        return self.placeholder.raw


@dataclass
class InlineResult:
    """Resolved text plus every placeholder outcome, nested ones included (pre-order)."""
    text: str
    tokens: List[TokenResult] = field(default_factory=list)

    @property
    def unresolved(self) -> List[TokenResult]:
        return [t for t in self.tokens if t.status is not TokenStatus.INLINED]


class TemplateInliner:
    """
    Resolves ``{app:{...}}``, ``{deferred:{...}}`` and ``{svg:{...}}``
    placeholders against the components tree.

    Usage:
        inliner = TemplateInliner(Path("."))
        html = inliner.resolve(read_file_text(Path("index.html")))

    The instance holds only read-only settings; every call is independent.
    """

    def __init__(
        self,
        root: Path = Path("."),
        components_dir: str = DEFAULT_COMPONENTS_DIR,
        reporter: Optional[ErrorReporter] = None,
    ):
        """
        Args:
            root: Working root; fragment paths are relative to it
            components_dir: Components folder below the root
            reporter: Receives per-placeholder failures (logging by default)
        """
        self.root = root
        self.components_dir = components_dir
        self.reporter: ErrorReporter = reporter or LoggingReporter()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def resolve(self, content: str) -> str:
        """Text with all resolvable placeholders replaced."""
        return self.resolve_detailed(content).text

    def resolve_detailed(self, content: str) -> InlineResult:
        collected: List[TokenResult] = []
        text = self._resolve(content, (), 0, collected)
        return InlineResult(text=text, tokens=collected)

    def resolve_file(self, path: Path) -> str:
        """Read a template and resolve it. Read errors of the template itself propagate."""
        return self.resolve(read_file_text(path))

    def fragment_relpath(self, placeholder: Placeholder) -> PurePosixPath:
        return placeholder.relpath(self.components_dir)

    def fragment_path(self, placeholder: Placeholder) -> Path:
        return self.root / self.fragment_relpath(placeholder)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _resolve(
        self,
        content: str,
        stack: Tuple[str, ...],
        depth: int,
        collected: List[TokenResult],
    ) -> str:
        pieces: List[str] = []
        pos = 0
        for placeholder in find_placeholders(content):
            pieces.append(content[pos:placeholder.start])
            result = self._resolve_token(placeholder, stack, depth, collected)
            pieces.append(result.replacement)
            pos = placeholder.end
        pieces.append(content[pos:])
        return "".join(pieces)

    def _resolve_token(
        self,
        placeholder: Placeholder,
        stack: Tuple[str, ...],
        depth: int,
        collected: List[TokenResult],
    ) -> TokenResult:
        rel = self.fragment_relpath(placeholder)
        key = rel.as_posix()
        slot = len(collected)

        def done(result: TokenResult) -> TokenResult:
            collected.insert(slot, result)
            return result

        path = self.root / rel
        if not path.exists():
            return done(TokenResult(placeholder, TokenStatus.MISSING, rel, depth))

        if key in stack:
            cycle = " -> ".join(stack[stack.index(key):] + (key,))
            message = f"Circular include dependency: {cycle}"
            self.reporter.report_error(message)
            return done(TokenResult(placeholder, TokenStatus.CYCLE, rel, depth, error=message))

        try:
            fragment = read_file_text(path)
        except (OSError, UnicodeDecodeError) as e:
            message = f"Failed to inline {placeholder.raw} from {key}: {e}"
            self.reporter.report_error(message)
            return done(TokenResult(placeholder, TokenStatus.FAILED, rel, depth, error=message))

        if placeholder.is_svg:
            fragment = f"<!-- START {key} -->\n{fragment}<!-- END {key} -->\n"

        text = self._resolve(fragment, stack + (key,), depth + 1, collected)
        return done(TokenResult(placeholder, TokenStatus.INLINED, rel, depth, text=text))


__all__ = [
    "DEFAULT_COMPONENTS_DIR",
    "TokenStatus",
    "TokenResult",
    "InlineResult",
    "TemplateInliner",
]
