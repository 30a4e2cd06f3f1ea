"""
Include placeholders of HTML templates.

    {app:{teaser}}              → components/app/teaser/teaser.html
    {app:{teaser}:{wide}}       → components/app/teaser/wide.html
    {deferred:{map}}            → components/app/_deferred/map/map.html
    {svg:{icon-sprite}}         → components/app/_svg/icon-sprite/icon-sprite.svg
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Iterator, Optional

KINDS = ("app", "deferred", "svg")

_PLACEHOLDER_RE = re.compile(
    r"\{(?P<kind>app|deferred|svg):"
    r"\{(?P<category>[\w\-]*)\}"
    r"(?::\{(?P<name>[\w\-]+)\})?"
    r"\}"
)


@dataclass(frozen=True)
class Placeholder:
    """One include token with its span in the scanned text."""
    kind: str
    category: str
    name: Optional[str]
    raw: str
    start: int
    end: int

    @property
    def is_svg(self) -> bool:
        return self.kind == "svg"

    @property
    def folder(self) -> str:
        """Kind folder below the components root: app, app/_deferred, app/_svg."""
        return "app" if self.kind == "app" else f"app/_{self.kind}"

    @property
    def extension(self) -> str:
        return ".svg" if self.is_svg else ".html"

    @property
    def file_name(self) -> str:
        return (self.name or self.category) + self.extension

    def relpath(self, components_dir: str = "components") -> PurePosixPath:
        """Fragment location relative to the working root."""
        return PurePosixPath(components_dir, self.folder, self.category, self.file_name)


def find_placeholders(text: str) -> Iterator[Placeholder]:
    """Placeholders of *text* from left to right, non-overlapping."""
    for m in _PLACEHOLDER_RE.finditer(text):
        yield Placeholder(
            kind=m.group("kind"),
            category=m.group("category"),
            name=m.group("name"),
            raw=m.group(0),
            start=m.start(),
            end=m.end(),
        )


def parse_placeholder(token: str) -> Placeholder:
    """Parse a single complete token, e.g. ``{app:{teaser}:{wide}}``."""
    m = _PLACEHOLDER_RE.fullmatch(token)
    if m is None:
        raise ValueError(f"Not an include placeholder: {token!r}")
    return Placeholder(
        kind=m.group("kind"),
        category=m.group("category"),
        name=m.group("name"),
        raw=token,
        start=0,
        end=len(token),
    )


__all__ = ["KINDS", "Placeholder", "find_placeholders", "parse_placeholder"]
