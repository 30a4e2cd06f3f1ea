"""Shared helpers: text I/O, glob matching via PathSpec, slugs."""

from __future__ import annotations

import os
import re
import unicodedata
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

import pathspec
from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern


# ---------------------------------------------------------------------------
# I/O
# ---------------------------------------------------------------------------

def read_file_text(path: Path) -> str:
    """Read the whole file as UTF-8 (strict: broken bytes raise UnicodeDecodeError)."""
    with path.open(encoding="utf-8") as f:
        return f.read()


def write_file_text(path: Path, text: str) -> None:
    """Write UTF-8 text, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)


# ---------------------------------------------------------------------------
# Glob patterns → PathSpec
# ---------------------------------------------------------------------------

def build_pathspec(patterns: Iterable[str]) -> Optional[PathSpec]:
    """
    PathSpec with git wildmatch semantics for the given patterns.
    Returns None for an empty pattern list (nothing matches).
    """
    lines: List[str] = [p.strip() for p in patterns if p and p.strip()]
    if not lines:
        return None
    return pathspec.PathSpec.from_lines(GitWildMatchPattern, lines)


def iter_files(
    root: Path,
    include: Optional[PathSpec],
    exclude: Optional[PathSpec] = None,
) -> Iterator[str]:
    """
    POSIX paths (relative to *root*) of all files matching *include*
    and not matching *exclude*, in sorted order.
    • skips .git
    • a missing root yields nothing
    """
    if include is None or not root.is_dir():
        return

    found: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        if ".git" in dirnames:
            dirnames.remove(".git")

        for fn in filenames:
            rel_posix = Path(dirpath, fn).relative_to(root).as_posix()
            if not include.match_file(rel_posix):
                continue
            if exclude is not None and exclude.match_file(rel_posix):
                continue
            found.append(rel_posix)

    yield from sorted(found)


def iter_dirs_recursive(root: Path) -> List[Path]:
    """*root* itself followed by every subdirectory (depth-first, sorted)."""
    out: List[Path] = [root]
    for child in sorted(p for p in root.iterdir() if p.is_dir()):
        out.extend(iter_dirs_recursive(child))
    return out


# ---------------------------------------------------------------------------
# Slugs
# ---------------------------------------------------------------------------

_slug_ws = re.compile(r"[\s_]+")
_slug_keep = re.compile(r"[^a-z0-9\-]+")


def slugify(title: str) -> str:
    """
    File-name friendly slug:
      • NFKD normalisation, ASCII only, lower case
      • whitespace and underscores → '-'
      • other punctuation dropped, repeated '-' squeezed
    """
    t = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii").lower()
    t = _slug_ws.sub("-", t.strip())
    t = _slug_keep.sub("", t)
    t = re.sub(r"-{2,}", "-", t).strip("-")
    return t


__all__ = [
    "read_file_text",
    "write_file_text",
    "build_pathspec",
    "iter_files",
    "iter_dirs_recursive",
    "slugify",
]
