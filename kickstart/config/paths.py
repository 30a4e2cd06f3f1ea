"""
File layout of a kickstart project.

Single source of truth for the configuration file name and the
directory structure below the working root.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

CFG_FILE = "kickstart.yaml"


def cfg_path(root: Path) -> Path:
    """Path to the kickstart.yaml of the working root."""
    return root / CFG_FILE


def join_parts(base: Path, parts: Sequence[str]) -> Path:
    """
    Join a path configured as a list of segments (["assets", "css"])
    onto *base*; keeps configuration free of separator issues.
    """
    out = base
    for part in parts:
        out = out / part
    return out


__all__ = ["CFG_FILE", "cfg_path", "join_parts"]
