from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import Config
from .paths import cfg_path
from .typed import ConfigCoerceError, build_typed

_yaml = YAML(typ="safe")

_SASS_EXCLUDE_PATH = ("build", "css", "sass", "files_exclude")


def load_raw(path: Path) -> Dict[str, Any]:
    """Top-level mapping of a YAML file (empty file → {})."""
    try:
        with path.open(encoding="utf-8") as f:
            raw = _yaml.load(f) or {}
    except YAMLError as e:
        raise ConfigCoerceError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigCoerceError(f"expected a mapping at the top of {path}, got {type(raw).__name__}")
    return raw


def load_config(root: Path, path: Optional[Path] = None) -> Config:
    """
    Load kickstart.yaml of the working root.

    • No file → defaults.
    • User keys override defaults; nested sections keep the defaults of
      keys they do not mention.
    • Unknown keys, wrong types and broken regexes raise ConfigCoerceError
      naming the key path.
    """
    path = path or cfg_path(root)
    if not path.is_file():
        return Config()
    cfg = build_typed(Config, load_raw(path))
    sass_exclude_pattern(cfg.build.css.sass.files_exclude)
    return cfg


def apply_overrides(cfg: Config, *, dir_build: Optional[str] = None, dir_working: Optional[str] = None) -> Config:
    """Command line values win over the file."""
    if dir_build:
        cfg.dir_build = dir_build
    if dir_working:
        cfg.dir_working = dir_working
    return cfg


def sass_exclude_pattern(patterns: List[str]) -> Optional[Pattern[str]]:
    """
    One regex matching the end of excluded file names, or None.
    A pattern that does not compile is a configuration error.
    """
    if not patterns:
        return None
    try:
        return re.compile("(" + "|".join(patterns) + ")$")
    except re.error as e:
        raise ConfigCoerceError(f"invalid regular expression: {e}", _SASS_EXCLUDE_PATH) from e


__all__ = ["load_config", "load_raw", "apply_overrides", "sass_exclude_pattern"]
