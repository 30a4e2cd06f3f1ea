from __future__ import annotations

from .load import apply_overrides, load_config, sass_exclude_pattern
from .model import (
    MODES,
    BuildCfg,
    Config,
    ConsoleCfg,
    CopyEntry,
    CopyOptions,
    HtmlMinifyCfg,
    ImageMinifyCfg,
    SassCfg,
    SvgSpriteCfg,
)
from .paths import CFG_FILE, cfg_path, join_parts
from .typed import ConfigCoerceError, build_typed

__all__ = [
    "MODES",
    "BuildCfg",
    "CFG_FILE",
    "Config",
    "ConfigCoerceError",
    "ConsoleCfg",
    "CopyEntry",
    "CopyOptions",
    "HtmlMinifyCfg",
    "ImageMinifyCfg",
    "SassCfg",
    "SvgSpriteCfg",
    "apply_overrides",
    "build_typed",
    "cfg_path",
    "join_parts",
    "load_config",
    "sass_exclude_pattern",
]
