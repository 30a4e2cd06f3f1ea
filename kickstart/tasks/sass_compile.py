"""
Compile the top-level stylesheets of the components directory with libsass.

    components/main.scss  →  build/assets/css/main.css (+ main.css.map in dev)

Partials (``_*.scss``) are only reachable through @use/@import and are
never compiled on their own.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Pattern, Tuple

import sass

from .base import TaskContext
from ..config.load import sass_exclude_pattern
from ..config.model import SassCfg
from ..utils import write_file_text

logger = logging.getLogger(__name__)


def exclude_pattern(cfg: SassCfg) -> Optional[Pattern[str]]:
    return sass_exclude_pattern(cfg.files_exclude)


def collect_sources(components_dir: Path, cfg: SassCfg) -> List[Path]:
    if not components_dir.is_dir():
        return []
    excluded = exclude_pattern(cfg)
    out: List[Path] = []
    for p in sorted(components_dir.glob("*.scss")):
        if p.name.startswith("_") or not p.is_file():
            continue
        if excluded is not None and excluded.search(p.name):
            logger.debug("\tExcluded %s", p.name)
            continue
        out.append(p)
    return out


def compile_file(source: Path, css_path: Path, cfg: SassCfg, *, source_map: bool) -> Tuple[str, Optional[str]]:
    """Returns (css, source map or None); sass.CompileError propagates."""
    include_paths = [str(source.parent), *cfg.include_paths]
    if source_map:
        css, smap = sass.compile(
            filename=str(source),
            output_style=cfg.output_style,
            include_paths=include_paths,
            source_map_filename=str(css_path) + ".map",
            output_filename_hint=str(css_path),
            source_map_contents=True,
        )
        return css, smap
    css = sass.compile(
        filename=str(source),
        output_style=cfg.output_style,
        include_paths=include_paths,
    )
    return css, None


def compile_sass(ctx: TaskContext) -> None:
    cfg = ctx.cfg.build.css.sass
    css_dir = ctx.build_subdir(ctx.cfg.dir_assets_css)
    css_dir.mkdir(parents=True, exist_ok=True)

    sources = collect_sources(ctx.components_dir, cfg)
    if not sources:
        logger.warning("\tNo .scss files found in %s", ctx.rel(ctx.components_dir))
        return

    for source in sources:
        css_path = css_dir / (source.stem + ".css")
        ctx.file_event("proceed", source)
        try:
            css, smap = compile_file(source, css_path, cfg, source_map=ctx.is_dev)
        except sass.CompileError as e:
            ctx.file_error(source, e)
            continue

        write_file_text(css_path, css)
        ctx.file_event("write", css_path)
        if smap is not None:
            map_path = css_path.with_name(css_path.name + ".map")
            write_file_text(map_path, smap)
            ctx.file_event("sourcemap", map_path)
