"""
In-place minification of the build output (prod mode only).

    css-minify   build/assets/css/*.css      rcssmin
    js-minify    build/assets/js/**/*.js     rjsmin
    html-minify  build/*.html                htmlmin
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

import htmlmin
import rcssmin
import rjsmin

from .base import TaskContext
from ..config.model import HtmlMinifyCfg
from ..utils import read_file_text, write_file_text

Minifier = Callable[[str], str]


def minify_files(ctx: TaskContext, files: Iterable[Path], minifier: Minifier) -> int:
    """Rewrite every file with its minified text; a failing file is logged and skipped."""
    done = 0
    for path in files:
        try:
            text = read_file_text(path)
            write_file_text(path, minifier(text))
        except (OSError, UnicodeDecodeError, ValueError) as e:
            ctx.file_error(path, e)
            continue
        done += 1
        ctx.file_event("write", path)
    return done


def _prod_only(ctx: TaskContext) -> bool:
    if ctx.is_dev:
        ctx.skip("Minification is disabled in dev mode.")
        return False
    return True


def minify_css_text(text: str, keep_bang_comments: bool = True) -> str:
    return rcssmin.cssmin(text, keep_bang_comments=keep_bang_comments)


def minify_js_text(text: str, keep_bang_comments: bool = True) -> str:
    return rjsmin.jsmin(text, keep_bang_comments=keep_bang_comments)


def minify_html_text(text: str, cfg: HtmlMinifyCfg) -> str:
    return htmlmin.minify(
        text,
        remove_comments=cfg.remove_comments,
        remove_empty_space=cfg.remove_empty_space,
        reduce_boolean_attributes=cfg.reduce_boolean_attributes,
        remove_optional_attribute_quotes=cfg.remove_optional_attribute_quotes,
    )


def minify_css(ctx: TaskContext) -> None:
    if not _prod_only(ctx):
        return
    css_dir = ctx.build_subdir(ctx.cfg.dir_assets_css)
    keep = ctx.cfg.build.css.minify.keep_bang_comments
    files = sorted(css_dir.glob("*.css")) if css_dir.is_dir() else []
    minify_files(ctx, files, lambda text: minify_css_text(text, keep))


def minify_js(ctx: TaskContext) -> None:
    if not _prod_only(ctx):
        return
    js_dir = ctx.build_subdir(ctx.cfg.dir_assets_js)
    keep = ctx.cfg.build.js.minify.keep_bang_comments
    files = sorted(p for p in js_dir.rglob("*.js") if p.is_file()) if js_dir.is_dir() else []
    minify_files(ctx, files, lambda text: minify_js_text(text, keep))


def minify_html(ctx: TaskContext) -> None:
    if not _prod_only(ctx):
        return
    cfg = ctx.cfg.build.html.minify
    build = ctx.build_dir
    files = sorted(p for p in build.glob("*.html") if p.is_file()) if build.is_dir() else []
    minify_files(ctx, files, lambda text: minify_html_text(text, cfg))
