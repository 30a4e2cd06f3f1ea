"""
Task registry.

Tasks are plain functions ``(TaskContext) -> None`` registered under the
command name the CLI exposes. ``build`` runs a fixed sequence of them.
"""

from __future__ import annotations

from typing import Dict, List

from .base import TaskContext, TaskFn, run_task
from .clean import clean
from .html_replace import replace_html
from .image_minify import minify_images
from .minify import minify_css, minify_html, minify_js
from .sass_compile import compile_sass
from .statics_copy import copy_statics
from .svg_sprite import svg_sprite
from ..errors import UnknownTaskError
from ..report import BuildReport

TASKS: Dict[str, TaskFn] = {
    "clean": clean,
    "svg-sprite": svg_sprite,
    "sass-compile": compile_sass,
    "statics-copy": copy_statics,
    "html-replace": replace_html,
    "image-minify": minify_images,
    "css-minify": minify_css,
    "js-minify": minify_js,
    "html-minify": minify_html,
}

# Sprites are generated before html-replace so pages can inline them.
BUILD_SEQUENCE: List[str] = [
    "clean",
    "svg-sprite",
    "sass-compile",
    "statics-copy",
    "html-replace",
    "image-minify",
    "css-minify",
    "js-minify",
    "html-minify",
]


def task_names() -> List[str]:
    return list(TASKS)


def get_task(name: str) -> TaskFn:
    try:
        return TASKS[name]
    except KeyError:
        raise UnknownTaskError(name, task_names()) from None


def run_named(names: List[str], ctx: TaskContext, *, stop_on_failure: bool = True) -> BuildReport:
    """Run tasks in order; by default the first failed task stops the run."""
    report = BuildReport(mode=ctx.mode)
    for name in names:
        task_report = run_task(name, get_task(name), ctx)
        report.tasks.append(task_report)
        if stop_on_failure and task_report.status == "failed":
            break
    return report


def run_build(ctx: TaskContext) -> BuildReport:
    return run_named(BUILD_SEQUENCE, ctx)


__all__ = [
    "BUILD_SEQUENCE",
    "TASKS",
    "TaskContext",
    "get_task",
    "run_build",
    "run_named",
    "run_task",
    "task_names",
]
