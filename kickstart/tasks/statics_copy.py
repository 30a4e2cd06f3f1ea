"""
Copy static files (images, scripts, vendor bundles) into the build
directory according to the ``build.statics.copy`` rules.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path, PurePosixPath
from typing import Optional

from .base import TaskContext
from ..config.model import CopyEntry
from ..log import has_forbidden_chars
from ..utils import build_pathspec, iter_files

logger = logging.getLogger(__name__)


def copy_statics(ctx: TaskContext) -> None:
    entries = ctx.cfg.build.statics.copy
    if not entries:
        logger.warning("\tNo copy configuration found. No files were copied.")
        return

    for entry in entries:
        if ctx.mode not in entry.options.modes():
            continue
        copy_entry(ctx, entry)


def copy_entry(ctx: TaskContext, entry: CopyEntry) -> int:
    """Copy the files of one rule; returns the number of copied files."""
    opts = entry.options
    source_dir = ctx.working_dir / opts.source_dir if opts.source_dir else ctx.working_dir
    destination_dir = ctx.working_dir / opts.destination_dir if opts.destination_dir else ctx.build_dir

    if not source_dir.is_dir():
        logger.warning("\tThe path %s doesn't exist.", ctx.rel(source_dir))
        return 0

    include = build_pathspec(entry.files)
    exclude = build_pathspec(opts.ignore)

    # Never copy the build output into itself.
    inside_build = _relative_build_prefix(source_dir, ctx.build_dir)
    if inside_build is not None:
        exclude = build_pathspec([*opts.ignore, f"/{inside_build}/"])

    copied = 0
    for rel in iter_files(source_dir, include, exclude):
        source = source_dir / rel
        if opts.flatten:
            target = destination_dir / PurePosixPath(rel).name
        else:
            target = destination_dir / rel

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
        except OSError as e:
            ctx.file_error(source, e)
            continue

        copied += 1
        ctx.file_event("writeto", source, target)
        if has_forbidden_chars(rel):
            logger.warning("\tThis filepath contains forbidden characters for some file systems: %s", rel)

    return copied


def _relative_build_prefix(source_dir: Path, build_dir: Path) -> Optional[str]:
    try:
        rel = build_dir.resolve().relative_to(source_dir.resolve()).as_posix()
    except ValueError:
        return None
    return None if rel == "." else rel
