"""
Copy the HTML templates of the working directory into the build
directory with their component placeholders inlined.
"""

from __future__ import annotations

import logging

from .base import TaskContext
from ..inline import TemplateInliner, TokenStatus
from ..utils import read_file_text, write_file_text

logger = logging.getLogger(__name__)


def replace_html(ctx: TaskContext) -> None:
    inliner = TemplateInliner(ctx.working_dir, components_dir=ctx.cfg.components_dir)
    ctx.build_dir.mkdir(parents=True, exist_ok=True)

    # Only the top level: sub-directories hold components, not pages.
    for source in sorted(ctx.working_dir.glob("*.html")):
        if not source.is_file():
            continue
        destination = ctx.build_dir / source.name

        try:
            result = inliner.resolve_detailed(read_file_text(source))
            write_file_text(destination, result.text)
        except (OSError, UnicodeDecodeError) as e:
            ctx.file_error(source, e)
            continue

        for token in result.unresolved:
            if token.status is TokenStatus.MISSING:
                logger.warning(
                    "\t%s: unresolved placeholder %s (no file %s)",
                    ctx.rel(source), token.placeholder.raw, token.path,
                )
        ctx.file_event("writeto", source, destination)
