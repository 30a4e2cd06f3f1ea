"""Delete the build directory and create it again, empty."""

from __future__ import annotations

import shutil

from .base import TaskContext


def clean(ctx: TaskContext) -> None:
    build = ctx.build_dir
    if build.resolve() == ctx.root.resolve():
        raise OSError(f"Refusing to clean the working root itself: {build}")

    if build.exists():
        shutil.rmtree(build)
        ctx.file_event("message", build)

    build.mkdir(parents=True, exist_ok=True)
