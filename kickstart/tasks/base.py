"""
Task runtime: the context every task receives and the wrapper that
times a task, prints its banners and turns the outcome into a TaskReport.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..config.model import Config, Mode
from ..config.paths import join_parts
from ..errors import KickstartUserError
from ..log import (
    MESSAGE_ABORT_TASK,
    MESSAGE_END_TASK,
    MESSAGE_START_TASK,
    format_file_event,
)
from ..report import FileEvent, TaskReport

logger = logging.getLogger("kickstart.tasks")


@dataclass
class TaskContext:
    """
    Everything a task needs: where to read, where to write, in which mode.

    root is the directory the configuration was loaded from; the working
    and build directories are resolved against it.
    """
    root: Path
    cfg: Config
    mode: Mode = "dev"
    events: List[FileEvent] = field(default_factory=list)
    skipped: Optional[str] = None
    file_errors: int = 0

    @property
    def is_dev(self) -> bool:
        return self.mode == "dev"

    @property
    def working_dir(self) -> Path:
        return self.root / self.cfg.dir_working

    @property
    def build_dir(self) -> Path:
        return self.root / self.cfg.dir_build

    @property
    def components_dir(self) -> Path:
        return self.working_dir / self.cfg.components_dir

    def build_subdir(self, parts: Sequence[str]) -> Path:
        return join_parts(self.build_dir, parts)

    def rel(self, path: Path) -> str:
        """POSIX path relative to the root when possible (for logs and reports)."""
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()

    # ---- events ----

    def file_event(self, operation: str, path: Path, destination: Optional[Path] = None) -> None:
        src = self.rel(path)
        dst = self.rel(destination) if destination is not None else None
        self.events.append(FileEvent(operation=operation, path=src, destination=dst))
        logger.debug("\t%s", format_file_event(operation, src, dst or ""))

    def file_error(self, path: Path, error: BaseException) -> None:
        """A single file failed; the task goes on with the others."""
        self.file_errors += 1
        logger.error("\t%s: %s", self.rel(path), error)

    def skip(self, reason: str) -> None:
        self.skipped = reason
        logger.info("\t%s", reason)

    def reset(self) -> None:
        self.events = []
        self.skipped = None
        self.file_errors = 0


TaskFn = Callable[[TaskContext], None]


def run_task(name: str, fn: TaskFn, ctx: TaskContext) -> TaskReport:
    """
    Run one task with banners and timing.

    User errors and I/O errors abort the task (reported as failed);
    anything else is a bug and propagates.
    """
    ctx.reset()
    logger.info('%s "%s":', MESSAGE_START_TASK, name)
    started = time.perf_counter()

    try:
        fn(ctx)
    except (KickstartUserError, OSError) as e:
        logger.error('%s "%s" because of: %s', MESSAGE_ABORT_TASK, name, e)
        return TaskReport(
            name=name,
            status="failed",
            duration_ms=_elapsed_ms(started),
            files=list(ctx.events),
            error=str(e),
        )

    elapsed = _elapsed_ms(started)
    logger.info('%s "%s" in %dms.', MESSAGE_END_TASK, name, elapsed)
    return TaskReport(
        name=name,
        status="skipped" if ctx.skipped else "ok",
        duration_ms=elapsed,
        files=list(ctx.events),
    )


def _elapsed_ms(started: float) -> int:
    return int(round((time.perf_counter() - started) * 1000))


__all__ = ["TaskContext", "TaskFn", "run_task"]
