"""
Machine readable run report (``--json``).
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class FileEvent(BaseModel):
    operation: str
    path: str
    destination: Optional[str] = None


class TaskReport(BaseModel):
    name: str
    status: Literal["ok", "skipped", "failed"] = "ok"
    duration_ms: int = 0
    files: List[FileEvent] = Field(default_factory=list)
    error: Optional[str] = None


class BuildReport(BaseModel):
    mode: str
    tasks: List[TaskReport] = Field(default_factory=list)

    @property
    def failed(self) -> bool:
        return any(t.status == "failed" for t in self.tasks)


__all__ = ["FileEvent", "TaskReport", "BuildReport"]
