from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Literal

from src.core.contracts import AnalysisParameters


class RunPhase(str, Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    COMPLETE = "COMPLETE"


NotificationLevel = Literal["info", "success", "warning", "error"]


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str
    kind: str = "status"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class RunStatus:
    phase: RunPhase = RunPhase.IDLE
    progress: int = 0
    message: str = ""
    stage_index: int = 0
    started_at_utc: str | None = None
    finished_at_utc: str | None = None
    parameters: AnalysisParameters | None = None

    @property
    def is_running(self) -> bool:
        return self.phase == RunPhase.RUNNING

    @property
    def is_complete(self) -> bool:
        return self.phase == RunPhase.COMPLETE

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase.value,
            "progress": int(self.progress),
            "message": self.message,
            "stage_index": int(self.stage_index),
            "started_at_utc": self.started_at_utc,
            "finished_at_utc": self.finished_at_utc,
            "parameters": self.parameters.to_dict() if self.parameters else None,
        }
