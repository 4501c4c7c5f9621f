"""Analysis run controller.

Owns the run lifecycle (IDLE -> RUNNING -> COMPLETE), the uploaded dataset,
the analysis parameters and the latest result bundle. Progress is reported
through notifications delivered to subscribers; the controller never waits
on them.

Stage transitions are driven by :meth:`RunController.advance`, so a caller can
step the sequence as real work completes. :meth:`RunController.run_to_completion`
paces the steps with a fixed sleep, which is what the dashboard does.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from src.config import RunConfig, get_run_config
from src.core.contracts import AnalysisParameters, ResultBundle, UploadedDataset
from src.core.parameters import default_parameters, update_parameters
from src.event_log import utc_now_iso
from src.jobs.engine import AnalysisEngine, get_engine
from src.jobs.stages import ANALYSIS_STAGES, N_STAGES, Stage
from src.jobs.types import Notification, NotificationLevel, RunPhase, RunStatus

logger = logging.getLogger(__name__)

NO_DATASET_MESSAGE = "No dataset selected. Please upload a Raman spectroscopy file first."
ALREADY_RUNNING_MESSAGE = "An analysis is already running."

Subscriber = Callable[[Notification], None]


class RunController:
    def __init__(
        self,
        *,
        engine: AnalysisEngine | None = None,
        config: RunConfig | None = None,
        subscribers: list[Subscriber] | None = None,
    ) -> None:
        self.config = config or get_run_config()
        self.engine = engine or get_engine(self.config)
        self.dataset: UploadedDataset | None = None
        self.parameters: AnalysisParameters = default_parameters()
        self.status = RunStatus()
        self.results: ResultBundle | None = None
        self._run_dataset: UploadedDataset | None = None
        self._subscribers: list[Subscriber] = list(subscribers or [])

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def _emit(self, level: NotificationLevel, message: str, kind: str = "status") -> None:
        note = Notification(level=level, message=message, kind=kind)
        log_level = logging.ERROR if level == "error" else logging.WARNING if level == "warning" else logging.INFO
        logger.log(log_level, "[%s] %s", kind, message)
        for callback in list(self._subscribers):
            callback(note)

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def select_dataset(self, file: Any) -> UploadedDataset:
        """Replace the current dataset. The run state is left untouched."""
        dataset = file if isinstance(file, UploadedDataset) else UploadedDataset.from_upload(file)
        self.dataset = dataset
        self._emit("success", f"File '{dataset.name}' uploaded successfully", kind="upload")
        return dataset

    def update_parameter(self, name: str, raw_value: Any) -> int | float:
        """Set one parameter from raw input; invalid input becomes the default."""
        self.parameters = update_parameters(self.parameters, name, raw_value)
        return getattr(self.parameters, name)

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------

    @property
    def phase(self) -> RunPhase:
        return self.status.phase

    @property
    def run_parameters(self) -> AnalysisParameters | None:
        """Parameters snapshotted when the current or last run started."""
        return self.status.parameters

    @property
    def run_dataset(self) -> UploadedDataset | None:
        return self._run_dataset

    def start_run(self) -> bool:
        if self.dataset is None:
            self._emit("error", NO_DATASET_MESSAGE, kind="error")
            return False
        if self.status.is_running:
            self._emit("warning", ALREADY_RUNNING_MESSAGE, kind="rejected")
            return False

        self.results = None
        self._run_dataset = self.dataset
        self.status = RunStatus(
            phase=RunPhase.RUNNING,
            progress=0,
            message="",
            stage_index=0,
            started_at_utc=utc_now_iso(),
            parameters=self.parameters,
        )
        logger.info(
            "Run started on %s (%d bytes) with %s",
            self.dataset.name,
            self.dataset.size,
            self.parameters,
        )
        return True

    def advance(self) -> Stage | None:
        """Apply the next stage. Returns None when no run is in progress."""
        if not self.status.is_running:
            return None

        if self.status.stage_index >= N_STAGES:
            # Every stage was applied but the results were never produced.
            self._complete()
            self._emit_complete()
            return None

        stage = ANALYSIS_STAGES[self.status.stage_index]
        self.status.stage_index += 1
        self.status.progress = stage.percent
        self.status.message = stage.message
        last = self.status.stage_index >= N_STAGES
        # The transition is finished before any subscriber sees it.
        if last:
            self._complete()

        self._emit("info", stage.message, kind="progress")
        if last:
            self._emit_complete()
        return stage

    def _complete(self) -> None:
        try:
            bundle = self.engine.produce(self._run_dataset, self.status.parameters)
        except Exception:
            logger.exception("Result generation failed; run reverted to idle")
            self._reset_to_idle()
            raise

        self.results = bundle
        self.status.phase = RunPhase.COMPLETE
        self.status.finished_at_utc = utc_now_iso()

    def _emit_complete(self) -> None:
        bundle = self.results
        self._emit(
            "success",
            f"Analysis completed successfully. Best method: {bundle.comparison.winner}",
            kind="complete",
        )

    def run_to_completion(
        self,
        *,
        sleep: Callable[[float], None] = time.sleep,
        on_stage: Callable[[RunStatus], None] | None = None,
    ) -> ResultBundle | None:
        """Step through the remaining stages, sleeping the stage delay before each.

        Returns the result bundle, or None when the run was cancelled or was
        never started.
        """
        while self.status.is_running:
            sleep(self.config.stage_delay_s)
            if self.advance() is None:
                break
            if on_stage is not None:
                on_stage(self.status)
        return self.results if self.status.is_complete else None

    def cancel(self) -> bool:
        if not self.status.is_running:
            return False
        self._reset_to_idle()
        self._emit("warning", "Analysis cancelled", kind="cancelled")
        return True

    def _reset_to_idle(self) -> None:
        self.results = None
        self._run_dataset = None
        self.status = RunStatus()

    def notify_report_downloaded(self) -> None:
        self._emit("success", "Report downloaded successfully", kind="download")
