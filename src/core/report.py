"""Report assembly for a completed analysis run.

The report is a plain dict snapshot; serialization to bytes is separate so the
UI can hand it to a download widget. Nothing here touches the filesystem.
"""

from __future__ import annotations

import logging
from typing import Any

from src.config import REPORT
from src.core.contracts import AnalysisParameters, ResultBundle, UploadedDataset, json_dump
from src.event_log import utc_now_iso

logger = logging.getLogger(__name__)


def assemble_report(
    results: ResultBundle | None,
    parameters: AnalysisParameters | None,
    *,
    dataset: UploadedDataset | None = None,
    timestamp: str | None = None,
) -> dict[str, Any] | None:
    """Return the report dict, or None when the result bundle is incomplete."""
    if (
        results is None
        or results.vip is None
        or results.cnn is None
        or results.comparison is None
        or parameters is None
    ):
        logger.warning("Report requested before a run completed; no report produced")
        return None

    comparison = results.comparison
    return {
        "timestamp": timestamp or utc_now_iso(),
        "parameters": parameters.to_dict(),
        "dataset": dataset.to_dict() if dataset is not None else None,
        "results": results.to_dict(),
        "summary": {
            "winner": comparison.winner,
            "isSignificant": bool(comparison.is_significant),
            "pValue": float(comparison.p_value),
        },
    }


def build_report(controller) -> dict[str, Any] | None:  # noqa: ANN001
    """Build the report for the controller's last completed run.

    Uses the parameters snapshotted at run start, not the current inputs.
    """
    if not controller.status.is_complete:
        logger.warning("Report requested while run is %s; no report produced", controller.phase.value)
        return None
    return assemble_report(
        controller.results,
        controller.run_parameters,
        dataset=controller.run_dataset,
    )


def report_to_bytes(report: dict[str, Any]) -> bytes:
    """Serialize a report to UTF-8, pretty-printed JSON."""
    return json_dump(report, indent=REPORT.indent).encode("utf-8")
