"""The fixed seven-stage progress sequence of an analysis run.

The sequence is a reporting convention: it does not depend on the dataset or
the analysis parameters.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Stage:
    percent: int
    message: str


ANALYSIS_STAGES: tuple[Stage, ...] = (
    Stage(15, "Loading and preprocessing data…"),
    Stage(30, "Running PLS-DA analysis…"),
    Stage(45, "Computing VIP scores…"),
    Stage(60, "Training CNN model…"),
    Stage(75, "Calculating SHAP values…"),
    Stage(90, "Statistical validation…"),
    Stage(100, "Analysis complete!"),
)

N_STAGES = len(ANALYSIS_STAGES)
