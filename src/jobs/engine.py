"""Result engines for an analysis run.

The controller asks its engine for a :class:`ResultBundle` once the last
stage has been reached. ``ReferenceEngine`` reproduces the reference dashboard
numbers: fixed accuracy, AUC, cross-validation scores, top features, p-value
and stability, plus uniformly random feature importances. A real PLS-DA/CNN
pipeline would subclass :class:`AnalysisEngine`.
"""

from __future__ import annotations

import numpy as np

from src.config import RunConfig, get_run_config
from src.core.comparison import summarize_comparison
from src.core.contracts import (
    CNN_METHOD,
    VIP_METHOD,
    AnalysisParameters,
    MethodResult,
    ResultBundle,
    UploadedDataset,
)


REFERENCE_METRICS: dict[str, dict] = {
    VIP_METHOD: {
        "accuracy": 0.847,
        "auc": 0.891,
        "cv_scores": (0.832, 0.851, 0.839, 0.862, 0.851),
        "top_features": (1001, 1445, 1655, 2850, 1128),
    },
    CNN_METHOD: {
        "accuracy": 0.923,
        "auc": 0.956,
        "cv_scores": (0.915, 0.928, 0.919, 0.931, 0.922),
        "top_features": (1003, 1450, 1660, 2935, 1340),
    },
}
REFERENCE_P_VALUE = 0.032
REFERENCE_STABILITY = {VIP_METHOD: 0.78, CNN_METHOD: 0.65}
REFERENCE_WINNER = CNN_METHOD


class AnalysisEngine:
    """Produces the result bundle of a completed run."""

    def produce(self, dataset: UploadedDataset, params: AnalysisParameters) -> ResultBundle:
        raise NotImplementedError


class ReferenceEngine(AnalysisEngine):
    def __init__(self, config: RunConfig | None = None) -> None:
        self.config = config or get_run_config()
        self._rng = np.random.default_rng(self.config.random_seed)

    def _method_result(self, method: str) -> MethodResult:
        ref = REFERENCE_METRICS[method]
        importance = self._rng.uniform(0.0, 1.0, size=self.config.n_importance_features)
        return MethodResult(
            method=method,
            accuracy=ref["accuracy"],
            auc=ref["auc"],
            cv_scores=tuple(ref["cv_scores"][: self.config.n_cv_folds_reported]),
            feature_importance=tuple(float(v) for v in importance),
            top_features=tuple(ref["top_features"]),
        )

    def produce(self, dataset: UploadedDataset, params: AnalysisParameters) -> ResultBundle:
        # Neither the dataset nor the parameters influence the reference numbers.
        vip = self._method_result(VIP_METHOD)
        cnn = self._method_result(CNN_METHOD)

        if self.config.winner_policy == "metrics":
            winner = None
        else:
            winner = REFERENCE_WINNER

        comparison = summarize_comparison(
            vip,
            cnn,
            p_value=REFERENCE_P_VALUE,
            stability=REFERENCE_STABILITY,
            winner=winner,
            alpha=self.config.significance_level,
        )
        return ResultBundle(vip=vip, cnn=cnn, comparison=comparison)


def get_engine(config: RunConfig | None = None) -> AnalysisEngine:
    """Return the engine configured for this process."""
    return ReferenceEngine(config)
