"""Immutable records exchanged between the run controller, the report
assembler and the UI.

``to_dict`` produces the camelCase wire layout used in the exported report;
Result records read the same layout back through ``from_dict``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from src.config import PARAMETER_DEFAULTS


VIP_METHOD = "PLS-DA + VIP"
CNN_METHOD = "CNN + SHAP"


def json_dump(obj: Any, *, indent: int = 2) -> str:
    return json.dumps(obj, indent=indent, ensure_ascii=False)


@dataclass(frozen=True)
class UploadedDataset:
    name: str
    size: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "size": int(self.size)}

    @classmethod
    def from_upload(cls, upload: Any) -> "UploadedDataset":
        """Build from any file handle exposing ``name`` and ``size``.

        The content is never read.
        """
        return cls(name=str(upload.name), size=int(getattr(upload, "size", 0) or 0))


@dataclass(frozen=True)
class AnalysisParameters:
    n_components: int = PARAMETER_DEFAULTS.n_components
    cv_folds: int = PARAMETER_DEFAULTS.cv_folds
    bootstrap_iterations: int = PARAMETER_DEFAULTS.bootstrap_iterations
    learning_rate: float = PARAMETER_DEFAULTS.learning_rate
    epochs: int = PARAMETER_DEFAULTS.epochs

    def to_dict(self) -> dict[str, Any]:
        return {
            "nComponents": int(self.n_components),
            "cvFolds": int(self.cv_folds),
            "bootstrapIterations": int(self.bootstrap_iterations),
            "learningRate": float(self.learning_rate),
            "epochs": int(self.epochs),
        }


@dataclass(frozen=True)
class MethodResult:
    method: str
    accuracy: float
    auc: float
    cv_scores: tuple[float, ...]
    feature_importance: tuple[float, ...]
    top_features: tuple[int, ...]

    @property
    def cv_mean(self) -> float:
        return sum(self.cv_scores) / len(self.cv_scores) if self.cv_scores else 0.0

    @property
    def cv_variance(self) -> float:
        n = len(self.cv_scores)
        if n < 2:
            return 0.0
        mean = self.cv_mean
        return sum((s - mean) ** 2 for s in self.cv_scores) / (n - 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "accuracy": float(self.accuracy),
            "auc": float(self.auc),
            "cvScores": [float(s) for s in self.cv_scores],
            "featureImportance": [float(v) for v in self.feature_importance],
            "topFeatures": [int(w) for w in self.top_features],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "MethodResult":
        return cls(
            method=str(d["method"]),
            accuracy=float(d["accuracy"]),
            auc=float(d["auc"]),
            cv_scores=tuple(float(s) for s in d["cvScores"]),
            feature_importance=tuple(float(v) for v in d["featureImportance"]),
            top_features=tuple(int(w) for w in d["topFeatures"]),
        )


@dataclass(frozen=True)
class ComparisonSummary:
    p_value: float
    is_significant: bool
    winner: str
    stability: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pValue": float(self.p_value),
            "isSignificant": bool(self.is_significant),
            "winner": self.winner,
            "stability": {k: float(v) for k, v in self.stability.items()},
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "ComparisonSummary":
        return cls(
            p_value=float(d["pValue"]),
            is_significant=bool(d["isSignificant"]),
            winner=str(d["winner"]),
            stability={str(k): float(v) for k, v in (d.get("stability") or {}).items()},
        )


@dataclass(frozen=True)
class ResultBundle:
    """Both method results plus their comparison, produced together or not at all."""

    vip: MethodResult
    cnn: MethodResult
    comparison: ComparisonSummary

    def methods(self) -> tuple[MethodResult, MethodResult]:
        return (self.vip, self.cnn)

    def to_dict(self) -> dict[str, Any]:
        return {
            "vipResults": self.vip.to_dict(),
            "cnnResults": self.cnn.to_dict(),
            "comparison": self.comparison.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "ResultBundle":
        return cls(
            vip=MethodResult.from_dict(d["vipResults"]),
            cnn=MethodResult.from_dict(d["cnnResults"]),
            comparison=ComparisonSummary.from_dict(d["comparison"]),
        )
