"""Comparison summary between the two classification pipelines."""

from __future__ import annotations

from src.config import SIGNIFICANCE_LEVEL
from src.core.contracts import ComparisonSummary, MethodResult


def is_significant(p_value: float, *, alpha: float = SIGNIFICANCE_LEVEL) -> bool:
    return float(p_value) < float(alpha)


def derive_winner(first: MethodResult, second: MethodResult) -> str:
    """Return the label of the better method.

    Higher accuracy wins, then higher AUC. A remaining tie goes to the method
    with the lower cross-validation variance, and finally to ``first``.
    """
    if first.accuracy != second.accuracy:
        return first.method if first.accuracy > second.accuracy else second.method
    if first.auc != second.auc:
        return first.method if first.auc > second.auc else second.method
    if second.cv_variance < first.cv_variance:
        return second.method
    return first.method


def summarize_comparison(
    first: MethodResult,
    second: MethodResult,
    *,
    p_value: float,
    stability: dict[str, float],
    winner: str | None = None,
    alpha: float = SIGNIFICANCE_LEVEL,
) -> ComparisonSummary:
    """Build the comparison summary.

    ``winner`` is taken as given when provided; it is independent of the
    significance flag. Without it the winner is derived from the metrics.
    """
    return ComparisonSummary(
        p_value=float(p_value),
        is_significant=is_significant(p_value, alpha=alpha),
        winner=winner if winner is not None else derive_winner(first, second),
        stability=dict(stability),
    )
