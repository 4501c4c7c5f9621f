"""Formatting helpers and tabular projections for UI display."""

from __future__ import annotations

import numpy as np
import pandas as pd

from src.core.contracts import ResultBundle

# Spectral positions (cm⁻¹) the importance vectors are plotted against.
IMPORTANCE_WAVENUMBER_RANGE = (400.0, 3200.0)


def format_timestamp(ts: str | None) -> str | None:
    """Return an ISO timestamp truncated to seconds (YYYY-MM-DDTHH:MM:SS)."""
    if not ts:
        return None
    s = str(ts)

    # Fast-path: keep only the first 19 chars, which correspond to seconds.
    if len(s) >= 19 and s[4] == "-" and s[10] == "T":
        return s[:19]

    try:
        t = pd.to_datetime(s, utc=True, errors="coerce")
        if pd.isna(t):
            return None
        return t.strftime("%Y-%m-%dT%H:%M:%S")
    except (TypeError, ValueError):
        return None


def format_bytes(n: int | None) -> str:
    """Human-readable byte size (1024-based)."""
    if n is None:
        return "—"
    size = float(n)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024.0 or unit == "GB":
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} GB"


def format_percent(x: float | None, digits: int = 1) -> str:
    if x is None:
        return "—"
    return f"{float(x) * 100:.{digits}f}%"


def importance_wavenumbers(n: int) -> list[int]:
    lo, hi = IMPORTANCE_WAVENUMBER_RANGE
    return [int(round(w)) for w in np.linspace(lo, hi, n)]


def metrics_frame(bundle: ResultBundle) -> pd.DataFrame:
    """One row per method with the headline metrics."""
    stability = bundle.comparison.stability
    rows = [
        {
            "Method": r.method,
            "Accuracy": r.accuracy,
            "AUC": r.auc,
            "CV mean": r.cv_mean,
            "CV std": float(np.sqrt(r.cv_variance)),
            "Stability": stability.get(r.method),
        }
        for r in bundle.methods()
    ]
    return pd.DataFrame(rows)


def cv_frame(bundle: ResultBundle) -> pd.DataFrame:
    """Long-format cross-validation accuracies (Fold, Method, Accuracy)."""
    rows = []
    for r in bundle.methods():
        for i, score in enumerate(r.cv_scores, start=1):
            rows.append({"Fold": i, "Method": r.method, "Accuracy": float(score)})
    return pd.DataFrame(rows, columns=["Fold", "Method", "Accuracy"])


def importance_frame(bundle: ResultBundle) -> pd.DataFrame:
    """Wide-format feature importance indexed by wavenumber, one column per method."""
    n = max(len(r.feature_importance) for r in bundle.methods())
    df = pd.DataFrame({"Wavenumber": importance_wavenumbers(n)})
    for r in bundle.methods():
        values = list(r.feature_importance) + [np.nan] * (n - len(r.feature_importance))
        df[r.method] = values
    return df.set_index("Wavenumber")


def top_features_frame(bundle: ResultBundle) -> pd.DataFrame:
    """Ranked top wavenumbers side by side."""
    n = max(len(r.top_features) for r in bundle.methods())
    data: dict[str, list] = {"Rank": list(range(1, n + 1))}
    for r in bundle.methods():
        feats = [f"{w} cm⁻¹" for w in r.top_features]
        data[r.method] = feats + [""] * (n - len(feats))
    return pd.DataFrame(data)


def stability_frame(bundle: ResultBundle) -> pd.DataFrame:
    stability = bundle.comparison.stability
    return pd.DataFrame(
        [{"Method": m, "Stability": float(v)} for m, v in stability.items()],
        columns=["Method", "Stability"],
    )
