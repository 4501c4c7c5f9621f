"""Reusable UI components for the Raman method comparison dashboard.

Components understand the domain objects of the run controller:
- uploaded datasets and analysis parameters
- run status and the seven-stage progress sequence
- per-method results (accuracy, AUC, cross-validation, feature importance)
- the comparison summary (p-value, significance, winner, stability)

Design principles:
- Components are stateless (take data, return rendered UI)
- Consistent visual language across all tabs
- Charts are matplotlib figures handed to ``st.pyplot``
"""

from __future__ import annotations
from typing import Any, Literal
import pandas as pd

from src.core.contracts import CNN_METHOD, VIP_METHOD, MethodResult, ResultBundle
from src.ui import formatting


METHOD_COLORS = {
    VIP_METHOD: "#667eea",
    CNN_METHOD: "#48bb78",
}


# =============================================================================
# THEME & STYLING
# =============================================================================

def inject_custom_css(st) -> None:
    """Inject custom CSS for consistent styling across the app."""
    st.markdown("""
    <style>
        :root {
            --primary-color: #667eea;
            --primary-dark: #5a67d8;
            --success-color: #48bb78;
            --warning-color: #ed8936;
            --danger-color: #f56565;
            --info-color: #4299e1;
            --neutral-color: #718096;

            --card-shadow: 0 4px 6px -1px rgba(0, 0, 0, 0.1), 0 2px 4px -1px rgba(0, 0, 0, 0.06);
        }

        .metric-card {
            background: linear-gradient(135deg, var(--primary-color) 0%, var(--primary-dark) 100%);
            padding: 1.25rem;
            border-radius: 0.75rem;
            color: white;
            box-shadow: var(--card-shadow);
            margin-bottom: 1rem;
        }
        .metric-card-success { background: linear-gradient(135deg, #48bb78 0%, #38a169 100%); }
        .metric-card-warning { background: linear-gradient(135deg, #ed8936 0%, #dd6b20 100%); }
        .metric-card-danger { background: linear-gradient(135deg, #f56565 0%, #e53e3e 100%); }
        .metric-card-info { background: linear-gradient(135deg, #4299e1 0%, #3182ce 100%); }
        .metric-card-neutral { background: linear-gradient(135deg, #718096 0%, #4a5568 100%); }

        .metric-value {
            font-size: 2.2rem;
            font-weight: 700;
            line-height: 1;
            margin-top: 0.5rem;
        }
        .metric-label {
            font-size: 0.875rem;
            opacity: 0.9;
            text-transform: uppercase;
            letter-spacing: 0.05em;
        }
        .metric-trend {
            font-size: 0.875rem;
            margin-top: 0.5rem;
        }

        .status-badge {
            display: inline-block;
            padding: 0.25rem 0.75rem;
            border-radius: 9999px;
            font-size: 0.75rem;
            font-weight: 600;
            text-transform: uppercase;
            letter-spacing: 0.05em;
        }
        .status-idle { background-color: #718096; color: white; }
        .status-running { background-color: #4299e1; color: white; }
        .status-complete { background-color: #48bb78; color: white; }
        .status-significant { background-color: #48bb78; color: white; }
        .status-not-significant { background-color: #ed8936; color: white; }

        .info-panel {
            background: #f7fafc;
            border-left: 4px solid var(--info-color);
            padding: 1rem;
            border-radius: 0.25rem;
            margin-bottom: 1rem;
        }
    </style>
    """, unsafe_allow_html=True)


# =============================================================================
# METRIC CARDS
# =============================================================================

def render_metric_card(
    st,
    label: str,
    value: str | float | int,
    trend: str | None = None,
    color: Literal["primary", "success", "warning", "danger", "info", "neutral"] = "primary",
    icon: str | None = None,
) -> None:
    """Render a metric card with optional trend line.

    Args:
        st: Streamlit module
        label: Metric label (e.g., "Accuracy")
        value: Metric value (already formatted)
        trend: Optional trend text (e.g., "+7.6 pts vs PLS-DA")
        color: Card color scheme
        icon: Optional emoji icon
    """
    color_class = f"metric-card-{color}"
    icon_html = f'<span style="font-size: 1.75rem; margin-right: 0.5rem;">{icon}</span>' if icon else ""
    trend_html = f'<div class="metric-trend">{trend}</div>' if trend else ""

    st.markdown(f"""
    <div class="metric-card {color_class}">
        {icon_html}
        <div class="metric-label">{label}</div>
        <div class="metric-value">{value}</div>
        {trend_html}
    </div>
    """, unsafe_allow_html=True)


def render_kpi_row(
    st,
    metrics: list[dict[str, Any]],
) -> None:
    """Render a row of KPI metric cards.

    Args:
        st: Streamlit module
        metrics: List of metric dicts with keys: label, value, trend?, color?, icon?
    """
    cols = st.columns(len(metrics))
    for col, metric in zip(cols, metrics):
        with col:
            render_metric_card(
                st,
                label=metric["label"],
                value=metric["value"],
                trend=metric.get("trend"),
                color=metric.get("color", "primary"),
                icon=metric.get("icon"),
            )


# =============================================================================
# STATUS
# =============================================================================

def render_status_badge(
    st,
    status: str,
    text: str | None = None,
) -> None:
    """Render a color-coded badge (run phase or significance)."""
    css = str(status).lower().replace("_", "-").replace(" ", "-")
    display_text = text or status
    st.markdown(f'<span class="status-badge status-{css}">{display_text}</span>', unsafe_allow_html=True)


def render_dataset_summary(st, dataset) -> None:  # noqa: ANN001
    if dataset is None:
        st.info("No dataset selected yet. Upload a Raman spectroscopy file to begin.")
        return
    st.markdown(f"**Dataset:** `{dataset.name}` ({formatting.format_bytes(dataset.size)})")


def render_run_status(st, status) -> None:  # noqa: ANN001
    """Render the current phase badge, progress bar and stage message."""
    col_badge, col_time = st.columns([1, 2])
    with col_badge:
        render_status_badge(st, status.phase.value)
    with col_time:
        started = formatting.format_timestamp(status.started_at_utc)
        finished = formatting.format_timestamp(status.finished_at_utc)
        if started:
            st.caption(f"Started {started}" + (f" · finished {finished}" if finished else ""))

    if status.phase.value != "IDLE":
        st.progress(int(status.progress), text=status.message or "Starting…")


# =============================================================================
# RESULT COMPONENTS
# =============================================================================

def _accuracy_delta(result: MethodResult, other: MethodResult) -> str:
    delta = (result.accuracy - other.accuracy) * 100
    return f"{delta:+.1f} pts vs {other.method}"


def render_method_cards(st, bundle: ResultBundle) -> None:
    """Headline accuracy/AUC cards, one column per method."""
    col_vip, col_cnn = st.columns(2)
    for col, result, other in (
        (col_vip, bundle.vip, bundle.cnn),
        (col_cnn, bundle.cnn, bundle.vip),
    ):
        with col:
            st.markdown(f"#### {result.method}")
            is_winner = result.method == bundle.comparison.winner
            render_metric_card(
                st,
                "Accuracy",
                formatting.format_percent(result.accuracy),
                trend=_accuracy_delta(result, other),
                color="success" if is_winner else "info",
                icon="🏆" if is_winner else None,
            )
            render_metric_card(st, "AUC", f"{result.auc:.3f}", color="neutral")


def render_comparison_summary(st, bundle: ResultBundle) -> None:
    comparison = bundle.comparison
    metrics = [
        {"label": "Winner", "value": comparison.winner, "color": "success", "icon": "🏆"},
        {
            "label": "p-value",
            "value": f"{comparison.p_value:.3f}",
            "color": "success" if comparison.is_significant else "warning",
        },
    ]
    render_kpi_row(st, metrics)
    if comparison.is_significant:
        render_status_badge(st, "significant", "Statistically significant (p < 0.05)")
    else:
        render_status_badge(st, "not-significant", "Not significant (p ≥ 0.05)")


def render_cv_chart(st, plt, bundle: ResultBundle) -> None:
    """Grouped bar chart of per-fold cross-validation accuracy."""
    df = formatting.cv_frame(bundle)
    if df.empty:
        st.warning("No cross-validation scores to display")
        return

    pivot = df.pivot(index="Fold", columns="Method", values="Accuracy")
    fig, ax = plt.subplots(figsize=(10, 4.5))
    fig.patch.set_alpha(0.0)
    width = 0.8 / max(1, len(pivot.columns))
    for i, method in enumerate(pivot.columns):
        offsets = pivot.index + (i - (len(pivot.columns) - 1) / 2) * width
        ax.bar(offsets, pivot[method], width=width, label=method, color=METHOD_COLORS.get(method))
    ax.set_xticks(list(pivot.index))
    ax.set_xlabel("Fold", fontsize=11, fontweight="bold")
    ax.set_ylabel("Accuracy", fontsize=11, fontweight="bold")
    ax.set_ylim(max(0.0, float(df["Accuracy"].min()) - 0.05), 1.0)
    ax.grid(True, axis="y", alpha=0.2, linestyle="--")
    ax.legend(loc="lower right", framealpha=0.9)
    ax.set_title("Cross-validation accuracy per fold", fontsize=14, fontweight="bold")
    fig.tight_layout()
    st.pyplot(fig)
    plt.close(fig)

    st.dataframe(pivot.round(3), use_container_width=True)


def render_importance_chart(st, plt, bundle: ResultBundle) -> None:
    """Feature importance profiles (VIP vs SHAP) over the spectral axis."""
    df = formatting.importance_frame(bundle)
    fig, axes = plt.subplots(len(df.columns), 1, figsize=(12, 3.2 * len(df.columns)), sharex=True)
    if len(df.columns) == 1:
        axes = [axes]
    fig.patch.set_alpha(0.0)
    for ax, method in zip(axes, df.columns):
        ax.bar(df.index, df[method], width=90, color=METHOD_COLORS.get(method), alpha=0.85)
        ax.set_ylabel("Importance")
        ax.set_title(method, fontsize=12, fontweight="bold")
        ax.grid(True, axis="y", alpha=0.2, linestyle="--")
    axes[-1].set_xlabel("Wavenumber (cm⁻¹)", fontsize=11, fontweight="bold")
    fig.tight_layout()
    st.pyplot(fig)
    plt.close(fig)

    st.markdown("##### Top ranked wavenumbers")
    st.dataframe(formatting.top_features_frame(bundle), use_container_width=True, hide_index=True)


def render_stability_chart(st, plt, bundle: ResultBundle) -> None:
    df = formatting.stability_frame(bundle)
    if df.empty:
        st.warning("No stability coefficients to display")
        return

    fig, ax = plt.subplots(figsize=(8, 3.5))
    fig.patch.set_alpha(0.0)
    colors = [METHOD_COLORS.get(m, "#718096") for m in df["Method"]]
    ax.barh(df["Method"], df["Stability"], color=colors)
    for y, value in enumerate(df["Stability"]):
        ax.text(value + 0.01, y, f"{value:.2f}", va="center")
    ax.set_xlim(0.0, 1.0)
    ax.set_xlabel("Stability coefficient", fontsize=11, fontweight="bold")
    ax.set_title("Feature-ranking stability across bootstrap resamples", fontsize=13, fontweight="bold")
    ax.grid(True, axis="x", alpha=0.2, linestyle="--")
    fig.tight_layout()
    st.pyplot(fig)
    plt.close(fig)


def render_metrics_table(st, bundle: ResultBundle) -> None:
    df = formatting.metrics_frame(bundle)
    st.dataframe(
        df.round(3),
        use_container_width=True,
        hide_index=True,
    )


def render_event_table(st, events: list[dict[str, Any]]) -> None:
    """Render the session notification log, most recent first."""
    if not events:
        st.info("No notifications recorded yet.")
        return
    df = pd.DataFrame(events)
    if "ts_utc" in df.columns:
        df["ts_utc"] = df["ts_utc"].map(formatting.format_timestamp)
        df = df.iloc[::-1]
    columns = [c for c in ("ts_utc", "level", "kind", "message") if c in df.columns]
    st.dataframe(df[columns], use_container_width=True, hide_index=True)
