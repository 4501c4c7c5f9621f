from __future__ import annotations

from src.ui import components


def render_results_tab(
    *,
    st,
    plt,
    controller,
) -> None:
    st.subheader("4. Results")

    bundle = controller.results
    if not controller.status.is_complete or bundle is None:
        st.info("Results appear here once an analysis run completes.")
        return

    components.render_comparison_summary(st, bundle)
    components.render_method_cards(st, bundle)

    tab_cv, tab_importance, tab_stability, tab_table = st.tabs(
        ["Cross-validation", "Feature importance", "Stability", "Metrics table"]
    )
    with tab_cv:
        components.render_cv_chart(st, plt, bundle)
    with tab_importance:
        components.render_importance_chart(st, plt, bundle)
    with tab_stability:
        components.render_stability_chart(st, plt, bundle)
    with tab_table:
        components.render_metrics_table(st, bundle)
