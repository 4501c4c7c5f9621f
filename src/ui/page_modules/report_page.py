from __future__ import annotations

from pathlib import Path

from src.ui import components


def _report_caption(report: dict, *, format_timestamp) -> str:  # noqa: ANN001
    summary = report.get("summary", {})
    significance = "significant" if summary.get("isSignificant") else "not significant"
    ts = format_timestamp(report.get("timestamp")) or "unknown time"
    return (
        f"Assembled {ts} · winner {summary.get('winner')} · "
        f"p = {float(summary.get('pValue', 0.0)):.3f} ({significance})"
    )


def render_report_tab(
    *,
    st,
    controller,
    build_report,
    report_to_bytes,
    read_events,
    format_timestamp,
    REPORT_FILENAME: str,
    REPORT_MIME_TYPE: str,
    event_log_path: str | None,
) -> None:
    st.subheader("5. Export report")

    report = build_report(controller)
    if report is None:
        st.info("Complete an analysis run to export its report.")
    else:
        st.caption(_report_caption(report, format_timestamp=format_timestamp))
        st.download_button(
            "⬇ Download JSON report",
            data=report_to_bytes(report),
            file_name=REPORT_FILENAME,
            mime=REPORT_MIME_TYPE,
            key="download_report",
            on_click=controller.notify_report_downloaded,
        )
        with st.expander("Report preview", expanded=False):
            st.json(report)

    with st.expander("Session notifications", expanded=False):
        if event_log_path:
            components.render_event_table(st, read_events(Path(event_log_path), max_events=200))
        else:
            st.caption("Event log is disabled (RAMAN_EVENT_LOG=0).")
