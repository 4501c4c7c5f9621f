from __future__ import annotations

import time

from src.ui import components


def _run_with_progress(*, st, controller, sleep) -> None:  # noqa: ANN001
    """Drive the remaining stages while mirroring them into a progress bar."""
    progress = st.progress(int(controller.status.progress), text=controller.status.message or "Starting…")

    def _on_stage(status) -> None:  # noqa: ANN001
        progress.progress(int(status.progress), text=status.message)

    try:
        controller.run_to_completion(sleep=sleep, on_stage=_on_stage)
    except Exception as exc:  # noqa: BLE001
        st.error(f"Analysis failed: {exc}")


def render_analysis_tab(
    *,
    st,
    controller,
    sleep=time.sleep,
) -> None:
    st.subheader("3. Run comparison")
    components.render_dataset_summary(st, controller.dataset)

    if controller.status.is_running:
        # A rerun interrupted the staged sequence (e.g. a widget interaction).
        st.warning(
            f"Analysis interrupted at {controller.status.progress}% "
            f"({controller.status.message or 'not started'})."
        )
        col_resume, col_cancel = st.columns(2)
        with col_resume:
            resume = st.button("▶ Resume analysis", key="resume_run", type="primary")
        with col_cancel:
            cancel = st.button("✖ Cancel analysis", key="cancel_run")
        if cancel:
            controller.cancel()
        elif resume:
            _run_with_progress(st=st, controller=controller, sleep=sleep)
        return

    components.render_run_status(st, controller.status)

    label = "▶ Re-run analysis" if controller.status.is_complete else "▶ Run analysis"
    if st.button(label, key="start_run", type="primary"):
        if controller.start_run():
            _run_with_progress(st=st, controller=controller, sleep=sleep)
