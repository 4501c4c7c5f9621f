"""Streamlit UI entrypoint.

Run with ``streamlit run src/ui/app.py``. Sets up the page and delegates to
page modules for the sidebar (dataset + parameters) and each tab.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure repo root is on sys.path for imports.
repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

import streamlit as st
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from src.config import ACCEPTED_UPLOAD_TYPES, REPORT_FILENAME, REPORT_MIME_TYPE
from src.core.parameters import PARAMETER_SPECS
from src.core.report import build_report, report_to_bytes
from src.event_log import read_events
from src.logging_setup import configure_logging
from src.ui import components
from src.ui.formatting import format_timestamp
from src.ui.state import get_controller, get_ui_state


def main() -> None:
    st.set_page_config(page_title="Raman Method Comparison", layout="wide")
    configure_logging()
    components.inject_custom_css(st)

    ui_state = get_ui_state()
    controller = get_controller()

    st.title("Raman Spectroscopy: PLS-DA + VIP vs CNN + SHAP")
    st.caption(
        "Compare a linear chemometric pipeline with a neural-network pipeline "
        "on a Raman spectroscopy dataset."
    )

    with st.sidebar:
        from src.ui.page_modules import upload_page

        upload_page.render_upload_panel(
            st=st,
            controller=controller,
            ui_state=ui_state,
            PARAMETER_SPECS=PARAMETER_SPECS,
            ACCEPTED_UPLOAD_TYPES=ACCEPTED_UPLOAD_TYPES,
        )

    tab_analysis, tab_results, tab_report = st.tabs(["Analysis", "Results", "Report"])

    with tab_analysis:
        from src.ui.page_modules import analysis_page

        analysis_page.render_analysis_tab(st=st, controller=controller)

    with tab_results:
        from src.ui.page_modules import results_page

        results_page.render_results_tab(st=st, plt=plt, controller=controller)

    with tab_report:
        from src.ui.page_modules import report_page

        report_page.render_report_tab(
            st=st,
            controller=controller,
            build_report=build_report,
            report_to_bytes=report_to_bytes,
            read_events=read_events,
            format_timestamp=format_timestamp,
            REPORT_FILENAME=REPORT_FILENAME,
            REPORT_MIME_TYPE=REPORT_MIME_TYPE,
            event_log_path=ui_state.get("event_log_path"),
        )


if __name__ == "__main__":  # pragma: no cover
    main()
