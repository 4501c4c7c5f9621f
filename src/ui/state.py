"""UI state management for the Streamlit app.

Provides centralized access to session state: one run controller per browser
session, wired to toast notifications and the JSONL event log.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import streamlit as st

from src.config import EVENT_LOG_ENABLED
from src.event_log import EventLogWriter, create_session_id, make_log_path
from src.jobs.controller import RunController
from src.jobs.types import Notification


NOTIFICATION_ICONS = {
    "info": "⏳",
    "success": "✅",
    "warning": "⚠️",
    "error": "❌",
}


def notification_icon(level: str) -> str:
    return NOTIFICATION_ICONS.get(level, "ℹ️")


def toast_notification(note: Notification) -> None:
    """Controller subscriber that shows a transient toast."""
    st.toast(note.message, icon=notification_icon(note.level))


def get_ui_state() -> dict[str, Any]:
    """Return the centralized UI state dict, initializing if needed."""
    if "ui_state" not in st.session_state:
        session_id = create_session_id()
        st.session_state["ui_state"] = {
            "session_id": session_id,
            "event_log_path": None,
            "last_upload_key": None,
        }
    return st.session_state["ui_state"]


def build_controller(*, event_log_path: Path | None, session_id: str) -> RunController:
    """Create a controller subscribed to toasts and, optionally, the event log."""
    controller = RunController(subscribers=[toast_notification])
    if event_log_path is not None:
        controller.subscribe(EventLogWriter(event_log_path, session_id=session_id))
    return controller


def get_controller() -> RunController:
    """Return this session's run controller, creating it on first access."""
    if "run_controller" not in st.session_state:
        ui_state = get_ui_state()
        log_path = None
        if EVENT_LOG_ENABLED:
            try:
                log_path = make_log_path(ui_state["session_id"])
            except OSError as exc:  # pragma: no cover - read-only deployments
                st.warning(f"Event log disabled: {exc}")
        ui_state["event_log_path"] = str(log_path) if log_path else None
        st.session_state["run_controller"] = build_controller(
            event_log_path=log_path,
            session_id=ui_state["session_id"],
        )
    return st.session_state["run_controller"]
