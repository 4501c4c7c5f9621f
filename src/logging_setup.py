"""Process-wide logging configuration for the dashboard."""

from __future__ import annotations

import logging

from src.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"

_HANDLER_NAME = "raman_dashboard"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a single stream handler to the ``src`` logger.

    Streamlit re-executes the app script on every interaction, so repeated
    calls only adjust the level.
    """
    root = logging.getLogger("src")
    resolved = level if level is not None else LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    root.setLevel(resolved)

    if not any(getattr(h, "name", None) == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)

    return root
