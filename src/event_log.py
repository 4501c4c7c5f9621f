"""Append-only notification log for dashboard sessions.

Goal
- Keep a durable trail of the notifications a session emitted (uploads,
  stage progress, completion, downloads, errors) next to the transient toasts.

Design
- JSONL (newline-delimited JSON) per session.
- Best-effort atomicity: append a single line, flush, and fsync.
- Readers are tolerant: ignore malformed / partial lines.

This module is intentionally dependency-light (no Streamlit imports).
"""

from __future__ import annotations

import json
import os
from collections import deque
from dataclasses import asdict
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from src.config import EVENT_LOG_DIR


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def default_event_log_dir() -> Path:
    return Path(EVENT_LOG_DIR)


def create_session_id(ts: datetime | None = None) -> str:
    """Create a sortable session id (UTC)."""

    t = ts or datetime.now(timezone.utc)
    return t.strftime("%Y%m%dT%H%M%S%fZ")


def _safe_slug(s: str) -> str:
    out = []
    for ch in str(s):
        if ch.isalnum() or ch in {"-", "_"}:
            out.append(ch)
        else:
            out.append("_")
    return "".join(out)


def make_log_path(session_id: str, *, log_dir: Path | None = None) -> Path:
    d = log_dir or default_event_log_dir()
    d.mkdir(parents=True, exist_ok=True)
    return d / f"session_{_safe_slug(session_id)}.jsonl"


def json_friendly(obj: Any) -> Any:
    """Convert common Python objects into JSON-serializable structures.

    - dataclasses -> dict
    - Enum -> value
    - datetime -> ISO string
    - Path -> string
    - dict/list/tuple -> recursively converted

    Unknown objects are stringified as a last resort.
    """

    if obj is None:
        return None

    if isinstance(obj, Enum):
        return json_friendly(obj.value)

    if isinstance(obj, (str, int, float, bool)):
        return obj

    if isinstance(obj, datetime):
        if obj.tzinfo is None:
            return obj.replace(tzinfo=timezone.utc).isoformat()
        return obj.astimezone(timezone.utc).isoformat()

    if isinstance(obj, Path):
        return str(obj)

    # dataclass instances
    if hasattr(obj, "__dataclass_fields__"):
        return json_friendly(asdict(obj))

    if isinstance(obj, dict):
        return {str(k): json_friendly(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [json_friendly(v) for v in obj]

    return str(obj)


def append_event(path: Path, event: dict[str, Any]) -> None:
    """Append a single event to a JSONL file.

    Best-effort crash safety:
    - write a single line
    - flush
    - fsync
    """

    if "ts_utc" not in event:
        event = dict(event)
        event["ts_utc"] = utc_now_iso()

    path.parent.mkdir(parents=True, exist_ok=True)

    line = json.dumps(json_friendly(event), ensure_ascii=False)

    with path.open("a", encoding="utf-8", newline="\n") as f:
        f.write(line)
        f.write("\n")
        f.flush()
        try:
            os.fsync(f.fileno())
        except OSError:
            # Some filesystems do not support fsync.
            pass


def read_events(path: Path, *, max_events: int | None = None) -> list[dict[str, Any]]:
    """Read events from a JSONL file.

    Tolerant reader:
    - Skips blank lines.
    - Ignores lines that aren't valid JSON objects.
    """

    if not path.exists():
        return []

    acc: deque[dict[str, Any]]
    if max_events is None:
        acc = deque()
    else:
        acc = deque(maxlen=int(max_events))

    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            line = raw.strip()
            if not line:
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            if not isinstance(obj, dict):
                continue
            acc.append(obj)

    return list(acc)


class EventLogWriter:
    """Controller subscriber that appends every notification to a session log."""

    def __init__(self, path: Path, *, session_id: str) -> None:
        self.path = path
        self.session_id = session_id

    def __call__(self, notification: Any) -> None:
        event = json_friendly(notification)
        if not isinstance(event, dict):
            event = {"message": event}
        event["session_id"] = self.session_id
        append_event(self.path, event)
