from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

from src.config import get_run_config
from src.event_log import (
    EventLogWriter,
    append_event,
    json_friendly,
    make_log_path,
    read_events,
)
from src.jobs.controller import RunController
from src.jobs.types import Notification, RunPhase


def test_append_and_read_events_round_trip(tmp_path: Path) -> None:
    log_path = make_log_path("test", log_dir=tmp_path)

    append_event(log_path, {"kind": "upload", "message": "a"})
    append_event(log_path, {"kind": "progress", "message": "b"})

    events = read_events(log_path)
    assert len(events) == 2
    assert events[0]["kind"] == "upload"
    assert events[1]["kind"] == "progress"
    assert "ts_utc" in events[0]


def test_read_events_ignores_partial_last_line(tmp_path: Path) -> None:
    log_path = make_log_path("partial", log_dir=tmp_path)

    append_event(log_path, {"kind": "upload"})

    # Simulate a crash during append (partial JSON line at EOF).
    with log_path.open("a", encoding="utf-8") as f:
        f.write('{"kind": "progress"')

    events = read_events(log_path)
    assert len(events) == 1
    assert events[0]["kind"] == "upload"


def test_read_events_max_events_keeps_most_recent(tmp_path: Path) -> None:
    log_path = make_log_path("cap", log_dir=tmp_path)
    for i in range(5):
        append_event(log_path, {"i": i})

    assert [e["i"] for e in read_events(log_path, max_events=2)] == [3, 4]


def test_make_log_path_slugifies_session_id(tmp_path: Path) -> None:
    path = make_log_path("a/b c", log_dir=tmp_path)

    assert path.name == "session_a_b_c.jsonl"
    assert path.parent == tmp_path


def test_json_friendly_handles_enums_dataclasses_and_paths() -> None:
    out = json_friendly(
        {
            "phase": RunPhase.COMPLETE,
            "note": Notification(level="info", message="m"),
            "path": Path("x") / "y",
            "items": (1, 2),
        }
    )

    assert out["phase"] == "COMPLETE"
    assert out["note"] == {"level": "info", "message": "m", "kind": "status"}
    assert out["path"].endswith("y")
    assert out["items"] == [1, 2]


def test_event_log_writer_records_controller_notifications(tmp_path: Path) -> None:
    log_path = make_log_path("session", log_dir=tmp_path)
    controller = RunController(config=get_run_config(stage_delay_s=0.0))
    controller.subscribe(EventLogWriter(log_path, session_id="session"))

    controller.start_run()
    controller.select_dataset(SimpleNamespace(name="sample.csv", size=3))
    controller.start_run()
    controller.run_to_completion(sleep=lambda _s: None)

    events = read_events(log_path)
    kinds = [e["kind"] for e in events]
    assert kinds[0] == "error"
    assert kinds[1] == "upload"
    assert kinds.count("progress") == 7
    assert kinds[-1] == "complete"
    assert all(e["session_id"] == "session" for e in events)
    assert [e["message"] for e in events if e["kind"] == "progress"][-1] == "Analysis complete!"
