from __future__ import annotations

from pathlib import Path

from deepfakeguard.event_log import EventLog
from deepfakeguard.workflow.types import WorkflowStatus


def test_append_and_read_round_trip(tmp_path: Path) -> None:
    log = EventLog(tmp_path / "events.jsonl")

    log.append({"type": "selection_accepted", "file_name": "a.png"})
    log.append({"type": "submission_failed", "category": "contract"})

    events = log.read()
    assert [e["type"] for e in events] == ["selection_accepted", "submission_failed"]
    assert "ts_utc" in events[0]


def test_read_ignores_partial_last_line(tmp_path: Path) -> None:
    log = EventLog(tmp_path / "events.jsonl")
    log.append({"type": "teardown"})

    # Simulate a crash during append (partial JSON line at EOF).
    with log.path.open("a", encoding="utf-8") as f:
        f.write('{"type": "reset"')

    events = log.read()
    assert len(events) == 1
    assert events[0]["type"] == "teardown"


def test_read_limit_returns_most_recent(tmp_path: Path) -> None:
    log = EventLog(tmp_path / "events.jsonl")
    for i in range(5):
        log.append({"type": "reset", "i": i})

    assert [e["i"] for e in log.read(limit=2)] == [3, 4]


def test_read_missing_file_returns_empty(tmp_path: Path) -> None:
    assert EventLog(tmp_path / "nope.jsonl").read() == []


def test_log_is_capped_to_most_recent_events(tmp_path: Path) -> None:
    log = EventLog(tmp_path / "events.jsonl", max_events=3)
    for i in range(10):
        log.append({"type": "reset", "i": i})

    lines = log.path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    assert [e["i"] for e in log.read()] == [7, 8, 9]
    assert not log.path.with_suffix(".jsonl.tmp").exists()


def test_enums_and_bytes_are_stored_as_plain_values(tmp_path: Path) -> None:
    log = EventLog(tmp_path / "events.jsonl")
    log.append({"status": WorkflowStatus.FAILED, "payload": b"1234", "p": Path("x")})

    event = log.read()[0]
    assert event["status"] == "failed"
    assert event["payload"] == "<4 bytes>"
    assert event["p"] == "x"


def test_sessions_get_separate_files(tmp_path: Path) -> None:
    first = EventLog.for_session("abc", root=tmp_path)
    second = EventLog.for_session("def", root=tmp_path)

    first.append({"type": "selection_accepted"})
    second.append({"type": "reset"})

    assert first.path != second.path
    assert [e["type"] for e in first.read()] == ["selection_accepted"]
    assert [e["type"] for e in second.read()] == ["reset"]


def test_session_id_cannot_escape_events_dir(tmp_path: Path) -> None:
    log = EventLog.for_session("../../etc/passwd", root=tmp_path)
    assert log.path.parent == tmp_path
    assert "/" not in log.path.name


def test_sink_writes_and_swallows_io_errors(tmp_path: Path) -> None:
    log = EventLog(tmp_path / "sub" / "events.jsonl")
    log.sink()({"type": "reset"})
    assert log.read()[0]["type"] == "reset"

    blocker = tmp_path / "blocker"
    blocker.write_text("not a dir", encoding="utf-8")
    broken = EventLog(blocker / "events.jsonl").sink()
    broken({"type": "reset"})  # must not raise
