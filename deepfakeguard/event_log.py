"""Per-session workflow event log.

Each browser session writes its own JSONL file under ``<state_dir>/events/``
so the Activity page only ever shows that session's selections, submissions
and failures. Files are capped at ``max_events`` lines; the oldest lines are
dropped when the cap is exceeded.

Readers skip blank or partial lines (a crash mid-append leaves one behind).
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from deepfakeguard.config import get_client_config

logger = logging.getLogger(__name__)

EventSink = Callable[[dict[str, Any]], None]

MAX_EVENTS = 500


def events_dir() -> Path:
    return Path(get_client_config().paths.events_dir())


def _plain(value: Any) -> Any:
    # Workflow events are flat; payload bytes are never logged.
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


class EventLog:
    def __init__(self, path: Path, *, max_events: int = MAX_EVENTS) -> None:
        self.path = Path(path)
        self.max_events = int(max_events)

    @classmethod
    def for_session(cls, session_id: str, *, root: Path | None = None) -> "EventLog":
        safe = "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in str(session_id))
        return cls((root or events_dir()) / f"session_{safe}.jsonl")

    def append(self, event: dict[str, Any]) -> None:
        record = {str(k): _plain(v) for k, v in event.items()}
        record.setdefault("ts_utc", datetime.now(timezone.utc).isoformat())

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8", newline="\n") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
            f.flush()
            try:
                os.fsync(f.fileno())
            except OSError:
                pass

        self._trim()

    def read(self, *, limit: int | None = None) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []

        events: list[dict[str, Any]] = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(obj, dict):
                events.append(obj)
        return events[-limit:] if limit else events

    def _trim(self) -> None:
        lines = self.path.read_text(encoding="utf-8").splitlines(keepends=True)
        if len(lines) <= self.max_events:
            return
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text("".join(lines[-self.max_events:]), encoding="utf-8")
        tmp.replace(self.path)

    def sink(self) -> EventSink:
        """Return an ``EventSink`` that appends here; write failures are logged and dropped."""

        def _sink(event: dict[str, Any]) -> None:
            try:
                self.append(event)
            except OSError as exc:
                logger.warning("Failed to append workflow event to %s: %s", self.path, exc)

        return _sink
