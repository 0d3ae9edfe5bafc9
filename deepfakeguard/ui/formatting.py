"""Formatting helpers for UI display."""

from __future__ import annotations

import pandas as pd

EVENT_COLUMNS = ["ts_utc", "type", "file_name", "category", "error", "job_id", "label"]


def format_timestamp(ts: str | None) -> str | None:
    """Return an ISO timestamp truncated to seconds (YYYY-MM-DDTHH:MM:SS)."""
    if not ts:
        return None
    s = str(ts)

    # Fast-path: the first 19 chars of an ISO timestamp are the seconds part.
    if len(s) >= 19 and s[4] == "-" and s[10] == "T":
        return s[:19]

    try:
        t = pd.to_datetime(s, utc=True, errors="coerce")
        if pd.isna(t):
            return None
        return t.strftime("%Y-%m-%dT%H:%M:%S")
    except (TypeError, ValueError):
        return None


def format_label(label: str | None) -> str | None:
    if label is None:
        return None
    return str(label).upper()


def format_confidence(confidence: float | None) -> str | None:
    if confidence is None:
        return None
    value = float(confidence)
    # Servers report either a probability or a percentage.
    if value <= 1.0:
        value *= 100.0
    return f"{value:.1f}%"


def events_to_frame(events: list[dict]) -> pd.DataFrame:
    """Return workflow events as a most-recent-first DataFrame with stable columns."""
    df = pd.DataFrame(events or [])
    for col in EVENT_COLUMNS:
        if col not in df.columns:
            df[col] = None
    df = df[EVENT_COLUMNS].copy()
    df["ts_utc"] = df["ts_utc"].map(format_timestamp)
    return df.iloc[::-1].reset_index(drop=True)


def summarize_failures(events: list[dict]) -> dict[str, int]:
    """Count ``submission_failed`` events per category."""
    counts: dict[str, int] = {}
    for e in events or []:
        if not isinstance(e, dict) or e.get("type") != "submission_failed":
            continue
        cat = str(e.get("category") or "unknown")
        counts[cat] = counts.get(cat, 0) + 1
    return counts
