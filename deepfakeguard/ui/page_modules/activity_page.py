"""Activity page.

Reads this browser session's workflow events and shows recent submissions and
failures by category (contract mismatches with the server show up here).
"""

from __future__ import annotations

from deepfakeguard.ui.components import render_event_summary
from deepfakeguard.ui.formatting import events_to_frame, summarize_failures
from deepfakeguard.ui.state import get_event_log

MAX_ROWS = 200


def render_activity_tab(*, st) -> None:
    st.title("Activity")

    log = get_event_log()
    st.caption(f"Event log: `{log.path}`")
    st.button("Refresh now")

    events = log.read(limit=MAX_ROWS)
    if not events:
        st.info("No workflow events recorded yet. Analyze a file on the Detector page first.")
        return

    render_event_summary(st, summarize_failures(events))
    st.dataframe(events_to_frame(events), width="stretch", hide_index=True)
