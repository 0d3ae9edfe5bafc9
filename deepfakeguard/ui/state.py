"""UI state management for Streamlit app.

Provides centralized access to session state: the per-session workflow
controller, its event log, and the disclaimer flag. Nothing here is shared
between browser sessions.
"""

from __future__ import annotations

import uuid
from typing import Any

import streamlit as st

from deepfakeguard.event_log import EventLog
from deepfakeguard.workflow.controller import UploadWorkflow

WORKFLOW_KEY = "upload_workflow"
SESSION_ID_KEY = "activity_session_id"
UPLOADER_KEY = "upload_widget_file_id"
UPLOADER_NONCE_KEY = "uploader_nonce"


def get_ui_state() -> dict[str, Any]:
    """Return the centralized UI state dict, initializing if needed."""
    if "ui_state" not in st.session_state:
        st.session_state["ui_state"] = {
            "detector": {},
            "disclaimer": {},
        }
    return st.session_state["ui_state"]


def get_session_id() -> str:
    if SESSION_ID_KEY not in st.session_state:
        st.session_state[SESSION_ID_KEY] = uuid.uuid4().hex
    return st.session_state[SESSION_ID_KEY]


def get_event_log() -> EventLog:
    return EventLog.for_session(get_session_id())


def get_workflow() -> UploadWorkflow:
    """Return this browser session's workflow, creating it on first access.

    When Streamlit drops the session (tab closed, page reloaded) the session
    state is garbage-collected and the workflow's finalizer releases its
    handles and signals remote cleanup.
    """
    wf = st.session_state.get(WORKFLOW_KEY)
    if wf is None or wf.closed:
        wf = UploadWorkflow(event_sink=get_event_log().sink())
        st.session_state[WORKFLOW_KEY] = wf
        # A fresh workflow has no file yet; make the uploader re-send its selection.
        get_ui_state()["detector"].pop(UPLOADER_KEY, None)
    return wf


def discard_workflow() -> None:
    wf = st.session_state.pop(WORKFLOW_KEY, None)
    if wf is not None:
        wf.teardown()


def uploader_key() -> str:
    nonce = get_ui_state()["detector"].get(UPLOADER_NONCE_KEY, 0)
    return f"detector_uploader_{nonce}"


def clear_selection() -> None:
    """Tear the workflow down and empty the uploader (the next rerun starts fresh)."""
    discard_workflow()
    detector_state = get_ui_state()["detector"]
    detector_state[UPLOADER_NONCE_KEY] = detector_state.get(UPLOADER_NONCE_KEY, 0) + 1
    detector_state.pop(UPLOADER_KEY, None)


def disclaimer_accepted() -> bool:
    return bool(get_ui_state()["disclaimer"].get("accepted", False))


def accept_disclaimer() -> None:
    get_ui_state()["disclaimer"]["accepted"] = True
