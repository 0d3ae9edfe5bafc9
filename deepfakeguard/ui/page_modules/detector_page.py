"""Detector page.

Binds the file uploader and the Analyze button to the session's
``UploadWorkflow`` and renders whatever its snapshot says.
"""

from __future__ import annotations

from deepfakeguard.ui.components import (
    render_file_info,
    render_media,
    render_status_badge,
    render_verdict,
)
from deepfakeguard.ui.state import UPLOADER_KEY, clear_selection, get_ui_state, get_workflow, uploader_key
from deepfakeguard.workflow.errors import SubmissionInProgressError
from deepfakeguard.workflow.types import SelectedFile
from deepfakeguard.workflow.validator import accepted_extensions


def _sync_selection(wf, uploaded) -> None:
    """Forward uploader changes to the workflow, once per distinct selection."""
    detector_state = get_ui_state()["detector"]
    previous_id = detector_state.get(UPLOADER_KEY)

    if uploaded is None:
        if previous_id is not None:
            detector_state[UPLOADER_KEY] = None
            wf.reset()
        return

    file_id = getattr(uploaded, "file_id", None) or f"{uploaded.name}:{uploaded.size}"
    if file_id == previous_id:
        return
    detector_state[UPLOADER_KEY] = file_id
    wf.select(SelectedFile.from_upload(uploaded))


def render_detector_tab(*, st) -> None:
    wf = get_workflow()

    st.title("Deepfake Detector")
    st.markdown(
        '<p class="subtitle">Upload an image or video. The backend runs the deepfake model '
        "and returns a heatmap.</p>",
        unsafe_allow_html=True,
    )

    uploaded = st.file_uploader(
        "Drag & drop a file here or click to browse",
        type=accepted_extensions(wf.config.upload),
        key=uploader_key(),
    )
    _sync_selection(wf, uploaded)

    snap = wf.snapshot()
    render_file_info(st, snap)
    st.caption(f"API: {wf.api_base_url}")

    col_analyze, col_clear = st.columns([1, 1])
    with col_clear:
        # Runs before the next rerun, which then starts from a fresh workflow and an empty uploader.
        st.button("Clear", disabled=snap.is_busy, on_click=clear_selection)
    with col_analyze:
        analyze = st.button("Analyze", type="primary", disabled=not snap.can_submit)
    if analyze:
        with st.spinner("Analyzing..."):
            try:
                snap = wf.submit()
            except SubmissionInProgressError as exc:
                st.warning(exc.message)
                snap = wf.snapshot()

    render_status_badge(st, snap.status)
    if snap.error:
        st.error(snap.error)

    render_verdict(st, snap)

    col_orig, col_out = st.columns(2)
    with col_orig:
        st.subheader("Original")
        render_media(st, wf.read_preview(), snap.media_type, empty_text="No file selected.")
    with col_out:
        st.subheader("Model Output")
        result_bytes = wf.read_result()
        render_media(
            st,
            result_bytes,
            snap.result_media_type,
            empty_text="Run analysis to see output.",
            caption="Heatmap",
        )
        if result_bytes:
            st.download_button(
                "Save output",
                data=result_bytes,
                file_name=snap.result_filename(),
                mime=snap.result_media_type or "application/octet-stream",
            )
