"""Reusable UI components for the DeepfakeGuard client.

Design principles:
- Components are stateless (take data, return rendered UI)
- They receive the ``st`` module as an argument so tests can pass a fake
- Media is rendered from bytes read out of the workflow's handles, never
  from a server URL
"""

from __future__ import annotations

from typing import Any, Literal

from deepfakeguard.ui.formatting import format_confidence, format_label
from deepfakeguard.workflow.types import WorkflowSnapshot, WorkflowStatus


# =============================================================================
# THEME & STYLING
# =============================================================================

def inject_custom_css(st) -> None:
    """Inject custom CSS for consistent styling across the app."""
    st.markdown("""
    <style>
        :root {
            --primary-color: #667eea;
            --success-color: #48bb78;
            --warning-color: #ed8936;
            --danger-color: #f56565;
            --neutral-color: #718096;
        }

        .app-logo {
            font-size: 1.75rem;
            font-weight: 700;
        }
        .app-logo span { color: var(--primary-color); }

        /* Verdict pills */
        .pill {
            display: inline-block;
            padding: 0.35rem 1rem;
            border-radius: 9999px;
            font-weight: 700;
            letter-spacing: 0.05em;
            color: white;
        }
        .pill-danger { background: var(--danger-color); }
        .pill-success { background: var(--success-color); }

        /* Status badges */
        .status-badge {
            display: inline-block;
            padding: 0.25rem 0.75rem;
            border-radius: 9999px;
            font-size: 0.75rem;
            font-weight: 600;
            text-transform: uppercase;
        }
        .status-idle, .status-ready { background: #e2e8f0; color: #4a5568; }
        .status-submitting { background: #bee3f8; color: #2c5282; }
        .status-succeeded { background: #c6f6d5; color: #22543d; }
        .status-failed, .status-invalid-selection { background: #fed7d7; color: #822727; }

        .muted { color: var(--neutral-color); }
    </style>
    """, unsafe_allow_html=True)


# =============================================================================
# STATUS & VERDICT
# =============================================================================

def render_status_badge(st, status: WorkflowStatus, text: str | None = None) -> None:
    display_text = text or status.value
    st.markdown(
        f'<span class="status-badge status-{status.value}">{display_text}</span>',
        unsafe_allow_html=True,
    )


def verdict_pill_class(label: str | None) -> Literal["pill-danger", "pill-success"]:
    return "pill-danger" if format_label(label) == "FAKE" else "pill-success"


def render_verdict(st, snapshot: WorkflowSnapshot) -> None:
    """Render the predicted label pill plus optional confidence / frame count."""
    job = snapshot.job
    if job is None or not job.label:
        return

    label = format_label(job.label)
    st.markdown(
        f'<div class="result-banner"><span class="pill {verdict_pill_class(job.label)}">{label}</span></div>',
        unsafe_allow_html=True,
    )

    details: list[str] = []
    confidence = format_confidence(job.confidence)
    if confidence:
        details.append(f"Confidence: {confidence}")
    if job.frames_processed is not None:
        details.append(f"Frames processed: {job.frames_processed}")
    if details:
        st.caption(" · ".join(details))


# =============================================================================
# MEDIA
# =============================================================================

def render_media(st, data: bytes | None, media_type: str | None, *, empty_text: str, caption: str | None = None) -> None:
    """Render image or video bytes, or a muted placeholder when there are none."""
    if not data:
        st.markdown(f'<p class="muted">{empty_text}</p>', unsafe_allow_html=True)
        return

    if media_type and str(media_type).startswith("video/"):
        st.video(data, format=media_type)
    else:
        st.image(data, caption=caption, width="stretch")


def render_file_info(st, snapshot: WorkflowSnapshot) -> None:
    if snapshot.file_name is None:
        return
    st.markdown(f"Selected: **{snapshot.file_name}** ({snapshot.file_size_mb} MB)")


def render_event_summary(st, counts: dict[str, Any]) -> None:
    if not counts:
        st.caption("No failed submissions recorded.")
        return
    cols = st.columns(len(counts))
    for col, (category, n) in zip(cols, sorted(counts.items())):
        with col:
            st.metric(label=f"{category} failures", value=n)
