from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from deepfakeguard.workflow.errors import ContractError


class WorkflowStatus(str, Enum):
    IDLE = "idle"
    INVALID_SELECTION = "invalid-selection"
    READY = "ready"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SelectedFile:
    """User-chosen input.

    ``size`` is the declared size reported by the uploader; it is what the
    validator checks, independent of how many bytes ``data`` holds.
    """

    name: str
    mime_type: str
    size: int
    data: bytes = field(repr=False, default=b"")

    @property
    def size_mb(self) -> float:
        return self.size / 1024 / 1024

    @property
    def is_video(self) -> bool:
        return self.mime_type.startswith("video/")

    @classmethod
    def from_upload(cls, uploaded: Any) -> "SelectedFile":
        """Build from a Streamlit ``UploadedFile`` (or anything with the same attributes)."""
        data = uploaded.getvalue()
        size = getattr(uploaded, "size", None)
        return cls(
            name=str(uploaded.name),
            mime_type=str(uploaded.type or ""),
            size=int(size if size is not None else len(data)),
            data=bytes(data),
        )


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: str | None = None

    @classmethod
    def accept(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def reject(cls, reason: str) -> "ValidationResult":
        return cls(ok=False, reason=reason)


@dataclass(frozen=True)
class AnalysisJob:
    job_id: str | None
    label: str | None
    output_type: str | None
    download_url: str
    confidence: float | None = None
    frames_processed: int | None = None

    @property
    def is_fake(self) -> bool:
        return str(self.label or "").upper() == "FAKE"


def parse_job_id(payload: Any) -> str | None:
    """Return the job id from a prediction response body, if present."""
    if not isinstance(payload, dict):
        return None
    job_id = payload.get("job_id")
    return str(job_id) if job_id else None


def parse_analysis_job(payload: Any) -> AnalysisJob:
    """Parse a successful ``/predict`` response body.

    Raises ``ContractError`` when the body is not an object or has no
    ``download_url``.
    """
    if not isinstance(payload, dict):
        raise ContractError("Unexpected response from analysis API.")

    download_url = payload.get("download_url") or None
    if not download_url:
        raise ContractError("Missing download_url from API response.")

    label = payload.get("label")
    confidence = payload.get("confidence")
    frames = payload.get("frames_processed")
    try:
        confidence = float(confidence) if confidence is not None else None
    except (TypeError, ValueError):
        confidence = None
    try:
        frames = int(frames) if frames is not None else None
    except (TypeError, ValueError):
        frames = None

    return AnalysisJob(
        job_id=parse_job_id(payload),
        label=str(label) if label is not None else None,
        output_type=payload.get("output_type") or None,
        download_url=str(download_url),
        confidence=confidence,
        frames_processed=frames,
    )


@dataclass(frozen=True)
class DownloadedMedia:
    data: bytes = field(repr=False)
    content_type: str | None = None


@dataclass(frozen=True)
class MediaHandle:
    """Opaque ``blob:`` style reference into a ``MediaStore``."""

    url: str
    media_type: str | None
    size: int

    @property
    def is_video(self) -> bool:
        return bool(self.media_type) and str(self.media_type).startswith("video/")


@dataclass(frozen=True)
class WorkflowSnapshot:
    """Everything the view needs to render one frame of the detector page."""

    status: WorkflowStatus
    error: str | None = None
    file_name: str | None = None
    file_size: int | None = None
    media_type: str | None = None
    preview: MediaHandle | None = None
    result: MediaHandle | None = None
    job: AnalysisJob | None = None

    @property
    def file_size_mb(self) -> str | None:
        if self.file_size is None:
            return None
        return f"{self.file_size / 1024 / 1024:.2f}"

    @property
    def result_media_type(self) -> str | None:
        return self.result.media_type if self.result is not None else None

    @property
    def is_busy(self) -> bool:
        return self.status == WorkflowStatus.SUBMITTING

    @property
    def can_submit(self) -> bool:
        return self.preview is not None and not self.is_busy

    def result_filename(self) -> str:
        ext = "mp4" if self.result is not None and self.result.is_video else "png"
        return f"deepfake_output.{ext}"
