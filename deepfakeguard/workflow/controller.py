"""Upload & analysis workflow controller.

State machine::

    idle --select(valid)--> ready --submit--> submitting --success--> succeeded
    idle --select(invalid)--> invalid-selection
    ready --select(any)--> ready | invalid-selection
    submitting --failure(any step)--> failed
    succeeded|failed --select(valid)--> ready
    any --reset--> idle
    any --teardown--> closed (handles released, best-effort remote cleanup)

Network calls are the only blocking points. The controller lock is never held
across one; instead every outcome is checked against the submission token,
which ``select``, ``reset`` and ``teardown`` bump. A stale outcome is dropped
without touching state or creating handles.
"""

from __future__ import annotations

import logging
import threading
import weakref
from typing import Any

from deepfakeguard.config import ClientConfig, get_client_config
from deepfakeguard.event_log import EventSink
from deepfakeguard.workflow.client import AnalysisClient
from deepfakeguard.workflow.errors import (
    AnalysisRequestError,
    ContractError,
    SubmissionInProgressError,
    WorkflowClosedError,
)
from deepfakeguard.workflow.handles import HandleSlot, MediaStore
from deepfakeguard.workflow.types import (
    AnalysisJob,
    SelectedFile,
    ValidationResult,
    WorkflowSnapshot,
    WorkflowStatus,
    parse_analysis_job,
    parse_job_id,
)
from deepfakeguard.workflow.validator import validate

logger = logging.getLogger(__name__)

SELECT_FILE_MESSAGE = "Please select a file."
UNEXPECTED_ERROR_MESSAGE = "Unexpected error."


def _discard_event(event: dict[str, Any]) -> None:
    return None


class _Resources:
    """State that must be released even if the controller is never torn down explicitly.

    Kept separate from ``UploadWorkflow`` so ``weakref.finalize`` can hold it
    without keeping the controller alive.
    """

    def __init__(self, client: AnalysisClient, emit: EventSink) -> None:
        self.lock = threading.RLock()
        self.store = MediaStore()
        self.preview = HandleSlot(self.store, "preview")
        self.result = HandleSlot(self.store, "result")
        self.client = client
        self.emit = emit
        self.pending_job_id: str | None = None
        self.closed = False

    def teardown(self) -> bool:
        with self.lock:
            if self.closed:
                return False
            self.closed = True
            self.preview.clear()
            self.result.clear()
            job_id, self.pending_job_id = self.pending_job_id, None

        # Nothing on this path may wait for the network.
        if job_id:
            self.client.signal_delete(job_id)
        self.emit({"type": "teardown", "cleanup_job_id": job_id})
        return True


class UploadWorkflow:
    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        client: AnalysisClient | None = None,
        event_sink: EventSink | None = None,
    ) -> None:
        self.config = config or get_client_config()
        self._res = _Resources(client or AnalysisClient(self.config.api), event_sink or _discard_event)
        self._status = WorkflowStatus.IDLE
        self._error: str | None = None
        self._file: SelectedFile | None = None
        self._job: AnalysisJob | None = None
        self._token = 0
        self._finalizer = weakref.finalize(self, self._res.teardown)

    def __enter__(self) -> "UploadWorkflow":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.teardown()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def status(self) -> WorkflowStatus:
        return self._status

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def closed(self) -> bool:
        return self._res.closed

    @property
    def pending_cleanup_job_id(self) -> str | None:
        return self._res.pending_job_id

    @property
    def api_base_url(self) -> str:
        return self._res.client.base_url

    @property
    def store(self) -> MediaStore:
        return self._res.store

    def snapshot(self) -> WorkflowSnapshot:
        with self._res.lock:
            f = self._file
            return WorkflowSnapshot(
                status=self._status,
                error=self._error,
                file_name=f.name if f else None,
                file_size=f.size if f else None,
                media_type=f.mime_type if f else None,
                preview=self._res.preview.current,
                result=self._res.result.current,
                job=self._job,
            )

    def read_preview(self) -> bytes | None:
        with self._res.lock:
            return self._res.preview.read()

    def read_result(self) -> bytes | None:
        with self._res.lock:
            return self._res.result.read()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def select(self, candidate: SelectedFile | None) -> ValidationResult:
        """Validate ``candidate`` and, if it passes, make it the current file."""
        res = self._res
        with res.lock:
            self._ensure_open()
            self._token += 1
            self._error = None
            verdict = validate(candidate, self.config.upload)
            self._clear_result()

            if not verdict.ok:
                self._file = None
                res.preview.clear()
                self._status = WorkflowStatus.INVALID_SELECTION
                self._error = verdict.reason
                res.emit(
                    {
                        "type": "selection_rejected",
                        "file_name": getattr(candidate, "name", None),
                        "mime_type": getattr(candidate, "mime_type", None),
                        "size": getattr(candidate, "size", None),
                        "reason": verdict.reason,
                    }
                )
                return verdict

            self._file = candidate
            res.preview.set(candidate.data, candidate.mime_type)
            self._status = WorkflowStatus.READY
            res.emit(
                {
                    "type": "selection_accepted",
                    "file_name": candidate.name,
                    "mime_type": candidate.mime_type,
                    "size": candidate.size,
                }
            )
            return verdict

    def reset(self) -> None:
        """Forget the current file and result; release both handles."""
        res = self._res
        with res.lock:
            self._ensure_open()
            self._token += 1
            self._file = None
            self._error = None
            res.preview.clear()
            self._clear_result()
            self._status = WorkflowStatus.IDLE
            stale, res.pending_job_id = res.pending_job_id, None
        if stale:
            res.client.signal_delete(stale)
        res.emit({"type": "reset", "cleanup_job_id": stale})

    def teardown(self) -> None:
        """Release every handle and fire remote cleanup. Safe to call more than once."""
        with self._res.lock:
            self._token += 1
            self._file = None
            self._job = None
        self._finalizer()

    def submit(self) -> WorkflowSnapshot:
        """Run the full pipeline for the current file and return the resulting snapshot."""
        res = self._res
        with res.lock:
            self._ensure_open()
            if self._status == WorkflowStatus.SUBMITTING:
                raise SubmissionInProgressError("An analysis is already running.")
            if self._file is None:
                self._status = WorkflowStatus.FAILED
                self._error = SELECT_FILE_MESSAGE
                res.emit({"type": "submission_failed", "category": "precondition", "error": SELECT_FILE_MESSAGE})
                return self.snapshot()

            self._token += 1
            token = self._token
            selected = self._file
            self._error = None
            self._clear_result()
            stale, res.pending_job_id = res.pending_job_id, None
            self._status = WorkflowStatus.SUBMITTING

        if stale:
            res.client.signal_delete(stale)
            res.emit({"type": "cleanup_requested", "job_id": stale, "mode": "signal"})
        res.emit({"type": "submission_started", "file_name": selected.name, "size": selected.size})

        try:
            self._run_pipeline(token, selected)
        except AnalysisRequestError as exc:
            if isinstance(exc, ContractError):
                logger.warning("Analysis API contract violation: %s", exc.message)
            else:
                logger.info("Analysis request failed: %s", exc.message)
            self._fail(token, exc.message, exc.category)
        except Exception:
            logger.exception("Unexpected error during analysis submission")
            self._fail(token, UNEXPECTED_ERROR_MESSAGE, "unexpected")

        return self.snapshot()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run_pipeline(self, token: int, selected: SelectedFile) -> None:
        res = self._res
        payload = res.client.predict(selected)

        # Record the job before anything else can fail so cleanup can target it.
        job_id = parse_job_id(payload)
        if not self._record_job(token, job_id):
            return

        job = parse_analysis_job(payload)
        media = res.client.download(job.download_url)

        stale = None
        with res.lock:
            current = self._is_current(token)
            if current:
                handle = res.result.set(media.data, job.output_type or media.content_type)
                self._job = job
                self._status = WorkflowStatus.SUCCEEDED
            else:
                stale = self._take_pending(job_id)
        if not current:
            if stale:
                res.client.signal_delete(stale)
            return

        res.emit(
            {
                "type": "submission_succeeded",
                "job_id": job.job_id,
                "label": job.label,
                "output_type": handle.media_type,
                "size": handle.size,
            }
        )

        if job.job_id:
            res.client.delete_job(job.job_id)
            with res.lock:
                self._take_pending(job.job_id)
            res.emit({"type": "cleanup_requested", "job_id": job.job_id, "mode": "request"})

    def _record_job(self, token: int, job_id: str | None) -> bool:
        res = self._res
        with res.lock:
            current = self._is_current(token)
            if current and job_id:
                res.pending_job_id = job_id
        if not current and job_id:
            # Nobody will ever show this result; drop the server copy now.
            res.client.signal_delete(job_id)
        return current

    def _take_pending(self, job_id: str | None) -> str | None:
        res = self._res
        if job_id and res.pending_job_id == job_id:
            res.pending_job_id = None
            return job_id
        return None

    def _fail(self, token: int, message: str, category: str) -> None:
        res = self._res
        with res.lock:
            if not self._is_current(token):
                return
            self._status = WorkflowStatus.FAILED
            self._error = message
            job_id = res.pending_job_id
        res.emit({"type": "submission_failed", "category": category, "error": message, "job_id": job_id})

    def _is_current(self, token: int) -> bool:
        return token == self._token and not self._res.closed

    def _clear_result(self) -> None:
        self._res.result.clear()
        self._job = None

    def _ensure_open(self) -> None:
        if self._res.closed:
            raise WorkflowClosedError("The workflow has been closed.")
