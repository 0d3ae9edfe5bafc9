from __future__ import annotations


class WorkflowError(Exception):
    """Base class for errors raised by the upload/analysis workflow."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AnalysisRequestError(WorkflowError):
    """A remote call in the submission pipeline did not deliver what we need."""

    category = "transport"


class TransportError(AnalysisRequestError):
    """Connection failure, timeout, or a non-2xx HTTP response."""

    category = "transport"

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ContractError(AnalysisRequestError):
    """A successful HTTP exchange that is missing fields the client relies on."""

    category = "contract"


class SubmissionInProgressError(WorkflowError):
    """``submit`` was called while a previous submission is still running."""


class WorkflowClosedError(WorkflowError):
    """The workflow was torn down and accepts no further operations."""


class HandleReleasedError(LookupError):
    """A media handle was read or released after it had already been released."""
