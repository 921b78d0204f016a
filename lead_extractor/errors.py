"""Error taxonomy for the extraction pipeline.

Every error carries the HTTP status code the web layer answers with, so the
Flask app needs a single handler for the whole family.
"""
from __future__ import annotations

from typing import Optional


class PipelineError(RuntimeError):
    """Base class for failures surfaced to HTTP callers."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.__class__.__doc__ or self.__class__.__name__)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(PipelineError):
    """Missing or malformed request input."""

    status_code = 400


class SubmissionError(PipelineError):
    """The provider rejected the job or returned no dataset handle."""


class ExtractionFailed(PipelineError):
    """The provider reported the job as FAILED."""


class UnexpectedStatus(PipelineError):
    """The provider reported a status outside the recognised set."""

    def __init__(self, status: object) -> None:
        self.status = status
        super().__init__(f"Unexpected run status: {status}")


class Timeout(PipelineError):
    """The job did not reach a terminal state within the polling budget."""

    def __init__(self, attempts: int, last_status: Optional[str] = None) -> None:
        self.attempts = attempts
        self.last_status = last_status
        super().__init__(f"Extraction timed out after {attempts} attempts. Last status: {last_status}")


class JobCancelled(PipelineError):
    """Polling was aborted through the caller's timer."""


class EmptyResult(PipelineError):
    """The dataset held no items, or no item carried usable data."""

    status_code = 404


class MalformedResponse(PipelineError):
    """The provider returned a payload that violates its contract."""

    status_code = 422


class ProviderError(PipelineError):
    """Transport failure or non-2xx answer from a provider."""

    def __init__(self, message: str, *, upstream_status: Optional[int] = None) -> None:
        self.upstream_status = upstream_status
        super().__init__(message)


__all__ = [
    "PipelineError",
    "ValidationError",
    "SubmissionError",
    "ExtractionFailed",
    "UnexpectedStatus",
    "Timeout",
    "JobCancelled",
    "EmptyResult",
    "MalformedResponse",
    "ProviderError",
]
