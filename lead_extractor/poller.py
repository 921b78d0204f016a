"""Submit actor runs and wait for them to reach a terminal state."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Protocol

from .errors import (
    ExtractionFailed,
    JobCancelled,
    MalformedResponse,
    ProviderError,
    SubmissionError,
    Timeout,
    UnexpectedStatus,
)
from .models import JobStatus, ScrapeJob
from .polling import PollPolicy, PollTimer

LOGGER = logging.getLogger(__name__)


class RunClientProtocol(Protocol):
    """The subset of the scraping provider the poller talks to."""

    def start_run(self, actor_id: str, payload: Mapping[str, Any]) -> Mapping[str, Any]:  # pragma: no cover - protocol
        ...

    def get_run(self, run_id: str) -> Mapping[str, Any]:  # pragma: no cover - protocol
        ...


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            LOGGER.debug("Ignoring unparsable timestamp %r", value)
    return datetime.now(timezone.utc)


class JobPoller:
    """Drives one actor run from submission to a terminal status.

    Each :meth:`await_completion` call polls the provider at most
    ``policy.max_attempts`` times, waiting ``policy.interval_seconds`` between
    consecutive polls (never after the last one). Network failures during a
    poll propagate immediately; nothing is retried.
    """

    def __init__(self, client: RunClientProtocol, *, policy: Optional[PollPolicy] = None) -> None:
        self._client = client
        self.policy = policy or PollPolicy()

    def submit(self, actor_id: str, payload: Mapping[str, Any]) -> ScrapeJob:
        try:
            run = self._client.start_run(actor_id, payload)
        except ProviderError as exc:
            raise SubmissionError(f"Failed to start extraction: {exc}") from exc

        if not isinstance(run, Mapping) or not run.get("id"):
            raise SubmissionError("No run ID returned from the scraping provider")
        if not run.get("defaultDatasetId"):
            raise SubmissionError("No dataset ID returned from the scraping provider")

        status = JobStatus.from_provider(run.get("status") or JobStatus.READY.value)
        job = ScrapeJob(
            id=str(run["id"]),
            actor_id=actor_id,
            status=status if status in (JobStatus.READY, JobStatus.RUNNING) else JobStatus.READY,
            dataset_id=str(run["defaultDatasetId"]),
            started_at=_parse_timestamp(run.get("startedAt")),
        )
        LOGGER.info("Actor %s run started: %s", actor_id, job.id)
        return job

    def await_completion(self, job: ScrapeJob, *, timer: Optional[PollTimer] = None) -> ScrapeJob:
        """Poll until ``job`` succeeds; raise for every other outcome."""

        timer = timer or PollTimer(self.policy.deadline_seconds)
        last_status: Optional[str] = job.status.value
        polls = 0

        while polls < self.policy.max_attempts:
            if polls:
                if timer.wait(self.policy.interval_seconds):
                    raise JobCancelled(f"Polling for run {job.id} was cancelled")
                if timer.expired:
                    break
            elif timer.cancelled:
                raise JobCancelled(f"Polling for run {job.id} was cancelled")

            run = self._client.get_run(job.id)
            polls += 1
            if not isinstance(run, Mapping):
                raise MalformedResponse(f"Invalid run payload for {job.id}: expected an object")

            raw_status = run.get("status")
            last_status = str(raw_status)
            LOGGER.info("Run %s status: %s (attempt %s/%s)", job.id, raw_status, polls, self.policy.max_attempts)
            if run.get("defaultDatasetId"):
                job.dataset_id = str(run["defaultDatasetId"])

            status = JobStatus.from_provider(raw_status)
            job.status = status
            if status is JobStatus.SUCCEEDED:
                LOGGER.info("Run %s completed successfully", job.id)
                return job
            if status is JobStatus.FAILED:
                job.error_message = run.get("errorMessage") or "Unknown error"
                raise ExtractionFailed(f"Extraction failed: {job.error_message}")
            if status is JobStatus.UNKNOWN:
                raise UnexpectedStatus(raw_status)

        job.status = JobStatus.TIMED_OUT
        LOGGER.warning("Run %s timed out after %s polls. Last status: %s", job.id, polls, last_status)
        raise Timeout(polls, last_status)

    def run(self, actor_id: str, payload: Mapping[str, Any], *, timer: Optional[PollTimer] = None) -> ScrapeJob:
        return self.await_completion(self.submit(actor_id, payload), timer=timer)


__all__ = ["JobPoller", "RunClientProtocol"]
