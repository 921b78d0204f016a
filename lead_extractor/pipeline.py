"""Keyword extraction pipeline: submit, poll, fetch the dataset, normalise."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol

from .errors import EmptyResult, MalformedResponse, ValidationError
from .extractor import extract_all
from .models import DEFAULT_MAX_LEADS, ExtractionRequest, JobStatus, LeadRecord
from .poller import JobPoller, RunClientProtocol
from .polling import PollTimer

LOGGER = logging.getLogger(__name__)

MAX_RESULTS = 50


class DatasetClientProtocol(RunClientProtocol, Protocol):
    def list_items(self, dataset_id: str) -> Any:  # pragma: no cover - protocol
        ...


def normalize_keyword(keyword: Optional[str]) -> str:
    """Reduce a profile URL, handle, or hashtag to the bare keyword.

    ``https://twitter.com/johndoe`` and ``@johndoe`` both become ``johndoe``.
    """

    text = (keyword or "").strip()
    if text.startswith("http"):
        segments = [segment for segment in text.split("/") if segment]
        text = segments[-1] if segments else text
    if text[:1] in ("@", "#"):
        text = text[1:]
    return text


def clamp_max_leads(requested: Optional[int], limit: int = MAX_RESULTS) -> int:
    if not requested or requested < 1:
        requested = DEFAULT_MAX_LEADS
    return min(requested, limit)


def _require_list(items: Any, context: str) -> List[Any]:
    if not isinstance(items, list):
        LOGGER.error("Invalid %s payload: %r", context, type(items).__name__)
        raise MalformedResponse("Invalid response format from the scraping provider: expected an array")
    return items


class ResultPipeline:
    """Runs one extraction per call; holds no per-request state."""

    def __init__(
        self,
        client: DatasetClientProtocol,
        actor_ids: Mapping[str, str],
        *,
        poller: Optional[JobPoller] = None,
        max_results: int = MAX_RESULTS,
    ) -> None:
        self._client = client
        self._actor_ids = {platform.lower(): actor for platform, actor in actor_ids.items()}
        self._poller = poller or JobPoller(client)
        self._max_results = max_results

    @property
    def platforms(self) -> List[str]:
        return sorted(self._actor_ids)

    def actor_for(self, platform: str) -> str:
        try:
            return self._actor_ids[platform.lower()]
        except KeyError:
            raise ValidationError(
                f"Unsupported platform '{platform}'. Supported platforms: {self.platforms}"
            ) from None

    def build_input(self, request: ExtractionRequest) -> Dict[str, Any]:
        """Validate ``request`` and return the actor input payload."""

        if not request.keyword or not str(request.keyword).strip():
            raise ValidationError("Keyword is required")
        keyword = normalize_keyword(str(request.keyword))
        if not keyword:
            raise ValidationError("Keyword is required")

        payload = dict(request.extra)
        payload.update(
            {
                "keyword": keyword,
                "maxLeads": clamp_max_leads(request.max_leads, self._max_results),
                "language": request.language,
                "country": request.country,
                "proxyConfiguration": {"useApifyProxy": True},
            }
        )
        return payload

    def run(self, request: ExtractionRequest, *, timer: Optional[PollTimer] = None) -> List[LeadRecord]:
        actor_id = self.actor_for(request.platform)
        payload = self.build_input(request)
        LOGGER.info("Starting %s extraction with keyword: %s", request.platform, payload["keyword"])

        job = self._poller.run(actor_id, payload, timer=timer)
        items = _require_list(self._client.list_items(job.dataset_id), "dataset")
        LOGGER.info("Retrieved %s items from dataset %s", len(items), job.dataset_id)
        if not items:
            raise EmptyResult("No results found")

        records = extract_all(items)
        if all(record.is_empty for record in records):
            raise EmptyResult("No valid data could be extracted")
        LOGGER.info("Successfully cleaned %s items", len(records))
        return records

    def describe_run(self, run_id: str) -> Dict[str, Any]:
        """Return the provider's run record, with its items once it succeeded."""

        run = self._client.get_run(run_id)
        if not isinstance(run, Mapping):
            raise MalformedResponse(f"Invalid run payload for {run_id}: expected an object")
        described = dict(run)
        dataset_id = run.get("defaultDatasetId")
        if JobStatus.from_provider(run.get("status")) is JobStatus.SUCCEEDED and dataset_id:
            described["dataset"] = _require_list(self._client.list_items(dataset_id), "dataset")
        return described

    def fetch_dataset(self, run_id: str) -> List[Any]:
        run = self._client.get_run(run_id)
        dataset_id = run.get("defaultDatasetId") if isinstance(run, Mapping) else None
        if not dataset_id:
            raise MalformedResponse(f"Run {run_id} has no dataset")
        LOGGER.info("Fetching dataset %s for run %s", dataset_id, run_id)
        return _require_list(self._client.list_items(dataset_id), "dataset")


__all__ = ["ResultPipeline", "MAX_RESULTS", "normalize_keyword", "clamp_max_leads"]
