"""Client for the Apify actor API (run, run status, dataset items)."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from ..errors import ProviderError, SubmissionError
from .base import HttpProvider, ProviderConfig, error_type

LOGGER = logging.getLogger(__name__)

APIFY_API_BASE = "https://api.apify.com/v2"
DATASET_ITEM_LIMIT = 1000


def _unwrap(payload: Any) -> Any:
    """Apify wraps single objects in ``{"data": ...}``; lists come bare."""

    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        return payload["data"]
    return payload


class ApifyClient(HttpProvider):
    """Thin wrapper over the three Apify endpoints the pipeline needs."""

    name = "apify"

    def __init__(
        self,
        token: str,
        *,
        config: Optional[ProviderConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(config or ProviderConfig(base_url=APIFY_API_BASE), session=session)
        if not token:
            raise ProviderError("An Apify API token is required")
        self.session.headers.update({"Authorization": f"Bearer {token}"})

    def start_run(self, actor_id: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        LOGGER.debug("Starting actor %s with input %s", actor_id, payload)
        response = self._send("POST", f"acts/{actor_id}/runs", json=dict(payload))
        if error_type(response) == "actor-is-not-rented":
            raise SubmissionError("Service temporarily unavailable. Please try again later or contact support.")
        self._raise_for_status(response)
        try:
            return _unwrap(response.json())
        except ValueError as exc:
            raise ProviderError("apify returned a non-JSON response", upstream_status=response.status_code) from exc

    def get_run(self, run_id: str) -> Dict[str, Any]:
        return _unwrap(self._request("GET", f"actor-runs/{run_id}"))

    def list_items(self, dataset_id: str, *, limit: int = DATASET_ITEM_LIMIT) -> Any:
        """Return the dataset items exactly as decoded; callers validate the shape."""

        params = {"clean": "true", "format": "json", "limit": limit}
        return self._request("GET", f"datasets/{dataset_id}/items", params=params)


__all__ = ["ApifyClient", "APIFY_API_BASE", "DATASET_ITEM_LIMIT"]
