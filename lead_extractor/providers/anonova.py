"""Client for the Anonova order API used for Instagram extractions."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..errors import ProviderError
from .base import HttpProvider, ProviderConfig

LOGGER = logging.getLogger(__name__)

ANONOVA_API_BASE = "https://src-marketing101.com/api/orders"


class AnonovaClient(HttpProvider):
    """Create, inspect, list, and download scraping orders."""

    name = "anonova"

    def __init__(
        self,
        api_key: str,
        *,
        config: Optional[ProviderConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(config or ProviderConfig(base_url=ANONOVA_API_BASE), session=session)
        if not api_key:
            raise ProviderError("An Anonova API key is required")
        self.session.headers.update({"X-API-Key": api_key})

    def create_order(self, source: str, source_type: str, max_leads: int) -> Dict[str, Any]:
        params = {"source": source, "source_type": source_type, "max_leads": str(max_leads)}
        order = self._request("POST", "create/", params=params)
        LOGGER.info("Order created: %s", order.get("id") if isinstance(order, dict) else order)
        return order

    def get_order(self, order_id: str) -> Dict[str, Any]:
        return self._request("GET", f"{order_id}")

    def list_orders(self, page: int = 1) -> Any:
        return self._request("GET", "list/", params={"page": page})

    def download_order(self, order_id: str) -> str:
        """Return the order's result set as CSV text."""

        return self._request_text("GET", f"{order_id}/download")


__all__ = ["AnonovaClient", "ANONOVA_API_BASE"]
