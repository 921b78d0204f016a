"""Order workflow for the Anonova-style order provider."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

from .errors import MalformedResponse, ValidationError
from .ingestion.loaders import parse_order_csv
from .models import ORDER_SOURCE_TYPES, Order

LOGGER = logging.getLogger(__name__)

MIN_ORDER_LEADS = 100
MAX_ORDER_LEADS = 1000
DEFAULT_SOURCE_TYPE = "FL"


class OrderClientProtocol(Protocol):
    def create_order(self, source: str, source_type: str, max_leads: int) -> Any:  # pragma: no cover - protocol
        ...

    def get_order(self, order_id: str) -> Any:  # pragma: no cover - protocol
        ...

    def list_orders(self, page: int = 1) -> Any:  # pragma: no cover - protocol
        ...

    def download_order(self, order_id: str) -> str:  # pragma: no cover - protocol
        ...


def _as_int(value: Any, field: str) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer, got {value!r}") from None


def _as_order(payload: Any) -> Order:
    if not isinstance(payload, dict) or not payload.get("id"):
        raise MalformedResponse("Invalid order payload: expected an object with an id")
    return Order.from_dict(payload)


class OrderService:
    """Validates order requests and adapts provider payloads."""

    def __init__(self, client: OrderClientProtocol) -> None:
        self._client = client

    def create(
        self,
        source: Optional[str],
        source_type: Optional[str] = None,
        max_leads: Any = MIN_ORDER_LEADS,
    ) -> Order:
        source = (source or "").strip()
        if not source:
            raise ValidationError("Source is required")

        source_type = (source_type or DEFAULT_SOURCE_TYPE).strip().upper()
        if source_type not in ORDER_SOURCE_TYPES:
            raise ValidationError(f"Invalid source_type. Must be one of: {', '.join(ORDER_SOURCE_TYPES)}")

        leads = _as_int(max_leads, "max_leads")
        if not MIN_ORDER_LEADS <= leads <= MAX_ORDER_LEADS:
            raise ValidationError(f"max_leads must be a number between {MIN_ORDER_LEADS} and {MAX_ORDER_LEADS}")

        LOGGER.info("Creating %s order for %s (%s leads)", source_type, source, leads)
        return _as_order(self._client.create_order(source, source_type, leads))

    def status(self, order_id: str) -> Order:
        if not order_id:
            raise ValidationError("Order ID is required for order details")
        return _as_order(self._client.get_order(order_id))

    def list(self, page: Any = 1) -> Any:
        page_number = _as_int(page or 1, "page")
        if page_number < 1:
            raise ValidationError("page must be a positive integer")
        return self._client.list_orders(page_number)

    def download(self, order_id: str) -> List[Dict[str, Optional[str]]]:
        if not order_id:
            raise ValidationError("Order ID is required for download")
        rows = parse_order_csv(self._client.download_order(order_id))
        LOGGER.info("Downloaded %s rows for order %s", len(rows), order_id)
        return rows


__all__ = ["OrderService", "MIN_ORDER_LEADS", "MAX_ORDER_LEADS", "DEFAULT_SOURCE_TYPE"]
