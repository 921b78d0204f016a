"""Unit tests for :mod:`lead_extractor.orders`."""
from __future__ import annotations

from typing import Any, List

import pytest

from lead_extractor.errors import MalformedResponse, ValidationError
from lead_extractor.orders import OrderService


class FakeOrderClient:
    def __init__(self) -> None:
        self.created: List[tuple] = []
        self.pages: List[int] = []
        self.order_payload: Any = {
            "id": "ord-1",
            "source": "growth",
            "source_type": "FL",
            "max_leads": "250",
            "status": "processing",
            "status_display": "Processing",
        }
        self.csv_text = "Name,Email\nAda,ada@example.com\n"

    def create_order(self, source, source_type, max_leads):
        self.created.append((source, source_type, max_leads))
        return self.order_payload

    def get_order(self, order_id):
        return self.order_payload

    def list_orders(self, page=1):
        self.pages.append(page)
        return {"count": 1, "results": [self.order_payload]}

    def download_order(self, order_id):
        return self.csv_text


@pytest.fixture()
def client() -> FakeOrderClient:
    return FakeOrderClient()


def test_create_defaults_source_type_and_forwards_values(client) -> None:
    order = OrderService(client).create(" growth ", max_leads="250")

    assert client.created == [("growth", "FL", 250)]
    assert order.id == "ord-1"
    assert order.max_leads == 250
    assert not order.is_terminal


def test_create_accepts_lowercase_source_type(client) -> None:
    OrderService(client).create("growth", "li", 100)

    assert client.created[0][1] == "LI"


@pytest.mark.parametrize(
    ("source", "source_type", "max_leads", "message"),
    [
        ("", "FL", 100, "Source is required"),
        (None, "FL", 100, "Source is required"),
        ("growth", "XX", 100, "Invalid source_type. Must be one of: HT, FL, FO, LI"),
        ("growth", "FL", 99, "max_leads must be a number between 100 and 1000"),
        ("growth", "FL", 1001, "max_leads must be a number between 100 and 1000"),
    ],
)
def test_create_validates_input(client, source, source_type, max_leads, message) -> None:
    with pytest.raises(ValidationError) as excinfo:
        OrderService(client).create(source, source_type, max_leads)

    assert str(excinfo.value) == message
    assert client.created == []


def test_create_rejects_non_numeric_lead_count(client) -> None:
    with pytest.raises(ValidationError):
        OrderService(client).create("growth", "FL", "many")


def test_create_rejects_payload_without_id(client) -> None:
    client.order_payload = {"detail": "ok"}

    with pytest.raises(MalformedResponse):
        OrderService(client).create("growth")


def test_status_returns_order(client) -> None:
    client.order_payload = dict(client.order_payload, status="completed", csv_url="https://files.example/ord-1.csv")

    order = OrderService(client).status("ord-1")

    assert order.is_terminal
    assert order.to_dict()["csv_url"] == "https://files.example/ord-1.csv"


def test_status_requires_order_id(client) -> None:
    with pytest.raises(ValidationError):
        OrderService(client).status("")


def test_list_passes_page_through(client) -> None:
    result = OrderService(client).list("3")

    assert client.pages == [3]
    assert result["count"] == 1


@pytest.mark.parametrize("page", ["0", "-2", "abc"])
def test_list_rejects_bad_pages(client, page) -> None:
    with pytest.raises(ValidationError):
        OrderService(client).list(page)


def test_list_defaults_to_first_page(client) -> None:
    OrderService(client).list(None)

    assert client.pages == [1]


def test_download_parses_csv_rows(client) -> None:
    rows = OrderService(client).download("ord-1")

    assert rows == [{"Name": "Ada", "Email": "ada@example.com"}]
