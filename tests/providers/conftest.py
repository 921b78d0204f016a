from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self.reason = "OK" if status_code < 400 else "Error"
        self._payload = payload
        self.text = text if text is not None else ""

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeSession:
    """Records outgoing requests and replays queued responses."""

    def __init__(self) -> None:
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []
        self.responses: List[Any] = []
        self.closed = False

    def queue(self, response: Any) -> None:
        self.responses.append(response)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection reset")


@pytest.fixture()
def respond():
    return FakeResponse
