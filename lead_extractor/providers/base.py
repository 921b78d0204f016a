"""Common plumbing shared by the HTTP provider clients."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..errors import ProviderError

LOGGER = logging.getLogger(__name__)


@dataclass
class ProviderConfig:
    """Connection settings shared by all provider clients."""

    base_url: str
    timeout_seconds: float = 30.0


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if body.get("message"):
            return str(body["message"])
    return f"{response.status_code} {response.reason}".strip()


def error_type(response: requests.Response) -> Optional[str]:
    """Return the provider's machine-readable error type, if it sent one."""

    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("type")
    return None


class HttpProvider:
    """Base class owning a :class:`requests.Session` for one provider."""

    name = "provider"

    def __init__(self, config: ProviderConfig, *, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        self.close()

    def _url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self._url(path)
        kwargs.setdefault("timeout", self.config.timeout_seconds)
        LOGGER.debug("%s %s %s", self.name, method, url)
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise ProviderError(f"{self.name} request failed: {exc}") from exc
        return response

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and decode its JSON body, raising on non-2xx answers."""

        response = self._send(method, path, **kwargs)
        self._raise_for_status(response)
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(
                f"{self.name} returned a non-JSON response", upstream_status=response.status_code
            ) from exc

    def _request_text(self, method: str, path: str, **kwargs: Any) -> str:
        response = self._send(method, path, **kwargs)
        self._raise_for_status(response)
        return response.text

    def _raise_for_status(self, response: requests.Response) -> None:
        if response.ok:
            return
        raise ProviderError(
            f"{self.name} error: {_error_message(response)}", upstream_status=response.status_code
        )


__all__ = ["HttpProvider", "ProviderConfig", "error_type"]
