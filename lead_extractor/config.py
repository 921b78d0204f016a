"""Configuration helpers for the lead extraction service."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from .polling import DEFAULT_MAX_POLL_ATTEMPTS, DEFAULT_POLL_INTERVAL_SECONDS
from .providers.anonova import ANONOVA_API_BASE
from .providers.apify import APIFY_API_BASE

LOGGER = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}

# setting name -> environment variable
_ENVIRONMENT_KEYS = {
    "apify_token": "APIFY_TOKEN",
    "apify_base_url": "APIFY_API_BASE",
    "linkedin_actor_id": "LINKEDIN_ACTOR_ID",
    "twitter_actor_id": "TWITTER_ACTOR_ID",
    "anonova_api_key": "ANONOVA_API_KEY",
    "anonova_base_url": "ANONOVA_API_BASE",
    "poll_interval_seconds": "POLL_INTERVAL_SECONDS",
    "max_poll_attempts": "MAX_POLL_ATTEMPTS",
    "max_results": "MAX_RESULTS",
    "request_timeout_seconds": "REQUEST_TIMEOUT_SECONDS",
    "export_dir": "EXPORT_DIR",
    "host": "HOST",
    "port": "PORT",
}


@dataclass(frozen=True)
class Settings:
    """Runtime settings. Defaults < configuration file < environment."""

    apify_token: str = ""
    apify_base_url: str = APIFY_API_BASE
    linkedin_actor_id: str = "Oliuhvq8My0EiVIT0"
    twitter_actor_id: str = "dqJrJj2vnv8K7XMNK"
    anonova_api_key: str = ""
    anonova_base_url: str = ANONOVA_API_BASE
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    max_poll_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS
    max_results: int = 50
    request_timeout_seconds: float = 30.0
    export_dir: str = "exports"
    host: str = "0.0.0.0"
    port: int = 3001

    @property
    def actor_ids(self) -> Dict[str, str]:
        return {"linkedin": self.linkedin_actor_id, "twitter": self.twitter_actor_id}

    def merged(self, overrides: Mapping[str, Any]) -> "Settings":
        """Return a copy with ``overrides`` applied and coerced to field types."""

        known = {item.name: item for item in fields(self)}
        values: Dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in known:
                LOGGER.debug("Ignoring unknown setting %s", key)
                continue
            if value is None:
                continue
            values[key] = _coerce(key, value, type(getattr(self, key)))
        return replace(self, **values)


def _coerce(key: str, value: Any, target: type) -> Any:
    try:
        if target is int:
            return int(value)
        if target is float:
            return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Setting '{key}' must be a {target.__name__}, got {value!r}") from exc
    return str(value)


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping")
    return data


def environment_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    environ = os.environ if environ is None else environ
    return {name: environ[variable] for name, variable in _ENVIRONMENT_KEYS.items() if environ.get(variable)}


def load_settings(
    path: Optional[str | Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    dotenv: bool = True,
) -> Settings:
    """Resolve settings from an optional config file and the environment.

    When ``environ`` is omitted the process environment is used, primed from
    a ``.env`` file in the working directory.
    """

    if environ is None and dotenv:
        load_dotenv()

    settings = Settings()
    if path is not None:
        settings = settings.merged(load_configuration(path))
    return settings.merged(environment_overrides(environ))


__all__ = ["ConfigurationError", "Settings", "load_configuration", "load_settings", "environment_overrides"]
