"""Factory helpers for constructing provider clients and services from settings."""
from __future__ import annotations

from typing import Optional

import requests

from .config import Settings
from .ingestion.exporters import CsvExportStore
from .orders import OrderService
from .pipeline import ResultPipeline
from .poller import JobPoller
from .polling import PollPolicy
from .providers import AnonovaClient, ApifyClient, ProviderConfig


def build_apify_client(settings: Settings, *, session: Optional[requests.Session] = None) -> ApifyClient:
    config = ProviderConfig(base_url=settings.apify_base_url, timeout_seconds=settings.request_timeout_seconds)
    return ApifyClient(settings.apify_token, config=config, session=session)


def build_anonova_client(settings: Settings, *, session: Optional[requests.Session] = None) -> AnonovaClient:
    config = ProviderConfig(base_url=settings.anonova_base_url, timeout_seconds=settings.request_timeout_seconds)
    return AnonovaClient(settings.anonova_api_key, config=config, session=session)


def build_poll_policy(settings: Settings) -> PollPolicy:
    return PollPolicy(
        interval_seconds=settings.poll_interval_seconds,
        max_attempts=settings.max_poll_attempts,
    )


def build_pipeline(settings: Settings, *, client: Optional[ApifyClient] = None) -> ResultPipeline:
    """Wire an Apify client, a poller, and the result pipeline together."""

    client = client or build_apify_client(settings)
    poller = JobPoller(client, policy=build_poll_policy(settings))
    return ResultPipeline(client, settings.actor_ids, poller=poller, max_results=settings.max_results)


def build_order_service(settings: Settings, *, client: Optional[AnonovaClient] = None) -> OrderService:
    return OrderService(client or build_anonova_client(settings))


def build_export_store(settings: Settings) -> CsvExportStore:
    return CsvExportStore(settings.export_dir)


__all__ = [
    "build_apify_client",
    "build_anonova_client",
    "build_poll_policy",
    "build_pipeline",
    "build_order_service",
    "build_export_store",
]
