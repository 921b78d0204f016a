"""HTTP clients for the third-party scraping and order providers."""

from .anonova import ANONOVA_API_BASE, AnonovaClient  # noqa: F401
from .apify import APIFY_API_BASE, ApifyClient  # noqa: F401
from .base import HttpProvider, ProviderConfig  # noqa: F401

__all__ = [
    "HttpProvider",
    "ProviderConfig",
    "ApifyClient",
    "AnonovaClient",
    "APIFY_API_BASE",
    "ANONOVA_API_BASE",
]
