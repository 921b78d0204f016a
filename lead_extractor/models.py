"""Data models shared by the provider clients, the poller, and the HTTP layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .errors import ValidationError


# --- Job models ---

class JobStatus(str, Enum):
    """Lifecycle of a provider-side scraping run."""

    READY = "READY"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    TIMED_OUT = "TIMED_OUT"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_provider(cls, value: Any) -> "JobStatus":
        """Map a provider status string onto the recognised set.

        ``CREATED`` is reported by some actors before ``READY`` and is treated
        the same way. Anything unrecognised maps to :attr:`UNKNOWN`.
        """

        text = str(value or "").strip().upper()
        if text == "CREATED":
            return cls.READY
        if text in {cls.READY.value, cls.RUNNING.value, cls.SUCCEEDED.value, cls.FAILED.value}:
            return cls(text)
        return cls.UNKNOWN

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({JobStatus.SUCCEEDED, JobStatus.FAILED, JobStatus.TIMED_OUT})


@dataclass
class ScrapeJob:
    """A single actor run owned by the request that started it."""

    id: str
    actor_id: str
    status: JobStatus = JobStatus.READY
    dataset_id: Optional[str] = None
    error_message: Optional[str] = None
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


# --- Extraction output ---

@dataclass(frozen=True)
class LeadRecord:
    """Flattened lead produced from one raw dataset item."""

    lead: str = ""
    username: str = ""
    user_link: str = ""
    emails: tuple[str, ...] = ()
    phones: tuple[str, ...] = ()
    summary: str = ""

    @property
    def is_empty(self) -> bool:
        return not any((self.lead, self.username, self.user_link, self.emails, self.phones, self.summary))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lead": self.lead,
            "username": self.username,
            "userLink": self.user_link,
            "emails": list(self.emails),
            "phones": list(self.phones),
            "summary": self.summary,
        }


# --- Request models ---

DEFAULT_MAX_LEADS = 10


@dataclass
class ExtractionRequest:
    """Parameters for a single keyword extraction run."""

    keyword: Optional[str] = None
    platform: str = "linkedin"
    language: str = "en"
    country: str = "us"
    max_leads: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN_KEYS = ("keyword", "platform", "language", "country", "maxLeads", "export")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], *, platform: Optional[str] = None) -> "ExtractionRequest":
        """Build a request from a JSON body, keeping unknown keys for the actor."""

        max_leads = payload.get("maxLeads")
        if max_leads is not None and not isinstance(max_leads, int):
            try:
                max_leads = int(str(max_leads).strip())
            except ValueError:
                raise ValidationError(f"maxLeads must be an integer, got {max_leads!r}") from None

        return cls(
            keyword=payload.get("keyword"),
            platform=str(platform or payload.get("platform") or "linkedin").lower(),
            language=payload.get("language") or "en",
            country=payload.get("country") or "us",
            max_leads=max_leads,
            extra={key: value for key, value in payload.items() if key not in cls._KNOWN_KEYS},
        )


# --- Order provider models ---

ORDER_SOURCE_TYPES = ("HT", "FL", "FO", "LI")


@dataclass
class Order:
    """Order record returned by the order provider."""

    id: str
    source: Optional[str] = None
    source_type: Optional[str] = None
    max_leads: Optional[int] = None
    status: Optional[str] = None
    status_display: Optional[str] = None
    created_at: Optional[str] = None
    csv_url: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Order":
        max_leads = data.get("max_leads")
        return cls(
            id=str(data.get("id", "")),
            source=data.get("source"),
            source_type=data.get("source_type"),
            max_leads=int(max_leads) if max_leads not in (None, "") else None,
            status=data.get("status"),
            status_display=data.get("status_display"),
            created_at=data.get("created_at"),
            csv_url=data.get("csv_url"),
            raw=dict(data),
        )

    @property
    def is_terminal(self) -> bool:
        return (self.status or "").lower() in {"completed", "failed"}

    def to_dict(self) -> Dict[str, Any]:
        payload = dict(self.raw)
        payload.update(
            {
                "id": self.id,
                "source": self.source,
                "source_type": self.source_type,
                "max_leads": self.max_leads,
                "status": self.status,
                "status_display": self.status_display,
                "created_at": self.created_at,
                "csv_url": self.csv_url,
            }
        )
        return payload


__all__ = [
    "JobStatus",
    "TERMINAL_STATUSES",
    "ScrapeJob",
    "LeadRecord",
    "ExtractionRequest",
    "DEFAULT_MAX_LEADS",
    "ORDER_SOURCE_TYPES",
    "Order",
]
