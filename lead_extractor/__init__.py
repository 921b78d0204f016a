"""Lead extraction service: actor polling, result normalisation, and order proxying."""

from . import models  # noqa: F401
from .errors import (  # noqa: F401
    EmptyResult,
    ExtractionFailed,
    JobCancelled,
    MalformedResponse,
    PipelineError,
    ProviderError,
    SubmissionError,
    Timeout,
    UnexpectedStatus,
    ValidationError,
)
from .extractor import extract  # noqa: F401
from .models import ExtractionRequest, JobStatus, LeadRecord, Order, ScrapeJob  # noqa: F401
from .pipeline import ResultPipeline  # noqa: F401
from .poller import JobPoller  # noqa: F401
from .tables import parse_table  # noqa: F401
from .text import normalize  # noqa: F401

__all__ = [
    "ExtractionRequest",
    "JobStatus",
    "LeadRecord",
    "Order",
    "ScrapeJob",
    "JobPoller",
    "ResultPipeline",
    "extract",
    "normalize",
    "parse_table",
    "PipelineError",
    "ValidationError",
    "SubmissionError",
    "ExtractionFailed",
    "UnexpectedStatus",
    "Timeout",
    "JobCancelled",
    "EmptyResult",
    "MalformedResponse",
    "ProviderError",
    "ingestion",
    "providers",
]
