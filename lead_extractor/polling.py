"""Polling cadence and a cancellable wait used between provider status checks."""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Optional

DEFAULT_POLL_INTERVAL_SECONDS = 10.0
DEFAULT_MAX_POLL_ATTEMPTS = 30


@dataclass
class PollPolicy:
    """How often and for how long a job is polled.

    ``deadline_seconds`` lets a caller impose a ceiling shorter than
    ``interval_seconds * max_attempts``.
    """

    interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    max_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS
    deadline_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.interval_seconds < 0:
            raise ValueError("interval_seconds cannot be negative")


class PollTimer:
    """Sleep between polls, waking early once :meth:`cancel` is called.

    One timer belongs to one request. Another thread (for example the web
    server noticing a client disconnect) may call :meth:`cancel` at any time.
    """

    def __init__(self, deadline_seconds: Optional[float] = None) -> None:
        self._cancelled = threading.Event()
        self._deadline = time.monotonic() + deadline_seconds if deadline_seconds is not None else None

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def wait(self, seconds: float) -> bool:
        """Block for up to ``seconds``; return ``True`` if cancelled meanwhile."""

        if self._deadline is not None:
            seconds = max(0.0, min(seconds, self._deadline - time.monotonic()))
        if seconds <= 0:
            return self.cancelled
        return self._cancelled.wait(seconds)


__all__ = ["PollPolicy", "PollTimer", "DEFAULT_POLL_INTERVAL_SECONDS", "DEFAULT_MAX_POLL_ATTEMPTS"]
