"""Text clean-up helpers shared by the extractor and the table parser."""
from __future__ import annotations

import re
from typing import Any, List

_TAG_RE = re.compile(r"<[^>]+>")
_NBSP_RE = re.compile(r"&nbsp;")
_STRAY_LT_RE = re.compile(r"<")
_WHITESPACE_RE = re.compile(r"\s+")

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_RE = re.compile(r"(?:\+\d{1,3}[-. ]?)?\(?\d{3}\)?[-. ]?\d{3}[-. ]?\d{4}")


def normalize(value: Any) -> str:
    """Strip markup and collapse whitespace.

    Tags are replaced by a single space so adjacent elements do not run
    together. A stray ``<`` outside any tag and ``&nbsp;`` both become a
    plain space. Non-string input yields an empty string.
    """

    if not isinstance(value, str):
        return ""
    text = _TAG_RE.sub(" ", value)
    text = _STRAY_LT_RE.sub(" ", text)
    text = _NBSP_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_cell(value: str) -> str:
    """Clean a single table cell: drop tags and ``&nbsp;``, then trim."""

    return _NBSP_RE.sub(" ", _TAG_RE.sub("", value)).strip()


def find_emails(text: str) -> List[str]:
    return EMAIL_RE.findall(text) if isinstance(text, str) else []


def find_phones(text: str) -> List[str]:
    return PHONE_RE.findall(text) if isinstance(text, str) else []


__all__ = ["EMAIL_RE", "PHONE_RE", "normalize", "strip_cell", "find_emails", "find_phones"]
