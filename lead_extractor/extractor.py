"""Flatten arbitrary scraped JSON into a :class:`LeadRecord`.

The walk is a fold: every node is classified into one of a closed set of JSON
kinds, the handler for that kind returns an updated accumulator plus the child
nodes still to visit, and children are visited depth-first in key order. Slots
are first-writer-wins across the whole walk; contacts are collected from every
string and de-duplicated once the walk is complete.

Field routing is a case-insensitive substring match on the key:

* ``name`` / ``title`` -> ``lead``
* ``user`` / ``handle`` -> ``username``
* ``link`` / ``url`` -> ``user_link``
* ``bio`` / ``description`` -> ``summary``

A key may feed several slots (``userName`` fills both ``lead`` and
``username``). Strings inside arrays have no key of their own, so they only
contribute emails and phones. A string holding table markup is handled like
any other string and is then also expanded into row mappings, which routes
cells through their header names.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .models import LeadRecord
from .tables import contains_table, parse_table
from .text import find_emails, find_phones, normalize

LOGGER = logging.getLogger(__name__)

SLOT_KEYWORDS: Mapping[str, Tuple[str, ...]] = {
    "lead": ("name", "title"),
    "username": ("user", "handle"),
    "user_link": ("link", "url"),
    "summary": ("bio", "description"),
}


class JsonKind(Enum):
    STRING = "string"
    NUMBER = "number"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    NULL = "null"


def classify(value: Any) -> JsonKind:
    """Return the JSON kind of ``value``; non-JSON objects count as null."""

    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (bool, int, float)):
        return JsonKind.NUMBER
    if isinstance(value, Mapping):
        return JsonKind.MAPPING
    if isinstance(value, (list, tuple)):
        return JsonKind.SEQUENCE
    return JsonKind.NULL


@dataclass(frozen=True)
class LeadAccumulator:
    """Immutable running state of one extraction walk."""

    lead: str = ""
    username: str = ""
    user_link: str = ""
    summary: str = ""
    emails: Tuple[str, ...] = ()
    phones: Tuple[str, ...] = ()

    def with_contacts(self, emails: Iterable[str], phones: Iterable[str]) -> "LeadAccumulator":
        emails, phones = tuple(emails), tuple(phones)
        if not emails and not phones:
            return self
        return replace(self, emails=self.emails + emails, phones=self.phones + phones)

    def with_field(self, key: str, text: str) -> "LeadAccumulator":
        if not text:
            return self
        lowered = key.lower()
        updates: Dict[str, str] = {}
        for slot, keywords in SLOT_KEYWORDS.items():
            if getattr(self, slot):
                continue
            if any(keyword in lowered for keyword in keywords):
                updates[slot] = text
        return replace(self, **updates) if updates else self

    def to_record(self) -> LeadRecord:
        return LeadRecord(
            lead=self.lead,
            username=self.username,
            user_link=self.user_link,
            emails=_unique(self.emails),
            phones=_unique(self.phones),
            summary=self.summary,
        )


Node = Tuple[Optional[str], Any]
Handler = Callable[[Optional[str], Any, LeadAccumulator], Tuple[LeadAccumulator, List[Node]]]


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def _visit_string(key: Optional[str], value: str, acc: LeadAccumulator) -> Tuple[LeadAccumulator, List[Node]]:
    text = normalize(value)
    acc = acc.with_contacts(find_emails(text), find_phones(text))
    if key is not None:
        acc = acc.with_field(key, text)

    if contains_table(value):
        rows = parse_table(value)
        if isinstance(rows, list):
            return acc, [(None, rows)]
    return acc, []


def _visit_mapping(_key: Optional[str], value: Mapping[Any, Any], acc: LeadAccumulator) -> Tuple[LeadAccumulator, List[Node]]:
    return acc, [(str(child_key), child) for child_key, child in value.items()]


def _visit_sequence(_key: Optional[str], value: Iterable[Any], acc: LeadAccumulator) -> Tuple[LeadAccumulator, List[Node]]:
    return acc, [(None, item) for item in value]


def _visit_scalar(_key: Optional[str], _value: Any, acc: LeadAccumulator) -> Tuple[LeadAccumulator, List[Node]]:
    return acc, []


_HANDLERS: Dict[JsonKind, Handler] = {
    JsonKind.STRING: _visit_string,
    JsonKind.MAPPING: _visit_mapping,
    JsonKind.SEQUENCE: _visit_sequence,
    JsonKind.NUMBER: _visit_scalar,
    JsonKind.NULL: _visit_scalar,
}


def fold(node: Any, acc: Optional[LeadAccumulator] = None) -> LeadAccumulator:
    """Walk ``node`` depth-first and return the accumulated state."""

    if acc is None:
        acc = LeadAccumulator()
    stack: List[Node] = [(None, node)]
    while stack:
        key, value = stack.pop()
        acc, children = _HANDLERS[classify(value)](key, value, acc)
        stack.extend(reversed(children))
    return acc


def extract(node: Any) -> LeadRecord:
    """Return the lead record for one raw dataset item. Never raises."""

    return fold(node).to_record()


def extract_all(items: Iterable[Any]) -> List[LeadRecord]:
    records = [extract(item) for item in items]
    LOGGER.debug("Extracted %s lead records", len(records))
    return records


__all__ = ["JsonKind", "LeadAccumulator", "SLOT_KEYWORDS", "classify", "fold", "extract", "extract_all"]
