"""Unit tests for :mod:`lead_extractor.extractor`."""
from __future__ import annotations

import pytest

from lead_extractor.extractor import JsonKind, LeadAccumulator, classify, extract, fold
from lead_extractor.models import LeadRecord


def test_extract_routes_fields_by_key_name() -> None:
    item = {
        "fullName": "<b>Jane Doe</b>",
        "handle": "@janedoe",
        "profileUrl": "https://example.com/janedoe",
        "bio": "Founder &nbsp; reach me at jane@example.com or +1 555-123-4567",
    }

    record = extract(item)

    assert record.lead == "Jane Doe"
    assert record.username == "@janedoe"
    assert record.user_link == "https://example.com/janedoe"
    assert record.summary == "Founder reach me at jane@example.com or +1 555-123-4567"
    assert record.emails == ("jane@example.com",)
    assert record.phones == ("+1 555-123-4567",)


def test_first_non_empty_value_wins_per_slot() -> None:
    item = {
        "name": "",
        "title": "Head of Growth",
        "companyName": "Acme Inc",
        "description": "first",
        "bio": "second",
    }

    record = extract(item)

    assert record.lead == "Head of Growth"
    assert record.summary == "first"


def test_a_key_can_fill_several_slots() -> None:
    record = extract({"userName": "jdoe"})

    assert record.lead == "jdoe"
    assert record.username == "jdoe"


def test_nested_objects_and_arrays_fill_empty_slots_depth_first() -> None:
    item = {
        "profile": {"name": "Outer", "links": [{"url": "https://a.example"}, {"url": "https://b.example"}]},
        "author": {"name": "Inner", "username": "inner_handle"},
    }

    record = extract(item)

    assert record.lead == "Outer"
    assert record.user_link == "https://a.example"
    assert record.username == "inner_handle"


def test_emails_found_in_different_fields_are_deduplicated() -> None:
    item = {
        "contact": "sales@example.com",
        "about": "Write to sales@example.com",
        "team": [{"email": "sales@example.com"}, {"email": "ceo@example.com"}],
    }

    record = extract(item)

    assert record.emails == ("sales@example.com", "ceo@example.com")


def test_phones_are_collected_from_any_field_and_deduplicated() -> None:
    item = {"a": "555-123-4567", "b": {"c": "555-123-4567 / (555) 765-4321"}}

    assert extract(item).phones == ("555-123-4567", "(555) 765-4321")


def test_strings_inside_arrays_only_contribute_contacts() -> None:
    record = extract({"names": ["Alice alice@example.com", "Bob"]})

    assert record.lead == ""
    assert record.emails == ("alice@example.com",)


def test_table_markup_is_expanded_into_rows() -> None:
    item = {
        "content": (
            "<table><tr><th>Name</th><th>Email</th></tr>"
            "<tr><td>Alice</td><td>a@x.com</td></tr></table>"
        )
    }

    record = extract(item)

    assert record.lead == "Alice"
    assert record.emails == ("a@x.com",)


def test_text_around_a_table_is_kept_and_routed_by_key() -> None:
    item = {
        "bio": (
            "Contact me at boss@corp.com "
            "<table><tr><th>Name</th></tr><tr><td>Alice</td></tr></table>"
        )
    }

    record = extract(item)

    assert record.summary == "Contact me at boss@corp.com Name Alice"
    assert record.emails == ("boss@corp.com",)
    assert record.lead == "Alice"


def test_stray_angle_brackets_never_reach_record_fields() -> None:
    record = extract({"name": "Jane <3", "bio": "Revenue < $1M"})

    assert record.lead == "Jane 3"
    assert record.summary == "Revenue $1M"


@pytest.mark.parametrize(
    "node",
    [
        {},
        [],
        None,
        "just a string",
        42,
        [1, "two", None, [3.0, True]],
        {"a": None, "b": 1, "c": True, "d": [None, [], {}]},
    ],
)
def test_extract_is_total(node) -> None:
    record = extract(node)

    assert isinstance(record, LeadRecord)
    assert record.lead == ""
    assert record.username == ""
    assert record.user_link == ""
    assert record.summary == ""


def test_extract_handles_deeply_nested_input() -> None:
    node: dict = {"email": "deep@example.com"}
    for _ in range(5000):
        node = {"child": node}

    assert extract(node).emails == ("deep@example.com",)


def test_missing_fields_yield_empty_record() -> None:
    record = extract({"followers": 120, "verified": False})

    assert record == LeadRecord()
    assert record.is_empty


def test_fold_threads_an_explicit_accumulator() -> None:
    seeded = LeadAccumulator(lead="Already set")

    result = fold({"name": "Ignored", "user": "kept"}, seeded)

    assert result.lead == "Already set"
    assert result.username == "kept"
    assert seeded.username == ""


def test_record_serialises_with_camel_case_link() -> None:
    record = extract({"url": "https://x.example", "email": "x@x.io"})

    assert record.to_dict() == {
        "lead": "",
        "username": "",
        "userLink": "https://x.example",
        "emails": ["x@x.io"],
        "phones": [],
        "summary": "",
    }


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        ("s", JsonKind.STRING),
        (1, JsonKind.NUMBER),
        (1.5, JsonKind.NUMBER),
        (False, JsonKind.NUMBER),
        ([1], JsonKind.SEQUENCE),
        ((1,), JsonKind.SEQUENCE),
        ({"a": 1}, JsonKind.MAPPING),
        (None, JsonKind.NULL),
        (object(), JsonKind.NULL),
    ],
)
def test_classify(value, kind) -> None:
    assert classify(value) is kind
