from __future__ import annotations

import pytest

from app.scraping.relevance import DEFAULT_ALLOWED_LOCATIONS, LocationRelevanceFilter
from app.scraping.types import CompetitionRecord


def _record(location: str) -> CompetitionRecord:
    return CompetitionRecord(
        name=f"Event in {location}",
        dates="TBD",
        fees="Check event page",
        requirements="Check event page",
        notes="",
        type="Jeopardy",
        age_group="General",
        location=location,
        url="https://ctftime.org/event/1",
    )


@pytest.mark.parametrize(
    "location, expected",
    [
        ("Online", True),
        ("ONLINE (hybrid)", True),
        ("Boston, Massachusetts", True),
        ("Providence, Rhode Island", True),
        ("New Haven, Connecticut", True),
        ("United States", True),
        ("Latin America", True),
        ("Berlin, Germany", False),
        ("Unknown", False),
        ("", False),
    ],
)
def test_is_relevant(location: str, expected: bool) -> None:
    assert LocationRelevanceFilter().is_relevant(_record(location)) is expected


def test_filter_keeps_input_order() -> None:
    records = [_record(loc) for loc in ("Online", "Tokyo, Japan", "Hartford, Connecticut", "Paris")]

    kept = LocationRelevanceFilter().filter(records)

    assert kept == [records[0], records[2]]
    assert all(record in records for record in kept)
    for record in kept:
        assert any(token in record.location.lower() for token in DEFAULT_ALLOWED_LOCATIONS)


def test_custom_allow_list_is_lowercased() -> None:
    relevance = LocationRelevanceFilter(["  Canada ", "ONLINE"])

    assert relevance.allowed_tokens == ("canada", "online")
    assert relevance.is_relevant(_record("Toronto, canada"))
    assert not relevance.is_relevant(_record("Providence, Rhode Island"))


def test_empty_allow_list_is_rejected() -> None:
    with pytest.raises(ValueError):
        LocationRelevanceFilter(["", "  "])
