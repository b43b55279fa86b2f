"""
Geographic relevance filter for extracted competitions.
"""

from __future__ import annotations

from collections.abc import Iterable

from app.scraping.types import CompetitionRecord

# Plain substring tokens: "us" also matches e.g. "Australia".
DEFAULT_ALLOWED_LOCATIONS: tuple[str, ...] = (
    "online",
    "us",
    "united states",
    "america",
    "massachusetts",
    "rhode island",
    "connecticut",
)


class LocationRelevanceFilter:
    """
    Keeps records whose lowercased location contains an allow-listed token.
    """

    def __init__(self, allowed_tokens: Iterable[str] = DEFAULT_ALLOWED_LOCATIONS) -> None:
        tokens = tuple(token.strip().lower() for token in allowed_tokens if token.strip())
        if not tokens:
            raise ValueError("Location allow-list must contain at least one token.")
        self.allowed_tokens = tokens

    def is_relevant(self, record: CompetitionRecord) -> bool:
        location = record.location.lower()
        return any(token in location for token in self.allowed_tokens)

    def filter(self, records: Iterable[CompetitionRecord]) -> list[CompetitionRecord]:
        return [record for record in records if self.is_relevant(record)]
