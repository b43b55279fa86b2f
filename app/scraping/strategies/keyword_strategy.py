"""
Generic keyword-flagging fallback for unknown sites.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from app.scraping.base import ExtractionStrategy
from app.scraping.parsing import HTMLParsingLayer
from app.scraping.types import CompetitionRecord

CTF_KEYWORDS: tuple[str, ...] = ("ctf", "capture the flag", "cybersecurity competition")

MANUAL_REVIEW = "Manual review needed"
MANUAL_REVIEW_NOTE = "Generic extraction - manual verification recommended"
UNTITLED = "Untitled Competition"
UNKNOWN = "Unknown"


class KeywordPageStrategy(ExtractionStrategy):
    """
    Emits a single placeholder record for pages that mention CTF content.

    No structured fields are guessed from arbitrary markup.
    """

    name = "keyword"

    def __init__(self, keywords: tuple[str, ...] = CTF_KEYWORDS) -> None:
        self.keywords = tuple(keyword.lower() for keyword in keywords if keyword.strip())

    def matches(self, url: str) -> bool:
        return True

    def parse_page(
        self,
        *,
        soup: BeautifulSoup,
        page_url: str,
    ) -> list[CompetitionRecord]:
        text = HTMLParsingLayer.visible_text(soup).lower()
        if not any(keyword in text for keyword in self.keywords):
            return []

        return [
            CompetitionRecord(
                name=HTMLParsingLayer.page_title(soup) or UNTITLED,
                dates=MANUAL_REVIEW,
                fees=MANUAL_REVIEW,
                requirements=MANUAL_REVIEW,
                notes=MANUAL_REVIEW_NOTE,
                type=UNKNOWN,
                age_group=UNKNOWN,
                location=UNKNOWN,
                url=page_url,
            )
        ]
