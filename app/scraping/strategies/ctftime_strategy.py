"""
CTFtime event list extraction.
"""

from __future__ import annotations

from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from app.scraping.base import HostStrategy
from app.scraping.parsing import HTMLParsingLayer
from app.scraping.types import CompetitionRecord

EVENT_ROW_SELECTOR = 'tr[id^="event_id_"]'

DEFAULT_DATES = "TBD"
DEFAULT_TYPE = "Unknown"
DEFAULT_LOCATION = "Unknown"
CHECK_EVENT_PAGE = "Check event page"
DEFAULT_AGE_GROUP = "General"


class CTFTimeEventListStrategy(HostStrategy):
    """
    Reads the event table on ctftime.org: one row per event with name and
    link, dates, format and location in columns one to four.
    """

    name = "ctftime"
    hosts = ("ctftime.org",)

    def parse_page(
        self,
        *,
        soup: BeautifulSoup,
        page_url: str,
    ) -> list[CompetitionRecord]:
        records: list[CompetitionRecord] = []
        for row in soup.select(EVENT_ROW_SELECTOR):
            name_cell = HTMLParsingLayer.row_cell(row, 1)
            link = name_cell.find("a") if name_cell is not None else None
            if link is None:
                continue

            href = (link.get("href") or "").strip()
            records.append(
                CompetitionRecord(
                    name=HTMLParsingLayer.node_text(link),
                    dates=self._cell_or(row, 2, DEFAULT_DATES),
                    fees=CHECK_EVENT_PAGE,
                    requirements=CHECK_EVENT_PAGE,
                    notes="",
                    type=self._cell_or(row, 3, DEFAULT_TYPE),
                    age_group=DEFAULT_AGE_GROUP,
                    location=self._cell_or(row, 4, DEFAULT_LOCATION),
                    url=urljoin(page_url, href) if href else page_url,
                )
            )
        return records

    @staticmethod
    def _cell_or(row: Tag, position: int, default: str) -> str:
        text = HTMLParsingLayer.node_text(HTMLParsingLayer.row_cell(row, position))
        return text or default
