"""
Base extraction strategy abstraction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from app.scraping.parsing import HTMLParsingLayer
from app.scraping.types import CompetitionRecord


class ExtractionStrategy(ABC):
    """
    Turns one fetched page into zero or more competition records.

    Implementations must be pure: the same (html, url) always yields the
    same records.
    """

    name: str = "base"

    @abstractmethod
    def matches(self, url: str) -> bool:
        """
        Whether this strategy handles pages from `url`.
        """

    def extract(self, html: str, url: str) -> list[CompetitionRecord]:
        soup = HTMLParsingLayer.make_soup(html)
        return self.parse_page(soup=soup, page_url=url)

    @abstractmethod
    def parse_page(
        self,
        *,
        soup: BeautifulSoup,
        page_url: str,
    ) -> list[CompetitionRecord]:
        """
        Parse one page and return extracted records in document order.
        """


class HostStrategy(ExtractionStrategy):
    """
    Strategy bound to a fixed set of host names, subdomains included.
    """

    hosts: tuple[str, ...] = ()

    def matches(self, url: str) -> bool:
        try:
            host = (urlparse(url).hostname or "").lower()
        except ValueError:
            return False
        return any(host == item or host.endswith(f".{item}") for item in self.hosts)
