"""
Crawl configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.scraping.relevance import DEFAULT_ALLOWED_LOCATIONS

DEFAULT_USER_AGENT = (
    "RIC-CTF-Scraper/1.0 (Intern project for Rhode Island College Institute of "
    "Cybersecurity; Contact: mrodriguez_2986@email.ric.edu)"
)


@dataclass(frozen=True)
class CrawlSettings:
    """
    Runtime settings for competition crawling.
    """

    targets_path: str
    export_dir: str
    user_agent: str = DEFAULT_USER_AGENT
    request_delay_seconds: float = 2.0
    timeout_seconds: float = 30.0
    robots_timeout_seconds: float = 10.0
    allowed_locations: tuple[str, ...] = DEFAULT_ALLOWED_LOCATIONS
    extra_strategies: tuple[str, ...] = field(default_factory=tuple)
