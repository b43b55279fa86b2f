"""
Config helpers for competition crawling.
"""

from app.scraping.config.loader import get_crawl_settings, load_target_urls
from app.scraping.config.models import CrawlSettings

__all__ = [
    "CrawlSettings",
    "get_crawl_settings",
    "load_target_urls",
]
