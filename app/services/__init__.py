"""
app/services package marker.
"""

from app.services.crawl_service import CrawlService, get_crawl_service

__all__ = ["CrawlService", "get_crawl_service"]
