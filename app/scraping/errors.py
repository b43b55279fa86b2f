"""
Error taxonomy for the crawl pipeline.
"""

from __future__ import annotations


class CrawlError(Exception):
    """
    Base class for per-URL crawl failures.
    """


class PolicyCheckError(CrawlError):
    """
    robots.txt could not be probed. Never fatal; the checker still permits.
    """


class CourtesyDeniedSkip(CrawlError):
    """
    Courtesy policy denied access to a target URL.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Skipping {url} due to robots.txt restrictions")


class FetchError(CrawlError):
    """
    Target responded with a non-success HTTP status.
    """

    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__(f"HTTP {status}")


class NetworkError(CrawlError):
    """
    Transport failure: DNS, timeout, connection reset or malformed URL.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CancelledError(CrawlError):
    """
    The run was cancelled while the request was pending or in flight.
    """


class CrawlAlreadyRunningError(RuntimeError):
    """
    Raised when a run is started while another one is active.
    """
