"""
Shared fakes for crawl tests. No test touches the network.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest
import requests

from app.scraping.engine import CrawlOrchestrator
from app.scraping.fetcher import PageFetcher
from app.scraping.rate_limiter import FixedDelayRateLimiter
from app.scraping.robots import CourtesyChecker

TEST_USER_AGENT = "TestCrawler/1.0 (unit tests; Contact: tests@example.edu)"


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        body: str | bytes = "",
        *,
        encoding: str | None = "utf-8",
        chunk_size: int | None = None,
        on_chunk: Callable[[int], None] | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        self.encoding = encoding
        self.closed = False
        self._chunk_size = chunk_size
        self._on_chunk = on_chunk

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        size = self._chunk_size or chunk_size
        for index, start in enumerate(range(0, len(self.body), size)):
            if self.closed:
                raise requests.ConnectionError("Connection closed")
            yield self.body[start:start + size]
            if self._on_chunk is not None:
                self._on_chunk(index)

    def close(self) -> None:
        self.closed = True


Route = FakeResponse | BaseException | Callable[[], FakeResponse]


class FakeSession:
    """
    Minimal stand-in for `requests.Session` keyed by (method, url).

    Unrouted robots.txt probes answer 404; any other unrouted request raises
    a connection error.
    """

    def __init__(self, routes: dict[tuple[str, str], Route] | None = None) -> None:
        self.routes: dict[tuple[str, str], Route] = dict(routes or {})
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def route(self, method: str, url: str, outcome: Route) -> None:
        self.routes[(method.upper(), url)] = outcome

    def head(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch("HEAD", url, kwargs)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch("GET", url, kwargs)

    def urls_for(self, method: str) -> list[str]:
        return [url for called, url, _ in self.calls if called == method]

    def _dispatch(self, method: str, url: str, kwargs: dict[str, Any]) -> FakeResponse:
        self.calls.append((method, url, kwargs))
        outcome = self.routes.get((method, url))
        if outcome is None:
            if method == "HEAD" and url.endswith("/robots.txt"):
                return FakeResponse(404)
            raise requests.ConnectionError(f"No route for {method} {url}")
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome) and not isinstance(outcome, FakeResponse):
            return outcome()
        return outcome


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def build_orchestrator() -> Callable[..., CrawlOrchestrator]:
    def _build(session: FakeSession, **kwargs: Any) -> CrawlOrchestrator:
        checker = kwargs.pop(
            "courtesy_checker",
            CourtesyChecker(session=session, user_agent=TEST_USER_AGENT),
        )
        return CrawlOrchestrator(
            courtesy_checker=checker,
            rate_limiter=FixedDelayRateLimiter(delay_seconds=0),
            fetcher=PageFetcher(session=session, user_agent=TEST_USER_AGENT),
            **kwargs,
        )

    return _build
