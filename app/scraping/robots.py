"""
robots.txt courtesy checker for crawl targets.
"""

from __future__ import annotations

import logging
from urllib.parse import urljoin, urlparse

import requests

from app.scraping.cancellation import CancellationToken, call_cancellable
from app.scraping.errors import PolicyCheckError
from app.scraping.logging_utils import log_event
from app.scraping.types import CourtesyDecision, PolicyStatus

logger = logging.getLogger(__name__)


class CourtesyChecker:
    """
    Probes the origin's robots.txt with a HEAD request and records presence.

    The file's rules are not parsed or enforced; every outcome currently
    resolves to allowed. `CourtesyDecision.allowed=False` remains available
    for a stricter policy.
    """

    def __init__(
        self,
        *,
        session: requests.Session,
        user_agent: str,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._session = session
        self._user_agent = user_agent
        self._timeout_seconds = timeout_seconds

    def check(self, url: str, *, token: CancellationToken | None = None) -> CourtesyDecision:
        """
        Return the courtesy decision for `url`. Never raises.
        """

        robots_url: str | None = None
        try:
            robots_url = self.robots_url(url)
            response = call_cancellable(
                lambda: self._session.head(
                    robots_url,
                    headers={"User-Agent": self._user_agent},
                    timeout=self._timeout_seconds,
                    allow_redirects=True,
                ),
                token=token,
                on_abandon=lambda late: late.close(),
            )
        except Exception as exc:
            error = PolicyCheckError(str(exc) or exc.__class__.__name__)
            log_event(
                logger,
                logging.WARNING,
                "robots_check_failed",
                url=url,
                robots_url=robots_url,
                error=str(error),
            )
            return CourtesyDecision(
                allowed=True,
                status=PolicyStatus.ERROR,
                robots_url=robots_url,
                detail=str(error),
            )

        if response.ok:
            log_event(
                logger,
                logging.INFO,
                "robots_found",
                robots_url=robots_url,
                status_code=response.status_code,
            )
            return CourtesyDecision(
                allowed=True,
                status=PolicyStatus.FOUND,
                robots_url=robots_url,
                status_code=response.status_code,
            )

        log_event(
            logger,
            logging.INFO,
            "robots_absent",
            robots_url=robots_url,
            status_code=response.status_code,
        )
        return CourtesyDecision(
            allowed=True,
            status=PolicyStatus.ABSENT,
            robots_url=robots_url,
            status_code=response.status_code,
        )

    @classmethod
    def robots_url(cls, url: str) -> str:
        return urljoin(cls._origin(url), "/robots.txt")

    @staticmethod
    def _origin(url: str) -> str:
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid URL '{url}'")
        return f"{parsed.scheme}://{parsed.netloc}"
