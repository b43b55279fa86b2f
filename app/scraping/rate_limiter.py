"""
Fixed-delay request throttle.
"""

from __future__ import annotations

import time

from app.scraping.cancellation import CancellationToken


class FixedDelayRateLimiter:
    """
    Suspends for a fixed delay once per processed URL.

    No request history is consulted. When a token is supplied the wait ends
    early on cancellation.
    """

    def __init__(self, *, delay_seconds: float = 2.0) -> None:
        self._delay_seconds = max(0.0, delay_seconds)

    @property
    def delay_seconds(self) -> float:
        return self._delay_seconds

    def wait(self, *, token: CancellationToken | None = None) -> None:
        """
        Sleep for the configured delay.
        """

        if self._delay_seconds <= 0:
            return
        if token is None:
            time.sleep(self._delay_seconds)
            return
        token.wait(self._delay_seconds)
