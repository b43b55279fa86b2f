"""
Ordered, deduplicated list of crawl targets.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable

from app.scraping.logging_utils import log_event
from app.scraping.types import LogSeverity

logger = logging.getLogger(__name__)

LogCallback = Callable[[str, LogSeverity], None]


class TargetUrlList:
    """
    URLs to crawl in insertion order. Runs consume a snapshot, so edits made
    during a run apply to the next one.
    """

    def __init__(
        self,
        urls: Iterable[str] = (),
        *,
        on_log: LogCallback | None = None,
    ) -> None:
        self._urls: list[str] = []
        self._lock = threading.Lock()
        self._on_log = on_log
        for url in urls:
            self._append(url)

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return isinstance(url, str) and url.strip() in self._urls

    def urls(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._urls)

    def add(self, url: str) -> bool:
        """
        Append `url`; blank and duplicate values are ignored.
        """

        added = self._append(url)
        if added:
            self._notify(f"Added URL: {url.strip()}", LogSeverity.SUCCESS)
        return added

    def remove(self, url: str) -> bool:
        cleaned = url.strip()
        with self._lock:
            if cleaned not in self._urls:
                return False
            self._urls.remove(cleaned)
        self._notify(f"Removed URL: {cleaned}", LogSeverity.INFO)
        return True

    def remove_at(self, index: int) -> str:
        with self._lock:
            removed = self._urls.pop(index)
        self._notify(f"Removed URL: {removed}", LogSeverity.INFO)
        return removed

    def _append(self, url: str) -> bool:
        cleaned = url.strip() if isinstance(url, str) else ""
        if not cleaned:
            return False
        with self._lock:
            if cleaned in self._urls:
                return False
            self._urls.append(cleaned)
        return True

    def _notify(self, message: str, severity: LogSeverity) -> None:
        log_event(logger, logging.INFO, "target_list_changed", message=message)
        if self._on_log is not None:
            self._on_log(message, severity)
