"""
Crawl orchestrator: sequential courtesy check, throttle, fetch, extract and
filter over a snapshot of target URLs.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

import requests

from app.scraping.cancellation import CancellationToken
from app.scraping.config.models import CrawlSettings
from app.scraping.errors import (
    CancelledError,
    CourtesyDeniedSkip,
    CrawlAlreadyRunningError,
    FetchError,
    NetworkError,
)
from app.scraping.fetcher import PageFetcher
from app.scraping.logging_utils import log_event, mirror_run_log
from app.scraping.rate_limiter import FixedDelayRateLimiter
from app.scraping.registry import StrategyRegistry
from app.scraping.relevance import LocationRelevanceFilter
from app.scraping.robots import CourtesyChecker
from app.scraping.types import (
    LogEvent,
    LogSeverity,
    PolicyStatus,
    RunSnapshot,
    RunState,
    RunStatistics,
    RunStatus,
    StatKey,
)

logger = logging.getLogger(__name__)

LogListener = Callable[[LogEvent], None]
StatsListener = Callable[[StatKey, int], None]


class CrawlOrchestrator:
    """
    Owns the run state and drives one crawl at a time.

    Observers receive log events and statistic deltas through callbacks and
    can poll `snapshot()`; they never hold references to the live state.
    """

    def __init__(
        self,
        *,
        courtesy_checker: CourtesyChecker,
        rate_limiter: FixedDelayRateLimiter,
        fetcher: PageFetcher,
        registry: StrategyRegistry | None = None,
        relevance_filter: LocationRelevanceFilter | None = None,
        on_log: LogListener | None = None,
        on_stats: StatsListener | None = None,
    ) -> None:
        self._courtesy_checker = courtesy_checker
        self._rate_limiter = rate_limiter
        self._fetcher = fetcher
        self._registry = registry or StrategyRegistry()
        self._relevance_filter = relevance_filter or LocationRelevanceFilter()
        self._on_log = on_log
        self._on_stats = on_stats

        self._lock = threading.Lock()
        self._state = RunState()
        self._token = CancellationToken()
        self._worker: threading.Thread | None = None

    @classmethod
    def from_settings(
        cls,
        settings: CrawlSettings,
        *,
        session: requests.Session | None = None,
        on_log: LogListener | None = None,
        on_stats: StatsListener | None = None,
    ) -> "CrawlOrchestrator":
        session = session or requests.Session()
        registry = StrategyRegistry()
        registry.register_paths(settings.extra_strategies)
        return cls(
            courtesy_checker=CourtesyChecker(
                session=session,
                user_agent=settings.user_agent,
                timeout_seconds=settings.robots_timeout_seconds,
            ),
            rate_limiter=FixedDelayRateLimiter(delay_seconds=settings.request_delay_seconds),
            fetcher=PageFetcher(
                session=session,
                user_agent=settings.user_agent,
                timeout_seconds=settings.timeout_seconds,
            ),
            registry=registry,
            relevance_filter=LocationRelevanceFilter(settings.allowed_locations),
            on_log=on_log,
            on_stats=on_stats,
        )

    @property
    def status(self) -> RunStatus:
        return self._state.status

    def snapshot(self) -> RunSnapshot:
        return self._state.snapshot()

    def run(self, urls: Sequence[str]) -> RunSnapshot:
        """
        Crawl `urls` in order on the calling thread and return the final state.
        """

        self._begin(urls)
        return self._execute()

    def start(self, urls: Sequence[str]) -> RunSnapshot:
        """
        Begin a crawl on a background worker thread.
        """

        self._begin(urls)
        worker = threading.Thread(target=self._execute, name="crawl-run", daemon=True)
        self._worker = worker
        worker.start()
        return self.snapshot()

    def wait(self, timeout: float | None = None) -> bool:
        """
        Join the background worker. True when no run is executing afterwards.
        """

        worker = self._worker
        if worker is not None:
            worker.join(timeout=timeout)
            if worker.is_alive():
                return False
        return self._state.status != RunStatus.RUNNING

    def cancel(self) -> bool:
        """
        Signal the active run to stop. Idempotent; False when nothing changed.
        """

        with self._lock:
            if self._state.status != RunStatus.RUNNING:
                log_event(logger, logging.INFO, "cancel_ignored", status=self._state.status.value)
                return False
            first = self._token.cancel()

        if first:
            self._emit("Scraping stopped by user", LogSeverity.WARNING)
        return first

    def _begin(self, urls: Sequence[str]) -> None:
        with self._lock:
            if self._state.status == RunStatus.RUNNING:
                raise CrawlAlreadyRunningError("A crawl run is already in progress.")
            snapshot = tuple(urls)
            if not snapshot:
                raise ValueError("At least one URL is required to start a crawl.")

            self._token = CancellationToken()
            self._state = RunState(
                status=RunStatus.RUNNING,
                urls=snapshot,
                stats=RunStatistics(total=len(snapshot)),
                started_at=datetime.now(timezone.utc),
            )

        self._emit("Starting ethical web scraping...", LogSeverity.INFO)
        self._emit(f"Total URLs to process: {len(snapshot)}", LogSeverity.INFO)

    def _execute(self) -> RunSnapshot:
        state = self._state
        token = self._token
        try:
            for url in state.urls:
                if token.cancelled:
                    break
                self._process_url(url, token)
        finally:
            self._finish(state, token)
        return state.snapshot()

    def _process_url(self, url: str, token: CancellationToken) -> None:
        self._emit(f"Scraping: {url}", LogSeverity.INFO)

        robots_url = self._robots_url_or_none(url)
        if robots_url is not None:
            self._emit(f"Checking robots.txt at {robots_url}", LogSeverity.INFO)
        decision = self._courtesy_checker.check(url, token=token)
        if token.cancelled:
            self._emit(f"Scraping cancelled for {url}", LogSeverity.INFO)
            return
        if decision.status == PolicyStatus.FOUND:
            self._emit(
                "Found robots.txt - presence recorded, rules are not enforced",
                LogSeverity.SUCCESS,
            )
        elif decision.status == PolicyStatus.ABSENT:
            self._emit("No robots.txt found - proceeding with caution", LogSeverity.INFO)
        else:
            self._emit(f"Could not check robots.txt: {decision.detail}", LogSeverity.WARNING)

        if not decision.allowed:
            self._emit(str(CourtesyDeniedSkip(url)), LogSeverity.WARNING)
            self._bump("skipped")
            return

        try:
            self._rate_limiter.wait(token=token)
            html = self._fetcher.fetch(url, token=token)
            records = self._registry.extract(html, url)
            relevant = self._relevance_filter.filter(records)
        except CancelledError:
            self._emit(f"Scraping cancelled for {url}", LogSeverity.INFO)
            return
        except (FetchError, NetworkError) as exc:
            self._emit(f"Error scraping {url}: {exc}", LogSeverity.ERROR)
            self._bump("failed")
            return
        except Exception as exc:
            logger.exception("Extraction failed for %s", url)
            self._emit(f"Error scraping {url}: {exc}", LogSeverity.ERROR)
            self._bump("failed")
            return

        self._state.results.extend(relevant)
        self._emit(f"Found {len(relevant)} relevant competitions at {url}", LogSeverity.SUCCESS)
        self._bump("success")

    @staticmethod
    def _robots_url_or_none(url: str) -> str | None:
        try:
            return CourtesyChecker.robots_url(url)
        except ValueError:
            return None

    def _finish(self, state: RunState, token: CancellationToken) -> None:
        total_found = len(state.results)
        if token.cancelled:
            self._emit(
                f"Scraping cancelled after {state.stats.processed} of {state.stats.total} URLs. "
                f"Found {total_found} total competitions",
                LogSeverity.INFO,
            )
            final_status = RunStatus.CANCELLED
        else:
            self._emit(
                f"Scraping complete! Found {total_found} total competitions",
                LogSeverity.SUCCESS,
            )
            final_status = RunStatus.COMPLETED

        with self._lock:
            state.status = final_status
            state.finished_at = datetime.now(timezone.utc)

        log_event(
            logger,
            logging.INFO,
            "crawl_run_finished",
            status=final_status.value,
            total=state.stats.total,
            success=state.stats.success,
            failed=state.stats.failed,
            skipped=state.stats.skipped,
            records=total_found,
        )

    def log(self, message: str, severity: LogSeverity = LogSeverity.INFO) -> LogEvent:
        """
        Append a collaborator message to the current run log.
        """

        return self._emit(message, severity)

    def _emit(self, message: str, severity: LogSeverity) -> LogEvent:
        entry = LogEvent(
            timestamp=datetime.now(timezone.utc),
            message=message,
            severity=severity,
        )
        self._state.logs.append(entry)
        mirror_run_log(logger, entry)
        if self._on_log is not None:
            try:
                self._on_log(entry)
            except Exception:
                logger.exception("Log listener failed")
        return entry

    def _bump(self, key: StatKey) -> None:
        self._state.stats.increment(key)
        if self._on_stats is not None:
            try:
                self._on_stats(key, 1)
            except Exception:
                logger.exception("Stats listener failed")
