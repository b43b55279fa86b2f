"""
app/services/crawl_service.py

Process-wide crawl service: one orchestrator and one editable target list.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path

from app.scraping.config import CrawlSettings, get_crawl_settings, load_target_urls
from app.scraping.engine import CrawlOrchestrator
from app.scraping.export import export_to_csv, render_csv
from app.scraping.targets import TargetUrlList
from app.scraping.types import CompetitionRecord, LogEvent, LogSeverity, RunSnapshot


class CrawlService:
    """
    Thin facade the API and CLI share over the crawl pipeline.
    """

    def __init__(
        self,
        *,
        settings: CrawlSettings | None = None,
        orchestrator: CrawlOrchestrator | None = None,
        targets: Sequence[str] | None = None,
    ) -> None:
        self._settings = settings or get_crawl_settings()
        self._orchestrator = orchestrator or CrawlOrchestrator.from_settings(self._settings)
        seeds = targets if targets is not None else load_target_urls(
            targets_path=self._settings.targets_path
        )
        self._targets = TargetUrlList(seeds, on_log=self._orchestrator.log)

    @property
    def settings(self) -> CrawlSettings:
        return self._settings

    @property
    def orchestrator(self) -> CrawlOrchestrator:
        return self._orchestrator

    def list_targets(self) -> tuple[str, ...]:
        return self._targets.urls()

    def add_target(self, url: str) -> bool:
        return self._targets.add(url)

    def remove_target(self, url: str) -> bool:
        return self._targets.remove(url)

    def start(self, urls: Sequence[str] | None = None) -> RunSnapshot:
        """
        Start a background run over `urls`, or over the target list when omitted.
        """

        selected = urls if urls else self._targets.urls()
        cleaned = dict.fromkeys(url.strip() for url in selected if url.strip())
        return self._orchestrator.start(list(cleaned))

    def cancel(self) -> bool:
        return self._orchestrator.cancel()

    def snapshot(self) -> RunSnapshot:
        return self._orchestrator.snapshot()

    def logs(self, *, offset: int = 0) -> tuple[LogEvent, ...]:
        return self.snapshot().logs[max(0, offset):]

    def results(self) -> tuple[CompetitionRecord, ...]:
        return self.snapshot().results

    def render_export(self) -> str | None:
        """
        CSV text of the current results, or None (with a warning) when empty.
        """

        results = self.results()
        if not results:
            self._orchestrator.log("No results to export", LogSeverity.WARNING)
            return None
        return render_csv(results)

    def export_to_file(self, directory: str | Path | None = None) -> Path | None:
        return export_to_csv(
            self.results(),
            directory=directory or self._settings.export_dir,
            on_log=self._orchestrator.log,
        )


@lru_cache(maxsize=1)
def get_crawl_service() -> CrawlService:
    """
    Build and cache the crawl service.
    """

    return CrawlService()
