"""
Run one competition crawl from the command line.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace

from app.config import get_app_settings
from app.scraping.config import get_crawl_settings, load_target_urls
from app.scraping.engine import CrawlOrchestrator
from app.scraping.export import export_to_csv
from app.scraping.types import LogEvent, RunStatus


def _print_event(event: LogEvent) -> None:
    stamp = event.timestamp.astimezone().strftime("%H:%M:%S")
    print(f"[{stamp}] {event.severity.value.upper():<7} {event.message}", flush=True)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Crawl CTF competition listings.")
    parser.add_argument(
        "urls",
        nargs="*",
        help="Pages to crawl. Defaults to the configured targets file.",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds to wait before each fetch.",
    )
    parser.add_argument(
        "--export-dir",
        dest="export_dir",
        default=None,
        help="Directory for the CSV export.",
    )
    parser.add_argument(
        "--no-export",
        dest="export",
        action="store_false",
        help="Skip writing the CSV file.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_app_settings().log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    settings = get_crawl_settings()
    if args.delay is not None:
        settings = replace(settings, request_delay_seconds=max(0.0, args.delay))

    urls = list(dict.fromkeys(url.strip() for url in args.urls if url.strip()))
    if not urls:
        urls = load_target_urls(targets_path=settings.targets_path)
    if not urls:
        parser.error("no URLs given and the targets file is empty")

    orchestrator = CrawlOrchestrator.from_settings(settings, on_log=_print_event)
    orchestrator.start(urls)
    try:
        while not orchestrator.wait(timeout=0.5):
            pass
    except KeyboardInterrupt:
        orchestrator.cancel()
        orchestrator.wait()

    snapshot = orchestrator.snapshot()
    exported = None
    if args.export:
        exported = export_to_csv(
            snapshot.results,
            directory=args.export_dir or settings.export_dir,
            on_log=orchestrator.log,
        )

    payload = {
        "status": snapshot.status.value,
        "total": snapshot.stats.total,
        "success": snapshot.stats.success,
        "failed": snapshot.stats.failed,
        "skipped": snapshot.stats.skipped,
        "competitions": len(snapshot.results),
        "export_path": str(exported) if exported else None,
    }
    print(json.dumps(payload, indent=2))
    return 1 if snapshot.status == RunStatus.CANCELLED else 0


if __name__ == "__main__":
    raise SystemExit(main())
