"""
CSV export of crawl results.

Every data field is wrapped in double quotes without re-escaping quote
characters inside the value, so a field that itself contains `"` yields a
malformed row. Downstream consumers rely on this exact layout.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date
from pathlib import Path

from app.scraping.logging_utils import log_event
from app.scraping.types import CompetitionRecord, LogSeverity

logger = logging.getLogger(__name__)

CSV_HEADERS: tuple[str, ...] = (
    "Name",
    "Dates",
    "Fees",
    "Requirements",
    "Notes",
    "Type",
    "Age Group",
    "Location",
    "URL",
)


def record_row(record: CompetitionRecord) -> tuple[str, ...]:
    return (
        record.name,
        record.dates,
        record.fees,
        record.requirements,
        record.notes,
        record.type,
        record.age_group,
        record.location,
        record.url,
    )


def render_csv(records: Sequence[CompetitionRecord]) -> str:
    lines = [",".join(CSV_HEADERS)]
    lines.extend(",".join(f'"{cell}"' for cell in record_row(record)) for record in records)
    return "\n".join(lines)


def export_filename(today: date | None = None) -> str:
    return f"ctf_competitions_{(today or date.today()).isoformat()}.csv"


def export_to_csv(
    records: Sequence[CompetitionRecord],
    *,
    directory: str | Path,
    on_log: Callable[[str, LogSeverity], None] | None = None,
    today: date | None = None,
) -> Path | None:
    """
    Write `records` to a dated CSV file in `directory`.

    Returns the written path, or None when there is nothing to export.
    """

    if not records:
        _notify(on_log, "No results to export", LogSeverity.WARNING)
        return None

    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export_filename(today)
    path.write_text(render_csv(records), encoding="utf-8")

    log_event(logger, logging.INFO, "results_exported", path=str(path), rows=len(records))
    _notify(on_log, "Results exported to CSV", LogSeverity.SUCCESS)
    return path


def _notify(
    on_log: Callable[[str, LogSeverity], None] | None,
    message: str,
    severity: LogSeverity,
) -> None:
    if severity == LogSeverity.WARNING:
        log_event(logger, logging.WARNING, "export_skipped", message=message)
    if on_log is not None:
        on_log(message, severity)
