"""
Structured logging helpers for crawl workflows.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from app.scraping.types import LogEvent, LogSeverity

SEVERITY_LEVELS: dict[LogSeverity, int] = {
    LogSeverity.INFO: logging.INFO,
    LogSeverity.SUCCESS: logging.INFO,
    LogSeverity.WARNING: logging.WARNING,
    LogSeverity.ERROR: logging.ERROR,
}


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))


def mirror_run_log(logger: logging.Logger, entry: LogEvent, **fields: Any) -> None:
    """
    Forward a run log event to process logging.
    """

    log_event(
        logger,
        SEVERITY_LEVELS[entry.severity],
        "crawl_log",
        message=entry.message,
        severity=entry.severity.value,
        **fields,
    )
