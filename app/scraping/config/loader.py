"""
Environment + JSON config loader for competition crawling.
"""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path

from app.config import load_env_files, project_root
from app.scraping.config.models import DEFAULT_USER_AGENT, CrawlSettings
from app.scraping.logging_utils import log_event
from app.scraping.relevance import DEFAULT_ALLOWED_LOCATIONS

logger = logging.getLogger(__name__)


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    stripped = raw.strip()
    return stripped if stripped else default


def _get_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or default


def _resolve_path(raw_path: str) -> Path:
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return candidate
    return (project_root() / candidate).resolve()


@lru_cache(maxsize=1)
def get_crawl_settings() -> CrawlSettings:
    """
    Return cached crawl settings from environment variables.
    """

    load_env_files()
    return CrawlSettings(
        targets_path=str(
            _resolve_path(_get_str_env("CTF_CRAWL_TARGETS_PATH", "app/scraping/config/targets.json"))
        ),
        export_dir=str(_resolve_path(_get_str_env("CTF_CRAWL_EXPORT_DIR", "exports"))),
        user_agent=_get_str_env("CTF_CRAWL_USER_AGENT", DEFAULT_USER_AGENT),
        request_delay_seconds=max(
            0.0,
            _get_float_env("CTF_CRAWL_REQUEST_DELAY_SECONDS", 2.0),
        ),
        timeout_seconds=max(
            1.0,
            _get_float_env("CTF_CRAWL_TIMEOUT_SECONDS", 30.0),
        ),
        robots_timeout_seconds=max(
            1.0,
            _get_float_env("CTF_CRAWL_ROBOTS_TIMEOUT_SECONDS", 10.0),
        ),
        allowed_locations=tuple(
            token.lower()
            for token in _get_list_env("CTF_CRAWL_ALLOWED_LOCATIONS", DEFAULT_ALLOWED_LOCATIONS)
        ),
        extra_strategies=_get_list_env("CTF_CRAWL_EXTRA_STRATEGIES", ()),
    )


def load_target_urls(*, targets_path: str) -> list[str]:
    """
    Load seed target URLs from a JSON file shaped like {"targets": [...]}.
    """

    path = _resolve_path(targets_path)
    if not path.exists():
        log_event(logger, logging.WARNING, "targets_file_missing", path=str(path))
        return []

    raw_data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw_data, dict):
        raise ValueError("Invalid targets config: top level must be an object.")
    targets = raw_data.get("targets", [])
    if not isinstance(targets, list):
        raise ValueError("Invalid targets config: 'targets' must be a list.")

    parsed: list[str] = []
    for entry in targets:
        if isinstance(entry, dict):
            if entry.get("enabled") is False:
                continue
            entry = entry.get("url")
        if not isinstance(entry, str):
            continue
        url = entry.strip()
        if url.startswith(("http://", "https://")) and url not in parsed:
            parsed.append(url)
    return parsed
