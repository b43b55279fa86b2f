from __future__ import annotations

import json
from collections.abc import Iterator

import pytest

from app.scraping.config import get_crawl_settings, load_target_urls
from app.scraping.config.models import DEFAULT_USER_AGENT
from app.scraping.relevance import DEFAULT_ALLOWED_LOCATIONS

ENV_VARS = (
    "CTF_CRAWL_USER_AGENT",
    "CTF_CRAWL_REQUEST_DELAY_SECONDS",
    "CTF_CRAWL_TIMEOUT_SECONDS",
    "CTF_CRAWL_ROBOTS_TIMEOUT_SECONDS",
    "CTF_CRAWL_TARGETS_PATH",
    "CTF_CRAWL_EXPORT_DIR",
    "CTF_CRAWL_ALLOWED_LOCATIONS",
    "CTF_CRAWL_EXTRA_STRATEGIES",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_crawl_settings.cache_clear()
    yield
    get_crawl_settings.cache_clear()


class TestCrawlSettings:
    def test_defaults(self) -> None:
        settings = get_crawl_settings()

        assert settings.user_agent == DEFAULT_USER_AGENT
        assert settings.request_delay_seconds == 2.0
        assert settings.timeout_seconds == 30.0
        assert settings.robots_timeout_seconds == 10.0
        assert settings.allowed_locations == DEFAULT_ALLOWED_LOCATIONS
        assert settings.extra_strategies == ()
        assert settings.targets_path.endswith("targets.json")

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.setenv("CTF_CRAWL_USER_AGENT", "Custom/2.0")
        monkeypatch.setenv("CTF_CRAWL_REQUEST_DELAY_SECONDS", "0.5")
        monkeypatch.setenv("CTF_CRAWL_ALLOWED_LOCATIONS", "Online, Canada ,")
        monkeypatch.setenv("CTF_CRAWL_EXTRA_STRATEGIES", "pkg.mod:One,pkg.mod:Two")
        monkeypatch.setenv("CTF_CRAWL_EXPORT_DIR", str(tmp_path))

        settings = get_crawl_settings()

        assert settings.user_agent == "Custom/2.0"
        assert settings.request_delay_seconds == 0.5
        assert settings.allowed_locations == ("online", "canada")
        assert settings.extra_strategies == ("pkg.mod:One", "pkg.mod:Two")
        assert settings.export_dir == str(tmp_path)

    def test_invalid_and_out_of_range_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CTF_CRAWL_REQUEST_DELAY_SECONDS", "-3")
        monkeypatch.setenv("CTF_CRAWL_TIMEOUT_SECONDS", "soon")
        monkeypatch.setenv("CTF_CRAWL_ROBOTS_TIMEOUT_SECONDS", "0")
        monkeypatch.setenv("CTF_CRAWL_USER_AGENT", "   ")

        settings = get_crawl_settings()

        assert settings.request_delay_seconds == 0.0
        assert settings.timeout_seconds == 30.0
        assert settings.robots_timeout_seconds == 1.0
        assert settings.user_agent == DEFAULT_USER_AGENT


class TestLoadTargetUrls:
    def test_bundled_targets_file(self) -> None:
        urls = load_target_urls(targets_path=get_crawl_settings().targets_path)

        assert urls == ["https://ctftime.org/event/list/upcoming"]

    def test_mixed_entries(self, tmp_path) -> None:
        path = tmp_path / "targets.json"
        path.write_text(
            json.dumps(
                {
                    "targets": [
                        "https://ctftime.org/event/list/upcoming",
                        {"url": "https://ctf.example.org/", "enabled": True},
                        {"url": "https://disabled.example.org/", "enabled": False},
                        {"url": "ftp://files.example.org/"},
                        "https://ctftime.org/event/list/upcoming",
                        42,
                    ]
                }
            ),
            encoding="utf-8",
        )

        assert load_target_urls(targets_path=str(path)) == [
            "https://ctftime.org/event/list/upcoming",
            "https://ctf.example.org/",
        ]

    def test_missing_file_yields_empty_list(self, tmp_path) -> None:
        assert load_target_urls(targets_path=str(tmp_path / "absent.json")) == []

    @pytest.mark.parametrize("payload", [[1, 2], {"targets": "https://ctftime.org"}])
    def test_malformed_file_is_rejected(self, tmp_path, payload) -> None:
        path = tmp_path / "targets.json"
        path.write_text(json.dumps(payload), encoding="utf-8")

        with pytest.raises(ValueError):
            load_target_urls(targets_path=str(path))
