from __future__ import annotations

import json

import pytest

from app.scraping.engine import CrawlOrchestrator
from scripts import run_crawl
from tests.conftest import FakeResponse, FakeSession
from tests.pages import CTFTIME_MIXED_LOCATIONS, CTFTIME_URL


@pytest.fixture()
def fake_session(monkeypatch: pytest.MonkeyPatch) -> FakeSession:
    session = FakeSession()
    session.route("GET", CTFTIME_URL, lambda: FakeResponse(200, CTFTIME_MIXED_LOCATIONS))
    build = CrawlOrchestrator.from_settings

    def _from_settings(settings, **kwargs):
        return build(settings, session=session, **kwargs)

    monkeypatch.setattr(CrawlOrchestrator, "from_settings", _from_settings)
    return session


def test_crawl_and_export(fake_session: FakeSession, tmp_path, capsys) -> None:
    code = run_crawl.main([CTFTIME_URL, "--delay", "0", "--export-dir", str(tmp_path)])

    assert code == 0
    out = capsys.readouterr().out
    assert f"Scraping: {CTFTIME_URL}" in out
    summary = json.loads(out[out.index("{"):])
    assert summary["status"] == "completed"
    assert summary["success"] == 1
    assert summary["competitions"] == 2
    exported = list(tmp_path.glob("ctf_competitions_*.csv"))
    assert [str(path) for path in exported] == [summary["export_path"]]


def test_no_export_flag(fake_session: FakeSession, tmp_path, capsys) -> None:
    code = run_crawl.main([CTFTIME_URL, "--delay", "0", "--no-export", "--export-dir", str(tmp_path)])

    assert code == 0
    assert list(tmp_path.iterdir()) == []
    out = capsys.readouterr().out
    assert json.loads(out[out.index("{"):])["export_path"] is None


def test_failed_urls_still_exit_zero(fake_session: FakeSession, tmp_path, capsys) -> None:
    code = run_crawl.main(["https://down.example.com/", "--delay", "0", "--export-dir", str(tmp_path)])

    assert code == 0
    out = capsys.readouterr().out
    summary = json.loads(out[out.index("{"):])
    assert summary["failed"] == 1
    assert summary["export_path"] is None
    assert "No results to export" in out
