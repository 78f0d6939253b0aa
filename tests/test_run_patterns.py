"""Tests for run_patterns.py."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import orjson
import pytest

import run_patterns
from db_utils import get_sqlite_connection, init_insight_schema
from patterns.settings import Settings


def _args(**overrides) -> argparse.Namespace:
    values = {
        "user": "u1",
        "days": 30,
        "sqlite": None,
        "rest_url": None,
        "rest_key": None,
        "timezone": None,
        "recent": None,
        "compact": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


def test_apply_overrides_switches_to_rest() -> None:
    settings = run_patterns.apply_overrides(
        Settings(), _args(rest_url="https://db.example.com", rest_key="k", days=7, timezone="UTC")
    )

    assert settings.source == "rest"
    assert settings.rest.base_url == "https://db.example.com"
    assert settings.rest.api_key == "k"
    assert settings.analysis.days_back == 7
    assert settings.analysis.timezone == "UTC"


def test_apply_overrides_sqlite_path(tmp_path: Path) -> None:
    settings = run_patterns.apply_overrides(Settings(source="rest"), _args(sqlite=tmp_path / "x.db"))

    assert settings.source == "sqlite"
    assert settings.sqlite.db_path == tmp_path / "x.db"


def test_main_prints_report_and_recent(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    db_path = tmp_path / "insights.db"
    conn = get_sqlite_connection(db_path)
    try:
        init_insight_schema(conn)
        with conn:
            conn.execute(
                "INSERT INTO conversation_insights (user_id, message, created_at) VALUES (?,?,?)",
                ("u1", "Old note about the gym", "2020-01-01T07:00:00.000000Z"),
            )
    finally:
        conn.close()
    for key in ("PATTERNS_SOURCE", "PATTERNS_DAYS_BACK", "PATTERNS_TIMEZONE", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)

    monkeypatch.setattr(sys, "argv", ["run_patterns.py", "--user", "u1", "--sqlite", str(db_path), "--compact"])
    run_patterns.main()
    report = orjson.loads(capsys.readouterr().out)

    assert report["success"] is True
    assert report["analysisPeriod"] == "30 days"
    assert report["patterns"]["userId"] == "u1"
    assert report["patterns"]["activityPatterns"] == []

    monkeypatch.setattr(sys, "argv", ["run_patterns.py", "--user", "u1", "--sqlite", str(db_path), "--recent", "5"])
    run_patterns.main()
    recent = orjson.loads(capsys.readouterr().out)

    assert recent == [{"message": "Old note about the gym", "createdAt": "2020-01-01T07:00:00Z"}]
