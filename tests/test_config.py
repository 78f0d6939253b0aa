"""Tests for patterns/config.py and patterns/settings.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from patterns.config import ACTIVITY_TAXONOMY, MOOD_TAXONOMY, TOPIC_TAXONOMY, PatternConfig
from patterns.settings import AnalysisConfig, Settings, build_source
from patterns.source import RestInsightSource, SQLiteInsightSource
from patterns.types import CategoryDefinition, build_taxonomy_index

_ENV_KEYS = (
    "PATTERNS_SOURCE",
    "SQLITE_DB_PATH",
    "SQLITE_TIMEOUT",
    "INSIGHTS_REST_URL",
    "INSIGHTS_REST_TABLE",
    "INSIGHTS_REST_KEY",
    "INSIGHTS_REST_TIMEOUT",
    "PATTERNS_DAYS_BACK",
    "PATTERNS_TIMEZONE",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


# Tests for PatternConfig


def test_default_taxonomies_validate() -> None:
    config = PatternConfig().validate()

    assert config.topics is TOPIC_TAXONOMY
    assert [definition.name for definition in ACTIVITY_TAXONOMY] == [
        "exercise",
        "social",
        "creative",
        "relaxation",
        "outdoor",
        "indoor",
    ]
    assert set(build_taxonomy_index(MOOD_TAXONOMY)) == {"positive", "negative", "neutral", "energetic", "calm"}


def test_duplicate_category_rejected() -> None:
    taxonomy = (CategoryDefinition("a", ("x",)), CategoryDefinition("a", ("y",)))

    with pytest.raises(ValueError, match="duplicate"):
        PatternConfig(topics=taxonomy).validate()


def test_uppercase_keyword_rejected() -> None:
    with pytest.raises(ValueError, match="lower-case"):
        PatternConfig(sleep_factors=(CategoryDefinition("noise", ("LOUD",)),)).validate()


def test_category_definition_matching() -> None:
    definition = CategoryDefinition("exercise", ("run", "gym"))

    assert definition.matches("morning run")
    assert definition.matches("brunch")
    assert definition.matched_keywords("gym then a run") == ("run", "gym")
    assert not definition.matches("swim")


# Tests for Settings


def test_settings_defaults(clean_env: pytest.MonkeyPatch) -> None:
    settings = Settings.from_env()

    assert settings.source == "sqlite"
    assert settings.sqlite.db_path == Path("./insights.db")
    assert settings.rest.base_url == "http://localhost:54321"
    assert settings.rest.api_key is None
    assert settings.analysis.days_back == 30
    assert settings.analysis.tzinfo() is None
    assert settings.log_level == "INFO"
    assert isinstance(build_source(settings), SQLiteInsightSource)


def test_settings_read_rest_environment(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("PATTERNS_SOURCE", "REST")
    clean_env.setenv("INSIGHTS_REST_URL", "https://db.example.com")
    clean_env.setenv("INSIGHTS_REST_KEY", "  anon-key  ")
    clean_env.setenv("INSIGHTS_REST_TIMEOUT", "5")
    clean_env.setenv("PATTERNS_DAYS_BACK", "7")
    clean_env.setenv("PATTERNS_TIMEZONE", "America/New_York")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.source == "rest"
    assert settings.rest.base_url == "https://db.example.com"
    assert settings.rest.api_key == "anon-key"
    assert settings.rest.timeout == 5.0
    assert settings.analysis.days_back == 7
    assert settings.log_level == "DEBUG"
    zone = settings.analysis.pattern_config().local_timezone
    assert str(zone) == "America/New_York"

    source = build_source(settings)
    assert isinstance(source, RestInsightSource)
    source.close()


def test_settings_reject_unknown_source(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("PATTERNS_SOURCE", "postgres")

    with pytest.raises(ValueError, match="PATTERNS_SOURCE"):
        Settings.from_env()


def test_settings_reject_unknown_timezone(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("PATTERNS_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ValueError, match="Unknown timezone"):
        Settings.from_env()


def test_settings_reject_bad_log_level(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ValueError, match="LOG_LEVEL"):
        Settings.from_env()


def test_analysis_config_rejects_non_positive_window() -> None:
    with pytest.raises(ValueError):
        AnalysisConfig(days_back=0)
