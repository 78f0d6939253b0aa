"""Runtime configuration helpers for pattern analysis entry points."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from constants import DEFAULT_DAYS_BACK

from .config import PatternConfig
from .source import InsightSource, RestInsightSource, RestSourceConfig, SQLiteInsightSource

# Load environment variables from a .env file if present.
load_dotenv()


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
SourceKind = Literal["sqlite", "rest"]


@dataclass(frozen=True, slots=True)
class SQLiteConfig:
    """Location of the local insight database."""

    db_path: Path = Path("./insights.db")
    timeout: float = 30.0


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Defaults applied to analysis runs."""

    days_back: int = DEFAULT_DAYS_BACK
    timezone: str | None = None

    def __post_init__(self) -> None:
        if self.days_back < 1:
            raise ValueError(f"days_back must be >= 1, got {self.days_back}")

    def tzinfo(self) -> ZoneInfo | None:
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except ZoneInfoNotFoundError as exc:
            raise ValueError(f"Unknown timezone {self.timezone!r}") from exc

    def pattern_config(self) -> PatternConfig:
        return PatternConfig(local_timezone=self.tzinfo())


@dataclass(frozen=True, slots=True)
class Settings:
    """Aggregate settings for the analysis CLI."""

    source: SourceKind = "sqlite"
    sqlite: SQLiteConfig = field(default_factory=SQLiteConfig)
    rest: RestSourceConfig = field(default_factory=RestSourceConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    log_level: LogLevel = "INFO"

    @staticmethod
    def _str_env(key: str) -> str | None:
        raw = os.getenv(key)
        if raw is None:
            return None
        stripped = raw.strip()
        return stripped or None

    @classmethod
    def from_env(cls) -> Settings:
        """Load configuration values from the environment."""
        source = (cls._str_env("PATTERNS_SOURCE") or "sqlite").lower()
        if source not in ("sqlite", "rest"):
            raise ValueError(f"PATTERNS_SOURCE must be sqlite or rest, got {source}")

        sqlite = SQLiteConfig(
            db_path=Path(os.getenv("SQLITE_DB_PATH", "./insights.db")).expanduser(),
            timeout=float(os.getenv("SQLITE_TIMEOUT", "30")),
        )

        rest = RestSourceConfig(
            base_url=os.getenv("INSIGHTS_REST_URL", RestSourceConfig().base_url),
            table=os.getenv("INSIGHTS_REST_TABLE", "conversation_insights"),
            api_key=cls._str_env("INSIGHTS_REST_KEY"),
            timeout=float(os.getenv("INSIGHTS_REST_TIMEOUT", "30")),
        )

        analysis = AnalysisConfig(
            days_back=int(os.getenv("PATTERNS_DAYS_BACK", str(DEFAULT_DAYS_BACK))),
            timezone=cls._str_env("PATTERNS_TIMEZONE"),
        )
        # resolve eagerly so a bad zone name fails at startup
        analysis.tzinfo()

        log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
        if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"LOG_LEVEL must be DEBUG/INFO/WARNING/ERROR, got {log_level}")

        return cls(
            source=source,  # type: ignore[arg-type]
            sqlite=sqlite,
            rest=rest,
            analysis=analysis,
            log_level=log_level,  # type: ignore[arg-type]
        )


def build_source(settings: Settings) -> InsightSource:
    """Construct the insight source selected by ``settings.source``."""
    if settings.source == "rest":
        return RestInsightSource(settings.rest)
    return SQLiteInsightSource(settings.sqlite.db_path, timeout=settings.sqlite.timeout)
