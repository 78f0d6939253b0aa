"""Insight source adapters.

The engine reads a user's conversational history through the
:class:`InsightSource` protocol. Every adapter returns records ordered by
ascending ``created_at`` and raises :class:`InsightSourceError` for transport
or decoding failures so the aggregator can degrade to "no data".
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from types import TracebackType
from typing import Any, Iterable, Protocol, Sequence

import httpx
from pydantic import ValidationError

from constants import DEFAULT_RECENT_INSIGHTS
from db_utils import get_sqlite_connection

from .models import ConversationInsight
from .timestamps import format_utc, parse_iso_timestamp

logger = logging.getLogger(__name__)


class InsightSourceError(RuntimeError):
    """Raised when insights cannot be fetched from the backing store."""


class InsightSource(Protocol):
    def fetch_insights(self, user_id: str, since: datetime) -> list[ConversationInsight]:
        """Return insights with ``created_at >= since``, oldest first."""
        ...

    def fetch_recent(self, user_id: str, limit: int = DEFAULT_RECENT_INSIGHTS) -> list[ConversationInsight]:
        """Return the newest ``limit`` insights, newest first."""
        ...


def _insight_from_row(message: Any, created_at: Any) -> ConversationInsight | None:
    timestamp = parse_iso_timestamp(created_at if isinstance(created_at, str) else None)
    if timestamp is None:
        logger.warning("Skipping insight with unparseable created_at %r", created_at)
        return None
    return ConversationInsight(message=message, created_at=timestamp)


class SQLiteInsightSource:
    """Reads the ``conversation_insights`` table of a local SQLite database.

    ``created_at`` values are expected in the canonical fixed-width UTC form
    written by ``import_insights.py`` so that the window filter can run in SQL.
    """

    def __init__(self, db_path: str | Path, *, timeout: float = 30.0) -> None:
        self.db_path = Path(db_path)
        self.timeout = timeout

    def _query(self, sql: str, params: Sequence[Any]) -> list[ConversationInsight]:
        try:
            conn = get_sqlite_connection(self.db_path, timeout=self.timeout, read_only=True)
        except sqlite3.Error as exc:
            raise InsightSourceError(f"Cannot open insight database {self.db_path}: {exc}") from exc
        try:
            rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise InsightSourceError(f"Insight query failed: {exc}") from exc
        finally:
            conn.close()

        insights: list[ConversationInsight] = []
        for message, created_at in rows:
            insight = _insight_from_row(message, created_at)
            if insight is not None:
                insights.append(insight)
        return insights

    def fetch_insights(self, user_id: str, since: datetime) -> list[ConversationInsight]:
        return self._query(
            """
            SELECT message, created_at
            FROM conversation_insights
            WHERE user_id = ? AND created_at >= ?
            ORDER BY created_at ASC, id ASC
            """,
            (user_id, format_utc(since)),
        )

    def fetch_recent(self, user_id: str, limit: int = DEFAULT_RECENT_INSIGHTS) -> list[ConversationInsight]:
        return self._query(
            """
            SELECT message, created_at
            FROM conversation_insights
            WHERE user_id = ?
            ORDER BY created_at DESC, id DESC
            LIMIT ?
            """,
            (user_id, limit),
        )


@dataclass(slots=True)
class RestSourceConfig:
    base_url: str = "http://localhost:54321"
    table: str = "conversation_insights"
    api_key: str | None = None
    timeout: float = 30.0


class RestInsightSource:
    """Fetches insights from a PostgREST-style HTTP backend."""

    def __init__(self, config: RestSourceConfig, *, transport: httpx.BaseTransport | None = None) -> None:
        self.config = config
        headers = {"Accept": "application/json"}
        if config.api_key:
            headers["apikey"] = config.api_key
            headers["Authorization"] = f"Bearer {config.api_key}"
        self._client = httpx.Client(
            base_url=config.base_url.rstrip("/"),
            timeout=config.timeout,
            headers=headers,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RestInsightSource":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _get(self, params: dict[str, str]) -> list[ConversationInsight]:
        path = f"/rest/v1/{self.config.table}"
        try:
            response = self._client.get(path, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise InsightSourceError(f"Insight request failed: {exc}") from exc
        except ValueError as exc:
            raise InsightSourceError(f"Insight response was not valid JSON: {exc}") from exc

        if not isinstance(payload, list):
            raise InsightSourceError(f"Expected a JSON array of insights, got {type(payload).__name__}")
        return _parse_records(payload)

    def fetch_insights(self, user_id: str, since: datetime) -> list[ConversationInsight]:
        return self._get(
            {
                "select": "message,created_at",
                "user_id": f"eq.{user_id}",
                "created_at": f"gte.{since.isoformat()}",
                "order": "created_at.asc",
            }
        )

    def fetch_recent(self, user_id: str, limit: int = DEFAULT_RECENT_INSIGHTS) -> list[ConversationInsight]:
        return self._get(
            {
                "select": "message,created_at",
                "user_id": f"eq.{user_id}",
                "order": "created_at.desc",
                "limit": str(limit),
            }
        )


def _parse_records(records: Iterable[Any]) -> list[ConversationInsight]:
    insights: list[ConversationInsight] = []
    for record in records:
        if not isinstance(record, dict):
            logger.warning("Skipping non-object insight record: %r", record)
            continue
        try:
            insights.append(ConversationInsight.model_validate(record))
        except ValidationError as exc:
            logger.warning("Skipping malformed insight record: %s", exc)
    return insights


@dataclass(frozen=True, slots=True)
class StoredInsight:
    user_id: str
    insight: ConversationInsight


class StaticInsightSource:
    """In-memory source, used by tests and callers that already hold the records."""

    def __init__(self, records: Iterable[StoredInsight] = ()) -> None:
        self._records = tuple(records)

    @classmethod
    def for_user(cls, user_id: str, insights: Iterable[ConversationInsight]) -> "StaticInsightSource":
        return cls(StoredInsight(user_id, insight) for insight in insights)

    def _for(self, user_id: str) -> list[ConversationInsight]:
        return [record.insight for record in self._records if record.user_id == user_id]

    def fetch_insights(self, user_id: str, since: datetime) -> list[ConversationInsight]:
        cutoff = _as_utc(since)
        selected = [insight for insight in self._for(user_id) if _as_utc(insight.created_at) >= cutoff]
        return sorted(selected, key=lambda insight: _as_utc(insight.created_at))

    def fetch_recent(self, user_id: str, limit: int = DEFAULT_RECENT_INSIGHTS) -> list[ConversationInsight]:
        ordered = sorted(self._for(user_id), key=lambda insight: _as_utc(insight.created_at), reverse=True)
        return ordered[:limit]


def _as_utc(value: datetime) -> datetime:
    # naive values are compared as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
