#!/usr/bin/env python3
"""
import_insights.py
Load conversation insight exports into the SQLite schema (patterns/schema.sql).

Accepted inputs are a JSON array of records or JSON Lines, one record per
line. Each record needs ``user_id``, ``message`` and ``created_at``;
``conversation_date`` is optional. Camel-case keys (``userId``,
``createdAt``) are accepted as well.

Usage examples:
  python import_insights.py --db ./insights.db --json ./insights.json
  python import_insights.py --db ./insights.db --json-dir ./exports
"""

from __future__ import annotations

import argparse
import logging
import sqlite3
from pathlib import Path
from typing import Any, Iterable, Iterator

import orjson

from db_utils import get_sqlite_connection, init_insight_schema
from patterns.timestamps import normalize_iso_timestamp

logger = logging.getLogger("import_insights")


def _field(record: dict[str, Any], snake: str, camel: str) -> Any:
    value = record.get(snake)
    if value is None:
        value = record.get(camel)
    return value


def iter_records(path: Path) -> Iterator[dict[str, Any]]:
    raw = path.read_bytes()
    if path.suffix == ".jsonl":
        for line_no, line in enumerate(raw.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                item = orjson.loads(line)
            except orjson.JSONDecodeError as exc:
                logger.warning("%s:%d is not valid JSON: %s", path, line_no, exc)
                continue
            if isinstance(item, dict):
                yield item
        return

    data = orjson.loads(raw)
    if isinstance(data, dict):
        data = data.get("insights") or []
    for item in data:
        if isinstance(item, dict):
            yield item


def insert_insight(conn: sqlite3.Connection, record: dict[str, Any]) -> bool:
    user_id = _field(record, "user_id", "userId")
    created_at = normalize_iso_timestamp(str(_field(record, "created_at", "createdAt") or ""))
    if not user_id or created_at is None:
        logger.warning("Skipping insight without user_id or parseable created_at: %r", record)
        return False

    conn.execute(
        """
        INSERT INTO conversation_insights (user_id, conversation_date, message, created_at)
        VALUES (?,?,?,?)
        """,
        (
            str(user_id),
            _field(record, "conversation_date", "conversationDate") or created_at[:10],
            str(record.get("message") or ""),
            created_at,
        ),
    )
    return True


def process_file(conn: sqlite3.Connection, path: Path) -> int:
    loaded = 0
    for record in iter_records(path):
        if insert_insight(conn, record):
            loaded += 1
    return loaded


def iter_input_files(json_path: Path | None, json_dir: Path | None) -> Iterable[Path]:
    if json_path and json_path.exists():
        yield json_path
    if json_dir and json_dir.exists():
        for suffix in ("*.json", "*.jsonl"):
            yield from sorted(json_dir.rglob(suffix))


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    ap = argparse.ArgumentParser(description="Import conversation insights into SQLite.")
    ap.add_argument("--db", type=Path, required=True, help="Path to SQLite DB (created if missing)")
    ap.add_argument("--json", type=Path, help="Path to a single .json or .jsonl export")
    ap.add_argument("--json-dir", type=Path, help="Directory to crawl for *.json / *.jsonl exports")
    args = ap.parse_args()

    if not args.json and not args.json_dir:
        ap.error("Provide --json or --json-dir")

    conn = get_sqlite_connection(args.db)
    total = 0
    try:
        init_insight_schema(conn)
        with conn:
            for path in iter_input_files(args.json, args.json_dir):
                logger.info("Ingesting %s ...", path)
                total += process_file(conn, path)
        logger.info("Done. Loaded %d insights.", total)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
