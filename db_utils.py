"""SQLite helpers for the conversation insight store."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

SCHEMA_PATH = Path(__file__).resolve().parent / "patterns" / "schema.sql"


def get_sqlite_connection(
    db_path: str | Path,
    *,
    timeout: float = 30.0,
    read_only: bool = False,
    **kwargs: Any,
) -> sqlite3.Connection:
    """Open a SQLite connection suitable for concurrent readers.

    Read-only connections use URI mode and skip the journal pragmas, so a
    missing database file surfaces as ``sqlite3.OperationalError`` instead of
    silently creating an empty file.

    Args:
        db_path: Path to the SQLite database file.
        timeout: Seconds to wait on a locked database (default: 30.0).
        read_only: If True, open connection in read-only mode.
        **kwargs: Additional arguments to pass to sqlite3.connect().

    Returns:
        A configured SQLite connection.

    Example:
        >>> conn = get_sqlite_connection("./insights.db", read_only=True)
        >>> conn.execute("SELECT COUNT(*) FROM conversation_insights").fetchone()
        >>> conn.close()
    """
    if read_only:
        conn = sqlite3.connect(f"file:{db_path}?mode=ro", timeout=timeout, uri=True, **kwargs)
    else:
        conn = sqlite3.connect(str(db_path), timeout=timeout, **kwargs)
        conn.execute("PRAGMA journal_mode = WAL")
        conn.execute("PRAGMA synchronous = NORMAL")

    conn.execute("PRAGMA foreign_keys = ON")
    conn.execute(f"PRAGMA busy_timeout = {int(timeout * 1000)}")
    return conn


def init_insight_schema(conn: sqlite3.Connection, schema_path: Path = SCHEMA_PATH) -> None:
    """Create the insight tables if they do not exist yet."""
    conn.executescript(schema_path.read_text(encoding="utf-8"))
