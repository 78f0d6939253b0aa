from __future__ import annotations

import re
from datetime import datetime, timezone

_OFFSET_PATTERN = re.compile(r"([+-]\d{2}):?(\d{2})(?::(\d{2}))?$")


def parse_iso_timestamp(raw: str | None) -> datetime | None:
    """Parse loosely formatted ISO-8601 text into an aware datetime.

    Accepts a space separator, a trailing ``Z``, compact ``+0930`` offsets and
    offsets carrying seconds. Naive values are assumed to be UTC. Returns
    ``None`` when the text cannot be parsed.
    """
    if raw is None:
        return None

    candidate = raw.strip()
    if not candidate:
        return None

    if "T" not in candidate and " " in candidate:
        candidate = candidate.replace(" ", "T", 1)

    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"

    match = _OFFSET_PATTERN.search(candidate)
    if match and "T" in candidate[: match.start()]:
        hours, minutes, _seconds = match.groups()
        candidate = candidate[: match.start()] + f"{hours}:{minutes}" + candidate[match.end():]

    try:
        dt_obj = datetime.fromisoformat(candidate)
    except ValueError:
        return None

    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=timezone.utc)
    return dt_obj


def format_utc(value: datetime) -> str:
    """Render a datetime as fixed-width UTC text (``...T07:00:00.000000Z``).

    Fixed width keeps lexical ordering in SQLite identical to time ordering.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat(timespec="microseconds")
    return text[:-6] + "Z"


def normalize_iso_timestamp(raw: str | None) -> str | None:
    """Return the canonical stored form of ``raw`` or ``None`` if parsing fails."""
    parsed = parse_iso_timestamp(raw)
    if parsed is None:
        return None
    return format_utc(parsed)
