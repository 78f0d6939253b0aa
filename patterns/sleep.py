"""Regex-driven sleep detail extraction.

Each sleep-related message yields one :class:`SleepPattern`; nothing is
aggregated across messages. Every field has a fallback (quality 5, duration
7h, times ``"Unknown"``) so a message that mentions sleep without details
still produces an entry.

Time parsing assumes English 12-hour clock text ("11:30 pm", "7am").
"""

from __future__ import annotations

import re
from typing import Iterable

from constants import MAX_SLEEP_PATTERNS

from .config import (
    DEFAULT_SLEEP_DURATION,
    DEFAULT_SLEEP_QUALITY,
    SLEEP_FACTOR_TAXONOMY,
    SLEEP_KEYWORDS,
    SLEEP_QUALITY_LADDER,
    UNKNOWN_TIME,
)
from .models import ConversationInsight, SleepPattern
from .types import Taxonomy

_CLOCK = r"(\d{1,2}):?(\d{2})?\s*(am|pm)\b"
_DURATION_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(?:hours?|hrs?|h)\b", re.IGNORECASE)
_SLEEP_TIME_PATTERN = re.compile(_CLOCK, re.IGNORECASE)
_WAKE_TIME_PATTERN = re.compile(r"(?:woke|wake|up)\s*(?:at|around)?\s*" + _CLOCK, re.IGNORECASE)


def is_sleep_related(message: str) -> bool:
    lowered = message.lower()
    return any(keyword in lowered for keyword in SLEEP_KEYWORDS)


def extract_sleep_quality(message: str) -> int:
    lowered = message.lower()
    for score, words in SLEEP_QUALITY_LADDER:
        if any(word in lowered for word in words):
            return score
    return DEFAULT_SLEEP_QUALITY


def extract_sleep_duration(message: str) -> float:
    match = _DURATION_PATTERN.search(message)
    if match is None:
        return DEFAULT_SLEEP_DURATION
    return float(match.group(1))


def _format_clock(match: re.Match[str] | None, default_meridiem: str) -> str:
    if match is None:
        return UNKNOWN_TIME
    hour, minutes, meridiem = match.group(1), match.group(2), match.group(3)
    return f"{hour}:{minutes or '00'} {(meridiem or default_meridiem).upper()}"


def extract_sleep_time(message: str) -> str:
    return _format_clock(_SLEEP_TIME_PATTERN.search(message), "PM")


def extract_wake_time(message: str) -> str:
    return _format_clock(_WAKE_TIME_PATTERN.search(message), "AM")


def extract_sleep_factors(message: str, taxonomy: Taxonomy = SLEEP_FACTOR_TAXONOMY) -> list[str]:
    lowered = message.lower()
    return [definition.name for definition in taxonomy if definition.matches(lowered)]


def analyze_sleep_patterns(
    insights: Iterable[ConversationInsight],
    factor_taxonomy: Taxonomy = SLEEP_FACTOR_TAXONOMY,
) -> list[SleepPattern]:
    sleep_patterns: list[SleepPattern] = []

    for insight in insights:
        message = insight.message.lower()
        if not is_sleep_related(message):
            continue
        sleep_patterns.append(
            SleepPattern(
                sleep_quality=extract_sleep_quality(message),
                sleep_duration=extract_sleep_duration(message),
                sleep_time=extract_sleep_time(message),
                wake_time=extract_wake_time(message),
                factors=extract_sleep_factors(message, factor_taxonomy),
                last_mentioned=insight.created_at,
            )
        )
        if len(sleep_patterns) >= MAX_SLEEP_PATTERNS:
            break

    return sleep_patterns
