"""Tests for patterns/sleep.py."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from patterns.models import ConversationInsight
from patterns.sleep import (
    analyze_sleep_patterns,
    extract_sleep_duration,
    extract_sleep_factors,
    extract_sleep_quality,
    extract_sleep_time,
    extract_wake_time,
    is_sleep_related,
)


def _insight(message: str, day: int = 1) -> ConversationInsight:
    return ConversationInsight(message=message, created_at=datetime(2025, 1, day, 8, tzinfo=UTC))


def test_full_sleep_report_is_parsed() -> None:
    insight = _insight("Slept great, about 8 hours, fell asleep around 11:30 pm.")

    patterns = analyze_sleep_patterns([insight])

    assert len(patterns) == 1
    sleep = patterns[0]
    assert sleep.sleep_quality == 9
    assert sleep.sleep_duration == 8
    assert sleep.sleep_time == "11:30 PM"
    assert sleep.wake_time == "Unknown"
    assert sleep.factors == []
    assert sleep.last_mentioned == insight.created_at


def test_message_without_details_uses_defaults() -> None:
    sleep = analyze_sleep_patterns([_insight("Going to bed")])[0]

    assert sleep.sleep_quality == 5
    assert sleep.sleep_duration == 7.0
    assert sleep.sleep_time == "Unknown"
    assert sleep.wake_time == "Unknown"


def test_non_sleep_messages_are_skipped() -> None:
    assert analyze_sleep_patterns([_insight("Had pasta for lunch")]) == []


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        ("slept good", 7),
        ("bad night in bed", 3),
        ("bed was fine", 5),
        ("went to bed", 5),
        ("great start but a terrible end", 9),
        ("decent rest", 7),
    ],
)
def test_quality_ladder(message: str, expected: int) -> None:
    assert extract_sleep_quality(message) == expected


def test_duration_variants() -> None:
    assert extract_sleep_duration("slept 6.5 hours") == 6.5
    assert extract_sleep_duration("7hrs in bed") == 7.0
    assert extract_sleep_duration("bed at 10, 9h total") == 9.0
    assert extract_sleep_duration("SLEPT 5 HOURS") == 5.0
    assert extract_sleep_duration("no numbers") == 7.0


def test_sleep_time_variants() -> None:
    assert extract_sleep_time("went to bed at 10pm") == "10:00 PM"
    assert extract_sleep_time("asleep by 1:15 am") == "1:15 AM"
    assert extract_sleep_time("slept 8 amazing hours") == "Unknown"
    assert extract_sleep_time("no time given") == "Unknown"


def test_wake_time_variants() -> None:
    assert extract_wake_time("woke up at 6:45am") == "6:45 AM"
    assert extract_wake_time("had to wake around 7 am") == "7:00 AM"
    assert extract_wake_time("up 9pm after a nap") == "9:00 PM"
    assert extract_wake_time("slept in") == "Unknown"


def test_factors_collected_in_taxonomy_order() -> None:
    message = "couldn't sleep, too much coffee and my phone was loud"

    assert extract_sleep_factors(message) == ["caffeine", "noise", "screen_time"]


def test_stress_and_temperature_factors() -> None:
    assert extract_sleep_factors("anxious and the room was hot") == ["stress", "temperature"]


def test_is_sleep_related() -> None:
    assert is_sleep_related("Need some REST")
    assert is_sleep_related("new bedroom")
    assert not is_sleep_related("I ran today")


def test_only_first_five_entries_kept_in_input_order() -> None:
    insights = [_insight(f"sleep {hours} hours", day=hours) for hours in range(1, 8)]

    patterns = analyze_sleep_patterns(insights)

    assert [p.sleep_duration for p in patterns] == [1, 2, 3, 4, 5]
