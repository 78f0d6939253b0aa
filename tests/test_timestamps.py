from datetime import UTC, datetime, timedelta, timezone

from patterns.timestamps import format_utc, normalize_iso_timestamp, parse_iso_timestamp


def test_normalize_converts_offset_seconds() -> None:
    value = "2025-05-13T18:47:48.983000-04:04:00"
    assert normalize_iso_timestamp(value) == "2025-05-13T22:51:48.983000Z"


def test_normalize_restores_trailing_z_and_separator() -> None:
    value = "2024-01-01 00:00:00Z"
    assert normalize_iso_timestamp(value) == "2024-01-01T00:00:00.000000Z"


def test_normalize_handles_shorthand_offset() -> None:
    value = "2023-12-31T23:59:59+0930"
    assert normalize_iso_timestamp(value) == "2023-12-31T14:29:59.000000Z"


def test_normalize_rejects_invalid() -> None:
    assert normalize_iso_timestamp("not-a-timestamp") is None
    assert normalize_iso_timestamp("") is None
    assert normalize_iso_timestamp(None) is None


def test_parse_treats_naive_values_as_utc() -> None:
    parsed = parse_iso_timestamp("2025-01-10T07:00:00")
    assert parsed == datetime(2025, 1, 10, 7, tzinfo=UTC)


def test_parse_keeps_date_only_values() -> None:
    assert parse_iso_timestamp("2025-01-10") == datetime(2025, 1, 10, tzinfo=UTC)


def test_format_utc_is_fixed_width_and_sortable() -> None:
    early = format_utc(datetime(2025, 1, 10, 7, tzinfo=UTC))
    late = format_utc(datetime(2025, 1, 10, 2, 30, 0, 500, tzinfo=timezone(timedelta(hours=-5))))

    assert early == "2025-01-10T07:00:00.000000Z"
    assert late == "2025-01-10T07:30:00.000500Z"
    assert len(early) == len(late)
    assert early < late
