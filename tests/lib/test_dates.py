"""Unit tests for lib.dates."""

from datetime import date, datetime, timezone

from dateutil import tz

from lib.dates import (
    INVALID_DATE,
    extract_future_date,
    format_date,
    is_within_last_days,
    local_day,
    parse_date,
)


def test_parse_date_reads_airtable_timestamp_as_utc() -> None:
    parsed = parse_date("2024-01-17T10:30:00.000Z")
    assert parsed == datetime(2024, 1, 17, 10, 30, tzinfo=timezone.utc)


def test_parse_date_treats_date_only_values_as_utc_midnight() -> None:
    assert parse_date("2024-01-17") == datetime(2024, 1, 17, tzinfo=timezone.utc)
    assert parse_date(date(2024, 1, 17)) == datetime(2024, 1, 17, tzinfo=timezone.utc)


def test_parse_date_returns_none_for_garbage() -> None:
    assert parse_date("not a date") is None
    assert parse_date(None) is None
    assert parse_date("") is None
    assert parse_date(42) is None


def test_format_date_uses_month_abbreviation_and_day() -> None:
    assert format_date("2024-01-07T23:00:00Z") == "Jan 7"
    assert format_date(datetime(2024, 12, 25)) == "Dec 25"


def test_format_date_returns_sentinel_for_invalid_input() -> None:
    assert format_date("yesterday-ish") == INVALID_DATE
    assert format_date(None) == "Invalid Date"


def test_is_within_last_days_is_inclusive_of_the_window_start() -> None:
    reference = "2024-01-17"
    assert is_within_last_days("2024-01-10", 7, reference)
    assert is_within_last_days("2024-01-16", 7, reference)
    assert not is_within_last_days("2024-01-09", 7, reference)


def test_is_within_last_days_is_false_for_unparseable_dates() -> None:
    assert not is_within_last_days("soon", 7, "2024-01-17")


def test_extract_future_date_assumes_reference_year() -> None:
    assert extract_future_date("Go-live planned for March 3rd", "2024-01-17") == date(2024, 3, 3)


def test_extract_future_date_skips_past_and_same_day_mentions() -> None:
    text = "Kickoff Jan 10, review Jan 17, sign-off Feb 2"
    assert extract_future_date(text, "2024-01-17") == date(2024, 2, 2)


def test_extract_future_date_honours_explicit_year() -> None:
    assert extract_future_date("Cutover Mar. 3, 2025", "2024-06-01") == date(2025, 3, 3)
    assert extract_future_date("Closed Dec 5, 2023", "2024-01-17") is None


def test_extract_future_date_ignores_impossible_dates() -> None:
    assert extract_future_date("Due Feb 30 or Mar 1", "2024-01-17") == date(2024, 3, 1)


def test_extract_future_date_returns_none_without_a_match() -> None:
    assert extract_future_date("No dates here", "2024-01-17") is None
    assert extract_future_date("", "2024-01-17") is None
    assert extract_future_date("Due Mar 1", "bad reference") is None


def test_local_day_shifts_timestamps_into_the_given_zone() -> None:
    evening_in_new_york = "2024-01-18T02:30:00.000Z"

    assert local_day(evening_in_new_york) == date(2024, 1, 18)
    assert local_day(evening_in_new_york, tz.gettz("America/New_York")) == date(2024, 1, 17)


def test_local_day_keeps_date_only_values_as_written() -> None:
    new_york = tz.gettz("America/New_York")

    assert local_day("2024-01-17", new_york) == date(2024, 1, 17)
    assert local_day(date(2024, 1, 17), new_york) == date(2024, 1, 17)
    assert local_day("garbage", new_york) is None
