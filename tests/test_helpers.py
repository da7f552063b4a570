"""Tests for coercion and date helpers."""

from datetime import date, datetime, timezone

import pytest

from fitgenius.schemas import WorkoutLog
from fitgenius.utils.helpers import get_field, local_day, parse_datetime, round_half_up, to_number


@pytest.mark.parametrize("value, expected", [
    (None, 0.0), (True, 0.0), ("", 0.0), ("abc", 0.0), (" 3.5 ", 3.5),
    (42, 42.0), (float("nan"), 0.0), (float("inf"), 0.0), ([1], 0.0),
])
def test_to_number(value, expected):
    assert to_number(value) == expected


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


def test_parse_datetime_variants():
    assert parse_datetime("2024-03-01T09:00:00Z") == datetime(2024, 3, 1, 9, tzinfo=timezone.utc)
    assert parse_datetime(date(2024, 3, 1)) == datetime(2024, 3, 1)
    assert parse_datetime("yesterday") is None
    assert parse_datetime(None) is None


def test_local_day_of_naive_timestamp():
    assert local_day("2024-03-01T23:59:00") == date(2024, 3, 1)


def test_get_field_reads_dicts_and_objects():
    assert get_field({"a": 1}, "a") == 1
    assert get_field({"a": 1}, "b", 2) == 2
    assert get_field(date(2024, 1, 1), "year") == 2024


def test_workout_log_coerces_loose_numbers():
    log = WorkoutLog(date="2024-03-01T09:00:00", title="x", duration="45", calories="312.6", notes=None)
    assert log.duration == 45.0
    assert log.calories == 313
    assert log.notes == ""
    assert log.id
