"""Tests for week arithmetic."""

import datetime

from bussched.week import (
    add_hours,
    api_week_timestamp,
    end_of_week,
    iso_weekday,
    shift_weeks,
    start_of_week,
    to_api_timestamp,
    week_header,
)

UTC = datetime.timezone.utc
PLUS_TWO = datetime.timezone(datetime.timedelta(hours=2))


def test_start_of_week_from_wednesday():
    assert start_of_week(datetime.datetime(2023, 5, 3, 15, 30)) == datetime.datetime(
        2023, 5, 1
    )


def test_start_of_week_from_sunday_goes_back():
    assert start_of_week(datetime.datetime(2023, 5, 7, 23)) == datetime.datetime(
        2023, 5, 1
    )


def test_start_of_week_keeps_zone():
    monday = start_of_week(datetime.datetime(2023, 5, 3, 1, tzinfo=PLUS_TWO))

    assert monday == datetime.datetime(2023, 5, 1, tzinfo=PLUS_TWO)
    assert monday.tzinfo is PLUS_TWO


def test_end_of_week():
    assert end_of_week(datetime.datetime(2023, 5, 1)) == datetime.datetime(
        2023, 5, 7, 23, 59, 59, 999999
    )


def test_week_header():
    for day in range(1, 8):
        assert week_header(datetime.datetime(2023, 5, day)) == "01.05.2023 - 07.05.2023"


def test_week_header_across_years():
    assert week_header(datetime.datetime(2023, 1, 1)) == "26.12.2022 - 01.01.2023"


def test_shift_weeks():
    assert shift_weeks(datetime.datetime(2023, 5, 29), 1) == datetime.datetime(
        2023, 6, 5
    )
    assert shift_weeks(datetime.datetime(2023, 5, 3), -1) == datetime.datetime(
        2023, 4, 26
    )


def test_iso_weekday():
    assert iso_weekday(datetime.datetime(2023, 5, 1)) == 1
    assert iso_weekday(datetime.datetime(2023, 5, 7)) == 7


def test_api_week_timestamp_is_utc_monday():
    stamp = api_week_timestamp(datetime.datetime(2023, 5, 3, 12, tzinfo=UTC))

    assert stamp == "2023-05-01T00:00:00.000Z"


def test_api_week_timestamp_converts_local_midnight():
    stamp = api_week_timestamp(datetime.datetime(2023, 5, 3, 12, tzinfo=PLUS_TWO))

    assert stamp == "2023-04-30T22:00:00.000Z"


def test_to_api_timestamp_keeps_milliseconds():
    stamp = to_api_timestamp(datetime.datetime(2023, 5, 3, 8, 0, 0, 123456, tzinfo=UTC))

    assert stamp == "2023-05-03T08:00:00.123Z"


def test_add_hours_naive():
    assert add_hours(datetime.datetime(2023, 5, 31, 22), 5) == datetime.datetime(
        2023, 6, 1, 3
    )


def test_add_hours_aware_keeps_zone():
    end = add_hours(datetime.datetime(2023, 5, 1, 22, tzinfo=PLUS_TWO), 5)

    assert end.tzinfo == PLUS_TWO
    assert (end.day, end.hour) == (2, 3)
