"""
Week arithmetic.

Weeks start on Monday. All helpers keep the tzinfo of their argument; naive
datetimes are treated as system local time.
"""

import os
import datetime
import zoneinfo

from bussched.const import DAYS_PER_WEEK, HEADER_DATE_FORMAT
from bussched.model import Weekday


def iso_weekday(dt: datetime.datetime) -> Weekday:
    """
    ISO weekday of a datetime (Monday = 1, Sunday = 7).
    """

    return Weekday(dt.isoweekday())


def start_of_week(dt: datetime.datetime) -> datetime.datetime:
    """
    Monday 00:00 of the week `dt` falls in.
    """

    monday = dt - datetime.timedelta(days=dt.isoweekday() - 1)
    return monday.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_week(dt: datetime.datetime) -> datetime.datetime:
    """
    Last instant of the Sunday of the week `dt` falls in.
    """

    sunday = start_of_week(dt) + datetime.timedelta(days=DAYS_PER_WEEK - 1)
    return sunday.replace(hour=23, minute=59, second=59, microsecond=999999)


def shift_weeks(dt: datetime.datetime, weeks: int) -> datetime.datetime:
    return dt + datetime.timedelta(weeks=weeks)


def week_header(dt: datetime.datetime) -> str:
    """
    Header text for the week `dt` falls in, e.g. "01.05.2023 - 07.05.2023".
    """

    monday = start_of_week(dt).strftime(HEADER_DATE_FORMAT)
    sunday = end_of_week(dt).strftime(HEADER_DATE_FORMAT)

    return f"{monday} - {sunday}"


def to_api_timestamp(dt: datetime.datetime) -> str:
    """
    Format an instant the way the API expects it: UTC with millisecond
    precision and a trailing "Z" (e.g. "2023-04-30T22:00:00.000Z").
    """

    utc = dt.astimezone(datetime.timezone.utc)
    millis = utc.microsecond // 1000

    return utc.strftime("%Y-%m-%dT%H:%M:%S") + f".{millis:03d}Z"


def api_week_timestamp(dt: datetime.datetime) -> str:
    """
    The `date` query value of a schedule request: Monday 00:00 of `dt`'s week.
    """

    return to_api_timestamp(start_of_week(dt))


def add_hours(dt: datetime.datetime, hours: int) -> datetime.datetime:
    """
    Add elapsed hours to a datetime.

    Aware datetimes are shifted in UTC and converted back, so a DST change
    inside the interval moves the wall clock rather than the duration.
    """

    delta = datetime.timedelta(hours=hours)

    if dt.tzinfo is None:
        return dt + delta

    utc = dt.astimezone(datetime.timezone.utc) + delta
    return utc.astimezone(dt.tzinfo)


LOCALTIME_PATH = "/etc/localtime"


def local_zone() -> datetime.tzinfo | None:
    """
    The system local zone as a tzinfo that knows its DST rules.

    Looks at $TZ, then /etc/localtime; when neither names a zone the
    current fixed UTC offset is used.
    """

    key = os.environ.get("TZ")
    if key is not None:
        try:
            return zoneinfo.ZoneInfo(key.lstrip(":"))
        except (zoneinfo.ZoneInfoNotFoundError, ValueError):
            return _current_offset()

    try:
        with open(LOCALTIME_PATH, "rb") as tzfile:
            return zoneinfo.ZoneInfo.from_file(tzfile, key="localtime")
    except (OSError, ValueError):
        return _current_offset()


def _current_offset() -> datetime.tzinfo | None:
    return datetime.datetime.now().astimezone().tzinfo
