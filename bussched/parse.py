"""
Parse API payloads and form values into domain records.
"""

from typing import Any
import re
import datetime

from bussched.error import ValidationError
from bussched.model import City, Driver, EntityId, TripForm, TripRecord
from bussched.api.types import RawEntity, RawTrip
from bussched.week import local_zone

NUMERIC_ID_RE = re.compile(r"^[0-9]+$")


def entity_id(value: Any) -> EntityId:
    """
    Normalize a driver/city id; all-digit strings become integers.
    """

    if isinstance(value, bool) or value is None:
        raise ValidationError(f"invalid id: {value!r}")

    if isinstance(value, int):
        return value

    text = str(value).strip()
    if len(text) == 0:
        raise ValidationError("id is missing")

    if NUMERIC_ID_RE.match(text) is not None:
        return int(text)

    return text


def parse_timestamp(
    value: str | datetime.datetime, tz: datetime.tzinfo | None = None
) -> datetime.datetime:
    """
    Parse an ISO 8601 timestamp ("Z" suffix allowed). Aware results are
    converted to `tz` (None = system local zone); naive ones are kept as-is.
    """

    if isinstance(value, datetime.datetime):
        stamp = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"

        try:
            stamp = datetime.datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"invalid timestamp: {value!r}") from None
    else:
        raise ValidationError(f"invalid timestamp: {value!r}")

    if stamp.tzinfo is None:
        return stamp

    return stamp.astimezone(tz if tz is not None else local_zone())


def _driver(raw: RawEntity) -> Driver:
    return Driver(raw.id, raw.name)


def _city(raw: RawEntity) -> City:
    return City(raw.id, raw.name)


def parse_drivers(raw: list[RawEntity]) -> list[Driver]:
    return list(map(_driver, raw))


def parse_cities(raw: list[RawEntity]) -> list[City]:
    return list(map(_city, raw))


def parse_trip(raw: RawTrip, tz: datetime.tzinfo | None = None) -> TripRecord:
    """
    Convert a raw schedule entry into a TripRecord in the display zone.
    """

    departure_time = parse_timestamp(raw.departure_time, tz)

    if isinstance(raw.duration, bool) or not isinstance(raw.duration, int):
        raise ValidationError(f"invalid trip duration: {raw.duration!r}")
    if raw.duration < 0:
        raise ValidationError(f"negative trip duration: {raw.duration}")

    return TripRecord(
        departure_time=departure_time,
        duration_hours=raw.duration,
        departure_name=raw.departure.name,
        destination_name=raw.destination.name,
    )


def parse_trip_form(  # pylint: disable=too-many-arguments
    driver_id: Any,
    departure: Any,
    destination: Any,
    date: str | datetime.datetime | None,
    duration: Any,
) -> TripForm:
    """
    Validate the new trip form.
    """

    if driver_id is None:
        raise ValidationError("no driver selected")
    if departure is None:
        raise ValidationError("departure city is missing")
    if destination is None:
        raise ValidationError("destination city is missing")
    if date is None:
        raise ValidationError("trip date is missing")
    if duration is None:
        raise ValidationError("trip duration is missing")

    if isinstance(duration, str):
        text = duration.strip()
        if NUMERIC_ID_RE.match(text) is None:
            raise ValidationError(f"trip duration must be whole hours: {duration!r}")
        duration = int(text)

    if isinstance(duration, bool) or not isinstance(duration, int):
        raise ValidationError(f"trip duration must be whole hours: {duration!r}")
    if duration < 1:
        raise ValidationError(f"trip duration must be at least 1 hour: {duration}")

    return TripForm(
        driver_id=entity_id(driver_id),
        departure=entity_id(departure),
        destination=entity_id(destination),
        date=parse_timestamp(date),
        duration=duration,
    )
