"""
Turn a week of trips into grid placements.
"""

from typing import Iterable
import logging
import datetime

from bussched.error import ValidationError
from bussched.model import Grid, GridPlacement, TripRecord, Weekday
from bussched.week import add_hours, iso_weekday

logger = logging.getLogger(__name__)


def _check_trip(idx: int, trip: TripRecord) -> None:
    if not isinstance(trip, TripRecord):
        raise ValidationError(
            f"trip {idx}: expected a TripRecord, got {type(trip).__name__}"
        )

    if not isinstance(trip.departure_time, datetime.datetime):
        raise ValidationError(
            f"trip {idx}: departure_time must be a datetime,"
            f" got {trip.departure_time!r}"
        )

    duration = trip.duration_hours
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise ValidationError(
            f"trip {idx}: duration_hours must be an integer, got {duration!r}"
        )
    if duration < 0:
        raise ValidationError(
            f"trip {idx}: duration_hours must not be negative, got {duration}"
        )

    for field in ("departure_name", "destination_name"):
        value = getattr(trip, field)
        if not isinstance(value, str) or len(value.strip()) == 0:
            raise ValidationError(f"trip {idx}: {field} is missing")


class ScheduleGridBuilder:
    """
    Utility class for bucketing trips into weekday columns.
    """

    placements: dict[Weekday, list[GridPlacement]]

    _count: int

    def __init__(self) -> None:
        self.placements = {}
        self._count = 0

    def finish(self) -> Grid:
        """
        Finish building; weekdays are ordered Monday to Sunday and days
        without trips are left out.
        """

        return {day: list(self.placements[day]) for day in sorted(self.placements)}

    def _place(self, placement: GridPlacement) -> None:
        self.placements.setdefault(placement.weekday, []).append(placement)

    def add_trip(self, trip: TripRecord) -> None:
        """
        Place a trip on its departure day; a trip running past midnight also
        gets a card starting at 00:00 on the day it ends.
        """

        idx = self._count
        _check_trip(idx, trip)
        self._count += 1

        start = trip.departure_time
        duration = trip.duration_hours

        start_day = iso_weekday(start)

        end = add_hours(start, duration)
        end_day = iso_weekday(end)

        if end_day != start_day:
            overflow = end.hour

            if overflow > 0:
                self._place(
                    GridPlacement(
                        weekday=end_day,
                        start_hour=0,
                        span_hours=overflow,
                        total_duration_hours=duration,
                        date=end,
                        departure_name=trip.departure_name,
                        destination_name=trip.destination_name,
                    )
                )
            else:
                logger.debug("trip %d ends at midnight; no overflow card", idx)

        # NOTE: the departure card spans the whole trip even when it was split
        self._place(
            GridPlacement(
                weekday=start_day,
                start_hour=start.hour,
                span_hours=duration,
                total_duration_hours=duration,
                date=start,
                departure_name=trip.departure_name,
                destination_name=trip.destination_name,
            )
        )


def build(trips: Iterable[TripRecord]) -> Grid:
    """
    Bucket a week of trips into per-weekday grid placements.
    """

    builder = ScheduleGridBuilder()

    for trip in trips:
        builder.add_trip(trip)

    return builder.finish()
