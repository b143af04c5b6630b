"""
Domain records.
"""

from typing import TypeAlias, NewType
import datetime

import serde


Weekday = NewType("Weekday", int)
"""
ISO weekday, 1 = Monday ... 7 = Sunday.
"""

EntityId: TypeAlias = int | str


@serde.serde
class Driver:
    """
    A bus driver.
    """

    id: EntityId
    name: str


@serde.serde
class City:
    """
    A city trips depart from or arrive at.
    """

    id: EntityId
    name: str


@serde.serde(type_check=serde.disabled)
class TripRecord:
    """
    A single scheduled bus run; field types are checked by the grid builder.
    """

    departure_time: datetime.datetime
    duration_hours: int
    departure_name: str
    destination_name: str


@serde.serde
class GridPlacement:
    """
    Position and size of one trip card on the weekly grid.

    `span_hours` is the part of the trip shown in this weekday's column;
    `total_duration_hours` is always the duration of the whole trip.
    """

    weekday: Weekday
    start_hour: int
    span_hours: int
    total_duration_hours: int
    date: datetime.datetime
    departure_name: str
    destination_name: str


Grid: TypeAlias = dict[Weekday, list[GridPlacement]]


@serde.serde
class WeekGrid:
    """
    The grid of one driver's week, as printed by `bussched schedule --json`.
    """

    driver_id: EntityId
    week: str
    days: dict[Weekday, list[GridPlacement]]


@serde.serde
class TripForm:
    """
    Values of the new trip form; `departure` and `destination` are city ids.
    """

    driver_id: EntityId
    departure: EntityId
    destination: EntityId
    date: datetime.datetime
    duration: int
