"""
Raw API payloads.
"""

import serde

from bussched.model import EntityId


@serde.serde
class RawEntity:
    """
    A `{id, name}` listing entry (driver or city).
    """

    id: EntityId
    name: str


@serde.serde
class RawDrivers:
    """
    Body of `GET /drivers`.
    """

    drivers: list[RawEntity]


@serde.serde
class RawCities:
    """
    Body of `GET /cities`.
    """

    cities: list[RawEntity]


@serde.serde
class RawPlace:
    name: str


@serde.serde
class RawTrip:
    """
    A trip as returned by `GET /schedule`; `departure_time` is an ISO 8601
    timestamp and `duration` is in hours.
    """

    departure_time: str
    duration: int
    departure: RawPlace
    destination: RawPlace


@serde.serde
class RawSchedule:
    """
    Body of `GET /schedule`.
    """

    trips: list[RawTrip]
