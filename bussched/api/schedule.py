"""
A driver's weekly schedule.
"""

import datetime

from bussched.types import ApiContext
from bussched.error import ApiError, ValidationError
from bussched.model import EntityId, TripRecord
from bussched.parse import parse_trip
from bussched.week import api_week_timestamp

from bussched.api.types import RawSchedule
from bussched.api.request import api_url, decode, get_json

SCHEDULE_PATH = "/schedule"


def fetch_schedule(
    ctx: ApiContext, driver_id: EntityId, date: datetime.datetime
) -> list[TripRecord]:
    """
    Fetch the trips of a driver for the week `date` falls in.
    """

    params = {"driverId": driver_id, "date": api_week_timestamp(date)}

    payload = get_json(ctx, SCHEDULE_PATH, params)
    url = api_url(ctx, SCHEDULE_PATH)

    raw = decode(RawSchedule, payload, url)

    trips = []
    for idx, raw_trip in enumerate(raw.trips):
        try:
            trips.append(parse_trip(raw_trip, ctx.tz))
        except ValidationError as exc:
            raise ApiError(f"trip {idx} from {url}: {exc}", url=url) from exc

    ctx.logger.info(
        "driver %s has %d trips in week of %s", driver_id, len(trips), params["date"]
    )

    return trips
