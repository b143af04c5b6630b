"""
Trip creation.
"""

from bussched.types import ApiContext
from bussched.model import TripForm
from bussched.week import to_api_timestamp

from bussched.api.request import post_json

TRIP_PATH = "/trip"


def create_trip(ctx: ApiContext, form: TripForm) -> None:
    """
    Submit a new trip.
    """

    body = {
        "driverId": form.driver_id,
        "departure": form.departure,
        "destination": form.destination,
        "date": to_api_timestamp(form.date),
        "duration": form.duration,
    }

    post_json(ctx, TRIP_PATH, body)
    ctx.logger.info(
        "created %dh trip for driver %s at %s",
        form.duration,
        form.driver_id,
        body["date"],
    )
