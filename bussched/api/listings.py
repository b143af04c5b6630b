"""
Driver and city listings.
"""

from bussched.types import ApiContext
from bussched.model import City, Driver
from bussched.parse import parse_cities, parse_drivers

from bussched.api.types import RawCities, RawDrivers
from bussched.api.request import api_url, decode, get_json

DRIVERS_PATH = "/drivers"
CITIES_PATH = "/cities"


def fetch_drivers(ctx: ApiContext) -> list[Driver]:
    """
    List all bus drivers.
    """

    payload = get_json(ctx, DRIVERS_PATH)
    raw = decode(RawDrivers, payload, api_url(ctx, DRIVERS_PATH))

    drivers = parse_drivers(raw.drivers)
    ctx.logger.info("found %d drivers", len(drivers))

    return drivers


def fetch_cities(ctx: ApiContext) -> list[City]:
    """
    List all cities.
    """

    payload = get_json(ctx, CITIES_PATH)
    raw = decode(RawCities, payload, api_url(ctx, CITIES_PATH))

    cities = parse_cities(raw.cities)
    ctx.logger.info("found %d cities", len(cities))

    return cities
