"""
Bus driver schedule viewer.
"""

from typing import Sequence
import sys
import logging
import argparse
import datetime
import zoneinfo

import serde.json
import requests

from bussched.api.listings import fetch_cities, fetch_drivers
from bussched.api.trips import create_trip
from bussched.const import API_BASE_URL, REQUEST_TIMEOUT
from bussched.error import BusSchedError, ValidationError
from bussched.model import City, EntityId, WeekGrid
from bussched.parse import entity_id, parse_timestamp, parse_trip_form
from bussched.render import HtmlSurface
from bussched.types import ApiContext
from bussched.view import ScheduleController, ViewState
from bussched.week import local_zone, week_header


def get_logger(verbose: bool) -> logging.Logger:
    """
    Setup and return a Logger.
    """

    level = logging.INFO if verbose else logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter("%(levelname)s: %(message)s")
    handler.setFormatter(formatter)
    root.addHandler(handler)

    return root


def _tz(args: argparse.Namespace) -> datetime.tzinfo | None:
    if args.tz is None:
        return local_zone()

    try:
        return zoneinfo.ZoneInfo(args.tz)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"unknown time zone: {args.tz}") from None


def get_context(args: argparse.Namespace) -> ApiContext:
    logger = get_logger(args.verbose)
    session = requests.Session()

    return ApiContext(logger, session, args.api_url, args.timeout, _tz(args))


def _write(args: argparse.Namespace, text: str) -> None:
    if args.output is not None:
        outfile = open(args.output, "w", encoding="utf-8")
    else:
        outfile = sys.stdout

    outfile.write(text)
    outfile.write("\n")

    if args.output:
        outfile.close()


def _print_entities(args: argparse.Namespace, entities: Sequence) -> None:
    if args.json:
        indent = 4 if args.pretty else None
        print(serde.json.to_json(list(entities), indent=indent))
        return

    for entity in entities:
        print(f"{entity.id}\t{entity.name}")


def drivers(args: argparse.Namespace) -> None:
    """
    drivers subcommand
    """
    ctx = get_context(args)
    _print_entities(args, fetch_drivers(ctx))


def cities(args: argparse.Namespace) -> None:
    """
    cities subcommand
    """
    ctx = get_context(args)
    _print_entities(args, fetch_cities(ctx))


def _reference_date(
    value: str | None, tz: datetime.tzinfo | None
) -> datetime.datetime:
    if value is None:
        return datetime.datetime.now(tz)

    try:
        day = datetime.date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"invalid date: {value!r}") from None

    return datetime.datetime.combine(day, datetime.time(), tzinfo=tz)


def schedule(args: argparse.Namespace) -> None:
    """
    schedule subcommand
    """
    ctx = get_context(args)
    driver_id = entity_id(args.driver)

    state = ViewState(_reference_date(args.date, ctx.tz))
    surface = HtmlSurface()
    controller = ScheduleController(ctx, surface, state)

    if not args.json:
        controller.load_drivers()
        controller.load_cities()

    controller.shift_week(args.week_offset)
    grid = controller.select_driver(driver_id)
    if grid is None:
        raise BusSchedError(f"schedule of driver {driver_id} was superseded")

    if args.json:
        week_grid = WeekGrid(
            driver_id=driver_id,
            week=week_header(controller.state.reference_date),
            days=grid,
        )
        indent = 4 if args.pretty else None
        _write(args, serde.json.to_json(week_grid, indent=indent))
    else:
        _write(args, surface.to_html(pretty=args.pretty))


def _city_id(value: str, known: list[City] | None) -> EntityId:
    """
    Resolve a city given by id or by (case-insensitive) name.
    """

    ident = entity_id(value)
    if isinstance(ident, int) or known is None:
        return ident

    for city in known:
        if city.name.casefold() == value.strip().casefold():
            return city.id

    raise ValidationError(f"unknown city: {value!r}")


def add_trip(args: argparse.Namespace) -> None:
    """
    add-trip subcommand
    """
    ctx = get_context(args)

    date = parse_timestamp(args.date, ctx.tz)
    if date.tzinfo is None:
        date = date.replace(tzinfo=ctx.tz)

    needs_lookup = not all(
        isinstance(entity_id(v), int) for v in (args.departure, args.destination)
    )
    known = fetch_cities(ctx) if needs_lookup else None

    form = parse_trip_form(
        driver_id=args.driver,
        departure=_city_id(args.departure, known),
        destination=_city_id(args.destination, known),
        date=date,
        duration=args.duration,
    )

    create_trip(ctx, form)
    print(f"added {form.duration}h trip for driver {form.driver_id}")


COMMANDS = {
    "drivers": drivers,
    "cities": cities,
    "schedule": schedule,
    "add-trip": add_trip,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bussched")
    parser.add_argument(
        "-v", "--verbose", help="enable more verbose output", action="store_true"
    )
    parser.add_argument(
        "--api-url", help="scheduling API base url", default=API_BASE_URL
    )
    parser.add_argument(
        "--timeout",
        help="request timeout in seconds",
        type=float,
        default=REQUEST_TIMEOUT,
    )
    parser.add_argument(
        "--tz", help="time zone to show trips in (default: local)", default=None
    )

    subparsers = parser.add_subparsers(dest="command")

    for name, help_text in (("drivers", "list drivers"), ("cities", "list cities")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--json", help="output json", action="store_true")
        sub.add_argument(
            "-p", "--pretty", help="pretty print output", action="store_true"
        )

    schedule_parser = subparsers.add_parser(
        "schedule", help="show a driver's weekly schedule grid"
    )
    schedule_parser.add_argument("-d", "--driver", help="driver id", required=True)
    schedule_parser.add_argument(
        "--date", help="any day of the week to show (YYYY-MM-DD)", default=None
    )
    schedule_parser.add_argument(
        "-w",
        "--week-offset",
        help="weeks to move from --date (negative goes back)",
        type=int,
        default=0,
    )
    schedule_parser.add_argument(
        "--json", help="output grid placements as json", action="store_true"
    )
    schedule_parser.add_argument("-o", "--output", help="output file", default=None)
    schedule_parser.add_argument(
        "-p", "--pretty", help="pretty print output", action="store_true"
    )

    trip_parser = subparsers.add_parser("add-trip", help="add a trip for a driver")
    trip_parser.add_argument("-d", "--driver", help="driver id", required=True)
    trip_parser.add_argument(
        "--departure", help="departure city id or name", required=True
    )
    trip_parser.add_argument(
        "--destination", help="destination city id or name", required=True
    )
    trip_parser.add_argument(
        "--date", help="departure time (ISO 8601)", required=True
    )
    trip_parser.add_argument(
        "--duration", help="duration in hours", type=int, required=True
    )

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """
    Parse arguments and run a command.
    """

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command in COMMANDS:
        print(f"error: unrecognized command: {args.command}", file=sys.stderr)
        sys.exit(1)

    try:
        COMMANDS[args.command](args)
    except BusSchedError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
