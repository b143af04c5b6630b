"""
Render grid placements into an HTML page.

Assumes the page has the following layout:

```html
<body>
    <div id="loading-indicator" class="loading hidden">Loading...</div>
    <header>
        <select id="driver-dropdown">...</select>
        <button id="previous-button">...</button>
        <span id="selected-week">01.05.2023 - 07.05.2023</span>
        <button id="next-button">...</button>
    </header>
    <div id="table" class="table">
        <!-- one card per placement -->
        <div id="trips" class="trips">...</div>
    </div>
    <form id="trip-form">...</form>
</body>
```
"""

from typing import Sequence

import lxml.html
from lxml.html import builder as E

from bussched.const import CARD_DATE_FORMAT, DAYS_PER_WEEK, HOURS_PER_DAY
from bussched.model import City, Driver, EntityId, Grid, GridPlacement

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

HIDDEN_CLASS = "hidden"


def card_style(placement: GridPlacement) -> str:
    """
    Inline CSS grid placement of a card; grid lines start at 1, hours at 0.
    """

    row = placement.start_hour + 1

    return (
        f"grid-row: {row} / span {placement.span_hours};"
        f" grid-column: {placement.weekday} / span 1;"
    )


def trip_card(placement: GridPlacement) -> lxml.html.HtmlElement:
    """
    A trip card: date and total duration in the title, then the route.
    """

    return E.DIV(
        E.CLASS("trip"),
        E.DIV(
            E.CLASS("trip-title"),
            E.DIV(placement.date.strftime(CARD_DATE_FORMAT)),
            E.DIV(f"{placement.total_duration_hours}h"),
        ),
        E.DIV(
            E.CLASS("trip-locations"),
            E.DIV(f"{placement.departure_name} -> {placement.destination_name}"),
        ),
        style=card_style(placement),
    )


def trip_cards(grid: Grid) -> list[lxml.html.HtmlElement]:
    return [trip_card(placement) for day in sorted(grid) for placement in grid[day]]


def _option(value: EntityId | str, text: str) -> lxml.html.HtmlElement:
    return E.OPTION(text, value=str(value))


def _city_select(name: str) -> lxml.html.HtmlElement:
    return E.SELECT(
        _option("", "Select city"), id=f"{name}-dropdown", name=name
    )


class HtmlSurface:  # pylint: disable=too-many-instance-attributes
    """
    Display surface backed by an lxml HTML tree.
    """

    root: lxml.html.HtmlElement

    loading_indicator: lxml.html.HtmlElement
    selected_week: lxml.html.HtmlElement
    driver_dropdown: lxml.html.HtmlElement
    previous_button: lxml.html.HtmlElement
    next_button: lxml.html.HtmlElement
    trips: lxml.html.HtmlElement
    departure_dropdown: lxml.html.HtmlElement
    destination_dropdown: lxml.html.HtmlElement

    def __init__(self, title: str = "Bus schedule") -> None:
        self.loading_indicator = E.DIV(
            "Loading...", E.CLASS(f"loading {HIDDEN_CLASS}"), id="loading-indicator"
        )
        self.selected_week = E.SPAN(id="selected-week")
        self.driver_dropdown = E.SELECT(
            _option("", "Select driver"), id="driver-dropdown"
        )
        self.previous_button = E.BUTTON("Previous", id="previous-button")
        self.next_button = E.BUTTON("Next", id="next-button")
        self.trips = E.DIV(E.CLASS("trips"), id="trips")
        self.departure_dropdown = _city_select("departure")
        self.destination_dropdown = _city_select("destination")

        day_headers = [E.DIV(name, E.CLASS("weekday")) for name in WEEKDAY_NAMES]
        hour_labels = [
            E.DIV(f"{hour:02d}:00", E.CLASS("hour")) for hour in range(HOURS_PER_DAY)
        ]

        form = E.FORM(
            self.departure_dropdown,
            self.destination_dropdown,
            E.INPUT(type="datetime-local", name="date"),
            E.INPUT(type="number", name="duration", min="1"),
            E.BUTTON("Add trip", type="submit"),
            id="trip-form",
        )

        self.root = E.HTML(
            E.HEAD(E.META(charset="utf-8"), E.TITLE(title)),
            E.BODY(
                self.loading_indicator,
                E.HEADER(
                    self.driver_dropdown,
                    self.previous_button,
                    self.selected_week,
                    self.next_button,
                ),
                E.DIV(E.CLASS("weekdays"), *day_headers),
                E.DIV(E.CLASS("hours"), *hour_labels),
                E.DIV(
                    E.CLASS("table"),
                    self.trips,
                    id="table",
                    style=(
                        f"display: grid;"
                        f" grid-template-columns: repeat({DAYS_PER_WEEK}, 1fr);"
                        f" grid-template-rows: repeat({HOURS_PER_DAY}, 1fr);"
                    ),
                ),
                form,
            ),
        )

    def show_loading(self) -> None:
        self.loading_indicator.classes.discard(HIDDEN_CLASS)

    def hide_loading(self) -> None:
        self.loading_indicator.classes.add(HIDDEN_CLASS)

    def _controls(self) -> list[lxml.html.HtmlElement]:
        return [self.previous_button, self.next_button, self.driver_dropdown]

    def lock_controls(self) -> None:
        for control in self._controls():
            control.set("disabled", "disabled")

    def unlock_controls(self) -> None:
        for control in self._controls():
            control.attrib.pop("disabled", None)

    def show_week(self, header: str) -> None:
        self.selected_week.text = header

    def show_drivers(self, drivers: Sequence[Driver]) -> None:
        for driver in drivers:
            self.driver_dropdown.append(_option(driver.id, driver.name))

    def show_cities(self, cities: Sequence[City]) -> None:
        for dropdown in (self.departure_dropdown, self.destination_dropdown):
            for city in cities:
                dropdown.append(_option(city.id, city.name))

    def select_driver(self, driver_id: EntityId) -> None:
        for option in self.driver_dropdown.iterchildren("option"):
            if option.get("value") == str(driver_id):
                option.set("selected", "selected")
            else:
                option.attrib.pop("selected", None)

    def render(self, grid: Grid) -> None:
        """
        Replace every card with the cards of `grid`.
        """

        del self.trips[:]
        self.trips.extend(trip_cards(grid))

    def to_html(self, pretty: bool = False) -> str:
        return lxml.html.tostring(
            self.root,
            doctype="<!DOCTYPE html>",
            pretty_print=pretty,
            encoding="unicode",
        )
