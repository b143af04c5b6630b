"""Tests for the HTML rendering adapter."""

import datetime

import lxml.html

from bussched.grid import build
from bussched.model import City, Driver, GridPlacement, TripRecord, Weekday
from bussched.render import HtmlSurface, card_style, trip_card


def placement(weekday=1, start_hour=22, span_hours=5, total=5):
    return GridPlacement(
        weekday=Weekday(weekday),
        start_hour=start_hour,
        span_hours=span_hours,
        total_duration_hours=total,
        date=datetime.datetime(2023, 5, 1, start_hour),
        departure_name="Zagreb",
        destination_name="Split",
    )


def test_card_style():
    assert (
        card_style(placement())
        == "grid-row: 23 / span 5; grid-column: 1 / span 1;"
    )


def test_card_style_for_overflow_card():
    style = card_style(placement(weekday=2, start_hour=0, span_hours=3))

    assert style == "grid-row: 1 / span 3; grid-column: 2 / span 1;"


def test_trip_card_content():
    card = trip_card(placement())

    assert card.get("class") == "trip"
    title = card.find_class("trip-title")[0]
    assert [div.text for div in title] == ["01.05.2023.", "5h"]
    locations = card.find_class("trip-locations")[0]
    assert locations.text_content() == "Zagreb -> Split"


def test_overflow_card_shows_total_duration():
    card = trip_card(placement(weekday=2, start_hour=0, span_hours=3, total=5))

    assert card.find_class("trip-title")[0][1].text == "5h"


def test_render_replaces_cards():
    surface = HtmlSurface()
    monday = datetime.datetime(2023, 5, 1, 22)

    surface.render(build([TripRecord(monday, 5, "Zagreb", "Split")]))
    assert len(surface.trips) == 2

    surface.render({})
    assert len(surface.trips) == 0
    assert surface.trips.get("id") == "trips"


def test_render_orders_cards_by_weekday():
    surface = HtmlSurface()
    surface.render(
        {
            Weekday(3): [placement(weekday=3, start_hour=9, span_hours=2, total=2)],
            Weekday(1): [placement()],
        }
    )

    columns = [card.get("style").split("grid-column: ")[1] for card in surface.trips]
    assert columns == ["1 / span 1;", "3 / span 1;"]


def test_loading_indicator():
    surface = HtmlSurface()
    assert "hidden" in surface.loading_indicator.classes

    surface.show_loading()
    assert "hidden" not in surface.loading_indicator.classes

    surface.hide_loading()
    assert "hidden" in surface.loading_indicator.classes


def test_lock_and_unlock_controls():
    surface = HtmlSurface()

    surface.lock_controls()
    assert surface.previous_button.get("disabled") == "disabled"
    assert surface.next_button.get("disabled") == "disabled"
    assert surface.driver_dropdown.get("disabled") == "disabled"

    surface.unlock_controls()
    assert surface.previous_button.get("disabled") is None
    assert surface.driver_dropdown.get("disabled") is None


def test_dropdowns():
    surface = HtmlSurface()
    surface.show_drivers([Driver(1, "Ana"), Driver(2, "Ivo")])
    surface.show_cities([City(5, "Zagreb")])

    options = [(o.get("value"), o.text) for o in surface.driver_dropdown]
    assert options == [("", "Select driver"), ("1", "Ana"), ("2", "Ivo")]
    assert [o.text for o in surface.departure_dropdown][1:] == ["Zagreb"]
    assert [o.text for o in surface.destination_dropdown][1:] == ["Zagreb"]

    surface.select_driver(2)
    selected = [o.text for o in surface.driver_dropdown if o.get("selected")]
    assert selected == ["Ivo"]


def test_to_html():
    surface = HtmlSurface()
    surface.show_week("01.05.2023 - 07.05.2023")
    surface.render({Weekday(1): [placement()]})

    html = surface.to_html()
    assert html.startswith("<!DOCTYPE html>")

    doc = lxml.html.fromstring(html)
    assert doc.get_element_by_id("selected-week").text == "01.05.2023 - 07.05.2023"
    (card,) = doc.get_element_by_id("trips")
    assert card.get("style") == "grid-row: 23 / span 5; grid-column: 1 / span 1;"
