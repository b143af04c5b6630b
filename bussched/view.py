"""
View state and the controller driving a display surface.

The controller owns the selected driver and week. Every schedule fetch is
tagged with the driver and week it was issued for; a response that no
longer matches the latest request is dropped instead of being rendered.
"""

from typing import Protocol, Sequence
import datetime
import dataclasses
import concurrent.futures

import serde

from bussched.api.listings import fetch_cities, fetch_drivers
from bussched.api.schedule import fetch_schedule
from bussched.error import ValidationError
from bussched.grid import build
from bussched.model import City, Driver, EntityId, Grid
from bussched.types import ApiContext
from bussched.week import shift_weeks, start_of_week, week_header


@serde.serde
class ViewState:
    """
    The selected week (any instant inside it) and the selected driver.
    """

    reference_date: datetime.datetime
    driver_id: EntityId | None = None

    @property
    def week_start(self) -> datetime.datetime:
        return start_of_week(self.reference_date)


@dataclasses.dataclass(frozen=True)
class ScheduleRequest:
    """
    Tag of an issued schedule fetch.
    """

    driver_id: EntityId
    week_start: datetime.datetime
    serial: int


class DisplaySurface(Protocol):
    """
    Whatever shows the schedule (an HTML page, a terminal, a test double).
    """

    def show_loading(self) -> None: ...

    def hide_loading(self) -> None: ...

    def lock_controls(self) -> None: ...

    def unlock_controls(self) -> None: ...

    def show_week(self, header: str) -> None: ...

    def show_drivers(self, drivers: Sequence[Driver]) -> None: ...

    def show_cities(self, cities: Sequence[City]) -> None: ...

    def select_driver(self, driver_id: EntityId) -> None: ...

    def render(self, grid: Grid) -> None: ...


class ScheduleController:
    """
    Connects the API, the grid builder and a display surface.
    """

    ctx: ApiContext
    surface: DisplaySurface
    state: ViewState

    _serial: int
    _latest: ScheduleRequest | None

    def __init__(
        self,
        ctx: ApiContext,
        surface: DisplaySurface,
        state: ViewState | None = None,
    ) -> None:
        self.ctx = ctx
        self.surface = surface
        self.state = (
            state
            if state is not None
            else ViewState(datetime.datetime.now(ctx.tz))
        )

        self._serial = 0
        self._latest = None

        self.surface.show_week(week_header(self.state.reference_date))

    def load_drivers(self) -> list[Driver]:
        """
        Fill the driver dropdown.
        """

        self.surface.show_loading()
        try:
            drivers = fetch_drivers(self.ctx)
            self.surface.show_drivers(drivers)
        finally:
            self.surface.hide_loading()

        return drivers

    def load_cities(self) -> list[City]:
        """
        Fill the departure/destination dropdowns of the trip form.
        """

        self.surface.show_loading()
        try:
            cities = fetch_cities(self.ctx)
            self.surface.show_cities(cities)
        finally:
            self.surface.hide_loading()

        return cities

    def issue(self) -> ScheduleRequest:
        """
        Tag a new schedule fetch for the current driver and week; it
        supersedes every request issued before it.
        """

        if self.state.driver_id is None:
            raise ValidationError("no driver selected")

        self._serial += 1
        request = ScheduleRequest(
            self.state.driver_id, self.state.week_start, self._serial
        )
        self._latest = request

        return request

    def is_current(self, request: ScheduleRequest) -> bool:
        return self._latest == request

    def fetch(self, request: ScheduleRequest) -> Grid:
        trips = fetch_schedule(self.ctx, request.driver_id, request.week_start)
        return build(trips)

    def deliver(self, request: ScheduleRequest, grid: Grid) -> bool:
        """
        Render a fetched grid unless a newer request was issued meanwhile.
        """

        if not self.is_current(request):
            self.ctx.logger.info(
                "discarding stale schedule for driver %s, week of %s",
                request.driver_id,
                request.week_start.date(),
            )
            return False

        self.surface.render(grid)
        return True

    def refresh(self) -> Grid | None:
        """
        Fetch and render the selected driver's week; returns None when the
        response was superseded.
        """

        request = self.issue()

        self.surface.show_loading()
        self.surface.lock_controls()
        try:
            grid = self.fetch(request)
            delivered = self.deliver(request, grid)
        finally:
            self.surface.hide_loading()
            self.surface.unlock_controls()

        return grid if delivered else None

    def refresh_async(
        self, executor: concurrent.futures.Executor
    ) -> concurrent.futures.Future[Grid]:
        """
        Like refresh, but the fetch runs on `executor`. The surface is
        unlocked by whichever request is still current when it finishes.
        """

        request = self.issue()

        self.surface.show_loading()
        self.surface.lock_controls()

        try:
            future = executor.submit(self.fetch, request)
        except BaseException:
            self.surface.hide_loading()
            self.surface.unlock_controls()
            raise

        def on_done(done: concurrent.futures.Future[Grid]) -> None:
            try:
                if not done.cancelled() and done.exception() is None:
                    self.deliver(request, done.result())
            except Exception:  # pylint: disable=broad-except
                self.ctx.logger.exception(
                    "could not render schedule for driver %s, week of %s",
                    request.driver_id,
                    request.week_start.date(),
                )
            finally:
                if self.is_current(request):
                    self.surface.hide_loading()
                    self.surface.unlock_controls()

        future.add_done_callback(on_done)

        return future

    def select_driver(self, driver_id: EntityId) -> Grid | None:
        """
        Switch to another driver and show their schedule for the selected week.
        """

        self.state = dataclasses.replace(self.state, driver_id=driver_id)
        self.surface.select_driver(driver_id)

        return self.refresh()

    def shift_week(self, weeks: int) -> Grid | None:
        """
        Move the selected week; refreshes only when a driver is selected.
        """

        reference_date = shift_weeks(self.state.reference_date, weeks)
        self.state = dataclasses.replace(self.state, reference_date=reference_date)

        self.surface.show_week(week_header(reference_date))

        if self.state.driver_id is None:
            return None

        return self.refresh()

    def previous_week(self) -> Grid | None:
        return self.shift_week(-1)

    def next_week(self) -> Grid | None:
        return self.shift_week(1)
