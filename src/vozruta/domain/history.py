"""Month calendar view over the trip store."""

from datetime import date, timedelta
from typing import Optional

from vozruta.domain.entities import CalendarCell, Section, Trip
from vozruta.domain.trip_store import TripStore
from vozruta.utils.date_parser import (
    DateLike,
    parse_month,
    shift_date,
    shift_month,
    to_date,
    to_month_iso,
)

GRID_CELLS = 42


def build_month_grid(month: str, counts: dict[date, int]) -> list[CalendarCell]:
    """Build a 6x7 Monday-first calendar grid for a "YYYY-MM" month.

    The grid starts on the Monday on or before the first of the month and
    always holds 42 cells, padding with days of the neighbouring months.

    Args:
        month: Month to display
        counts: Trips per day, days without trips may be missing

    Returns:
        List of 42 CalendarCell
    """
    first = parse_month(month)
    month = to_month_iso(first)
    start = first - timedelta(days=first.weekday())

    grid = []
    for offset in range(GRID_CELLS):
        cell_date = shift_date(start, offset)
        grid.append(
            CalendarCell(
                date=cell_date,
                day=cell_date.day,
                is_current_month=to_month_iso(cell_date) == month,
                count=counts.get(cell_date, 0),
            )
        )
    return grid


class MonthView:
    """Month-by-month history of the ledger.

    Keeps a displayed month and a selected day. The selected day's trips
    are read without changing the store's active date.
    """

    def __init__(self, store: TripStore, month: Optional[str] = None, selected: Optional[DateLike] = None):
        today = date.today()
        self.store = store
        self.month = to_month_iso(parse_month(month)) if month else to_month_iso(today)
        self.selected_date = to_date(selected) if selected is not None else today
        self.day_counts: dict[date, int] = {}
        self.grid: list[CalendarCell] = []
        self.selected_trips: list[Trip] = []

    def refresh(self) -> list[CalendarCell]:
        """Reload the month's day counts, rebuild the grid and load the selected day.

        When the selected day lies outside the displayed month, the first
        day of the month becomes the selected day.
        """
        self.day_counts = self.store.day_counts_for_month(self.month)
        self.grid = build_month_grid(self.month, self.day_counts)
        if to_month_iso(self.selected_date) != self.month:
            self.selected_date = parse_month(self.month)
        self.select_day(self.selected_date)
        return self.grid

    def prev_month(self) -> list[CalendarCell]:
        self.month = shift_month(self.month, -1)
        return self.refresh()

    def next_month(self) -> list[CalendarCell]:
        self.month = shift_month(self.month, 1)
        return self.refresh()

    def select_day(self, day: DateLike) -> list[Trip]:
        self.selected_date = to_date(day)
        self.selected_trips = self.store.get_trips_by_date(self.selected_date)
        return self.selected_trips

    def trips_for(self, section: Section) -> list[Trip]:
        """Selected day's trips of one section."""
        return [trip for trip in self.selected_trips if trip.section == section]

    @property
    def selected_day_count(self) -> int:
        return len(self.selected_trips)
