"""Tests for the month calendar view."""

from datetime import date
from decimal import Decimal

from vozruta.domain.entities import Section
from vozruta.domain.history import GRID_CELLS, MonthView, build_month_grid


class TestBuildMonthGrid:
    """Tests for build_month_grid."""

    def test_grid_is_monday_first_with_42_cells(self):
        # 2024-03-01 is a Friday
        grid = build_month_grid("2024-03", {})

        assert len(grid) == GRID_CELLS
        assert grid[0].date == date(2024, 2, 26)
        assert grid[0].date.weekday() == 0
        assert not grid[0].is_current_month
        assert grid[4].date == date(2024, 3, 1)
        assert grid[4].is_current_month
        assert grid[-1].date == date(2024, 4, 7)

    def test_month_starting_on_monday(self):
        grid = build_month_grid("2024-04", {})
        assert grid[0].date == date(2024, 4, 1)
        assert grid[0].day == 1

    def test_counts(self):
        grid = build_month_grid("2024-03", {date(2024, 3, 1): 3, date(2024, 2, 26): 1})
        by_date = {cell.date: cell.count for cell in grid}
        assert by_date[date(2024, 3, 1)] == 3
        assert by_date[date(2024, 2, 26)] == 1
        assert by_date[date(2024, 3, 2)] == 0

    def test_consecutive_dates(self):
        grid = build_month_grid("2024-10", {})
        for earlier, later in zip(grid, grid[1:]):
            assert (later.date - earlier.date).days == 1

    def test_current_month_cells(self):
        grid = build_month_grid("2024-02", {})
        assert sum(cell.is_current_month for cell in grid) == 29


class TestMonthView:
    """Tests for MonthView over a store."""

    def test_refresh_counts_and_selection(self, store, make_trip):
        store.add_trip(make_trip(date=date(2024, 3, 1)))
        store.add_trip(make_trip(date=date(2024, 3, 1), section=Section.RETURN))
        store.add_trip(make_trip(date=date(2024, 3, 15)))

        view = MonthView(store, month="2024-03", selected=date(2024, 3, 1))
        grid = view.refresh()

        assert view.day_counts == {date(2024, 3, 1): 2, date(2024, 3, 15): 1}
        assert sum(cell.count for cell in grid) == 3
        assert view.selected_day_count == 2
        assert len(view.trips_for(Section.RETURN)) == 1

    def test_month_navigation_moves_selection(self, store, make_trip):
        store.add_trip(make_trip(date=date(2024, 2, 1), amount=Decimal("100")))

        view = MonthView(store, month="2024-03", selected=date(2024, 3, 10))
        view.refresh()
        view.prev_month()

        assert view.month == "2024-02"
        assert view.selected_date == date(2024, 2, 1)
        assert view.selected_day_count == 1

        view.next_month()
        view.next_month()
        assert view.month == "2024-04"

    def test_view_does_not_change_active_date(self, store, make_trip):
        store.add_trip(make_trip(date=date(2024, 3, 1)))
        view = MonthView(store, month="2024-02")
        view.refresh()
        assert store.current_date.get() == date(2024, 3, 1)
