import calendar
from datetime import date, datetime, timedelta

import pytest

from calendar_logic import (
    CalendarRangeError,
    DayCell,
    as_date,
    drag_delta,
    iso_week_numbers,
    month_grid,
    month_title,
    next_month,
    parse_weekday,
    prev_month,
    shift_month,
    weekday_headers,
)


def _flat(grid):
    return [cell for row in grid for cell in row]


def _sample_dates():
    for year in range(1995, 2031):
        for month in range(1, 13):
            last = calendar.monthrange(year, month)[1]
            for day in (1, 15, last):
                yield date(year, month, day)


# ----------------------------------------------------------------------
# Grid shape
# ----------------------------------------------------------------------

@pytest.mark.parametrize("week_start", range(7))
def test_grid_invariants_hold_for_every_month(week_start):
    for d in _sample_dates():
        grid = month_grid(d, week_starts_on=week_start)
        assert len(grid) in (5, 6)
        assert all(len(row) == 7 for row in grid)

        cells = _flat(grid)
        assert cells[0].date.weekday() == week_start
        for prev, cur in zip(cells, cells[1:]):
            assert cur.date - prev.date == timedelta(days=1)

        in_month = [c for c in cells if not c.outside_month]
        last = calendar.monthrange(d.year, d.month)[1]
        assert [c.day for c in in_month] == list(range(1, last + 1))
        assert all((c.date.year, c.date.month) == (d.year, d.month) for c in in_month)
        for c in cells:
            assert c.day == c.date.day


def test_last_row_has_an_in_month_day():
    for d in _sample_dates():
        grid = month_grid(d)
        # A 28-day February starting on the week start fills exactly four
        # rows; only the sixth row is trimmed, so the fifth stays foreign.
        four_week_february = d.month == 2 and len([
            c for c in _flat(grid) if not c.outside_month]) == 28 \
            and grid[0][0].date.day == 1
        if four_week_february:
            assert len(grid) == 5
            assert all(c.outside_month for c in grid[-1])
        else:
            assert any(not c.outside_month for c in grid[-1])


def test_january_2021_sunday_start():
    grid = month_grid(date(2021, 1, 31), week_starts_on=calendar.SUNDAY)
    assert len(grid) == 6
    assert grid[0][0].date == date(2020, 12, 27)
    assert grid[0][0].outside_month
    assert grid[0][5].date == date(2021, 1, 1)
    assert not grid[0][5].outside_month
    assert grid[-1][0].date == date(2021, 1, 31)
    assert not grid[-1][0].outside_month
    assert grid[-1][-1].date == date(2021, 2, 6)
    assert grid[-1][-1].outside_month


def test_april_2024_drops_trailing_foreign_row():
    grid = month_grid(date(2024, 4, 10))
    assert len(grid) == 5
    assert grid[0][0].date == date(2024, 3, 31)
    assert grid[-1][-1].date == date(2024, 5, 4)


def test_month_starting_on_week_start_has_no_leading_days():
    grid = month_grid(date(2024, 4, 10), week_starts_on=calendar.MONDAY)
    assert grid[0][0].date == date(2024, 4, 1)
    assert not grid[0][0].outside_month
    assert len(grid) == 5
    assert grid[-1][-1].date == date(2024, 5, 5)


def test_four_week_february_keeps_five_rows():
    # 1 Feb 2015 is a Sunday and February 2015 has 28 days
    grid = month_grid(date(2015, 2, 1))
    assert len(grid) == 5
    assert grid[0][0].date == date(2015, 2, 1)
    assert grid[3][-1].date == date(2015, 2, 28)
    assert [c.date for c in grid[4]] == [date(2015, 3, d) for d in range(1, 8)]


def test_year_boundary_compares_year_and_month():
    grid = month_grid(date(2020, 12, 10))
    cells = _flat(grid)
    for c in cells:
        assert c.outside_month == ((c.date.year, c.date.month) != (2020, 12))
    assert len(grid) == 5
    assert grid[-1][-1].date == date(2021, 1, 2)


def test_week_start_accepts_names():
    assert month_grid(date(2021, 1, 1), week_starts_on="monday") == \
        month_grid(date(2021, 1, 1), week_starts_on=calendar.MONDAY)
    with pytest.raises(ValueError):
        month_grid(date(2021, 1, 1), week_starts_on=7)


# ----------------------------------------------------------------------
# Cells
# ----------------------------------------------------------------------

def test_today_is_flagged_once():
    grid = month_grid(date(2021, 1, 15), today=date(2021, 1, 20))
    todays = [c for c in _flat(grid) if c.is_today]
    assert [c.date for c in todays] == [date(2021, 1, 20)]


def test_today_outside_grid_flags_nothing():
    grid = month_grid(date(2021, 1, 15), today=date(2021, 6, 1))
    assert not any(c.is_today for c in _flat(grid))


def test_day_cells_compare_by_date():
    a = DayCell(date(2021, 1, 1), 1, False)
    b = DayCell(date(2021, 1, 1), 1, True, is_today=True)
    assert a == b
    assert hash(a) == hash(b)
    assert a != DayCell(date(2021, 1, 2), 2, False)


def test_day_cell_is_immutable():
    cell = DayCell(date(2021, 1, 1), 1, False)
    with pytest.raises(AttributeError):
        cell.day = 2


def test_datetime_reference_is_normalized():
    grid = month_grid(datetime(2021, 1, 15, 23, 59))
    assert grid == month_grid(date(2021, 1, 15))
    assert type(grid[0][0].date) is date


def test_build_is_idempotent_and_fresh():
    first = month_grid(date(2022, 7, 4), today=date(2022, 7, 4))
    second = month_grid(date(2022, 7, 4), today=date(2022, 7, 4))
    assert first == second
    assert first is not second
    assert first[0] is not second[0]
    first.pop()
    assert len(second) != len(first)


# ----------------------------------------------------------------------
# Range limits
# ----------------------------------------------------------------------

def test_grid_before_min_date_raises():
    # 1 Jan 0001 is a Monday, so a Sunday-first grid needs 31 Dec 0000
    with pytest.raises(CalendarRangeError):
        month_grid(date(1, 1, 5), week_starts_on=calendar.SUNDAY)
    grid = month_grid(date(1, 1, 5), week_starts_on=calendar.MONDAY)
    assert grid[0][0].date == date.min


def test_grid_after_max_date_raises():
    with pytest.raises(CalendarRangeError):
        month_grid(date(9999, 12, 1))


def test_range_error_is_a_value_error():
    assert issubclass(CalendarRangeError, ValueError)


# ----------------------------------------------------------------------
# Month arithmetic
# ----------------------------------------------------------------------

def test_shift_month_clamps_to_month_end():
    assert shift_month(date(2021, 1, 31), 1) == date(2021, 2, 28)
    assert shift_month(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert shift_month(date(2021, 3, 31), -13) == date(2020, 2, 29)
    assert shift_month(date(2021, 5, 31), 1) == date(2021, 6, 30)


def test_shift_month_crosses_years():
    assert shift_month(date(2020, 12, 15), 1) == date(2021, 1, 15)
    assert shift_month(date(2021, 1, 15), -1) == date(2020, 12, 15)
    assert shift_month(date(2021, 6, 1), 25) == date(2023, 7, 1)
    assert shift_month(date(2021, 6, 1), 0) == date(2021, 6, 1)


def test_shift_month_round_trip_stays_in_month():
    for d in _sample_dates():
        back = shift_month(shift_month(d, 1), -1)
        assert (back.year, back.month) == (d.year, d.month)


def test_shift_month_out_of_range():
    with pytest.raises(CalendarRangeError):
        shift_month(date(9999, 12, 1), 1)
    with pytest.raises(CalendarRangeError):
        shift_month(date(1, 1, 1), -1)
    assert shift_month(date(9999, 11, 30), 1) == date(9999, 12, 30)


def test_prev_and_next_month():
    assert prev_month(date(2021, 1, 10)) == date(2020, 12, 10)
    assert next_month(date(2021, 12, 10)) == date(2022, 1, 10)


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------

@pytest.mark.parametrize("value, expected", [
    (0, 0), (6, 6), ("Sunday", 6), ("mon", 0), (" FRI ", 4), ("wednesday", 2),
])
def test_parse_weekday(value, expected):
    assert parse_weekday(value) == expected


@pytest.mark.parametrize("value", [7, -1, "funday", "", True, None, 1.5])
def test_parse_weekday_rejects(value):
    with pytest.raises(ValueError):
        parse_weekday(value)


def test_weekday_headers():
    assert weekday_headers() == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert weekday_headers(calendar.MONDAY) == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert weekday_headers("saturday")[0] == "Sat"


def test_month_title():
    assert month_title(date(2021, 1, 31)) == "January 2021"
    assert month_title(date(1999, 12, 1)) == "December 1999"


def test_iso_week_numbers():
    grid = month_grid(date(2021, 1, 1), week_starts_on=calendar.MONDAY)
    assert iso_week_numbers(grid) == ["53", "1", "2", "3", "4"]


def test_iso_week_numbers_sunday_start():
    grid = month_grid(date(2021, 1, 15), week_starts_on=calendar.SUNDAY)
    assert iso_week_numbers(grid) == ["53", "1", "2", "3", "4", "5"]


@pytest.mark.parametrize("week_start", range(7))
def test_iso_week_numbers_follow_each_rows_thursday(week_start):
    for d in _sample_dates():
        grid = month_grid(d, week_starts_on=week_start)
        weeks = iso_week_numbers(grid)
        assert len(set(weeks)) == len(weeks)
        for row, week in zip(grid, weeks):
            thursday = next(c.date for c in row if c.date.weekday() == calendar.THURSDAY)
            assert week == str(thursday.isocalendar()[1])


def test_iso_week_numbers_for_foreign_row():
    grid = month_grid(date(2015, 2, 1), week_starts_on=calendar.SUNDAY)
    weeks = iso_week_numbers(grid)
    assert len(weeks) == len(grid)
    # Sun 1 Mar .. Sat 7 Mar 2015: its Thursday, 5 March, is in ISO week 10
    assert weeks[-1] == "10"


@pytest.mark.parametrize("dx, expected", [
    (0, 0), (9, 0), (-9.5, 0), (10, -1), (-10, 1), (120, -1), (-300, 1),
])
def test_drag_delta(dx, expected):
    assert drag_delta(dx) == expected


def test_drag_delta_custom_distance():
    assert drag_delta(25, minimum_distance=30) == 0
    assert drag_delta(-30, minimum_distance=30) == 1


def test_as_date_drops_time_of_day():
    assert as_date(datetime(2021, 1, 20, 10, 30)) == date(2021, 1, 20)
    assert type(as_date(datetime(2021, 1, 20, 10, 30))) is date
    assert as_date(date(2021, 1, 20)) == date(2021, 1, 20)
