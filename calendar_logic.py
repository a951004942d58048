"""Month-grid and month-arithmetic calculations, free of UI dependencies."""

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

_GRID_ROWS = 6
_WEEKDAY_NAMES = {name.lower(): i for i, name in enumerate(calendar.day_name)}
_WEEKDAY_NAMES.update({name.lower(): i for i, name in enumerate(calendar.day_abbr)})


class CalendarRangeError(ValueError):
    """Date arithmetic left the range supported by ``datetime.date``."""


@dataclass(frozen=True)
class DayCell:
    """One cell of a month grid. Cells compare and hash by date only."""

    date: date
    day: int = field(compare=False)
    outside_month: bool = field(compare=False)
    is_today: bool = field(default=False, compare=False)


MonthGrid = list[list[DayCell]]


def as_date(value: date) -> date:
    """Return *value* as a plain date, dropping any time of day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def same_month(a: date, b: date) -> bool:
    """Return True if both dates fall in the same calendar month of the same year."""
    return (a.year, a.month) == (b.year, b.month)


def parse_weekday(value: int | str) -> int:
    """Return the weekday number (Monday=0 … Sunday=6) for an int or English name."""
    if isinstance(value, bool):
        raise ValueError(f"invalid weekday: {value!r}")
    if isinstance(value, int):
        if 0 <= value <= 6:
            return value
        raise ValueError(f"weekday out of range 0-6: {value}")
    if isinstance(value, str):
        try:
            return _WEEKDAY_NAMES[value.strip().lower()]
        except KeyError:
            raise ValueError(f"unknown weekday name: {value!r}") from None
    raise ValueError(f"invalid weekday: {value!r}")


def weekday_headers(week_starts_on: int | str = calendar.SUNDAY) -> list[str]:
    """Return the column headers, rotated so column 0 is the week start."""
    start = parse_weekday(week_starts_on)
    return DAY_ABBR[start:] + DAY_ABBR[:start]


def month_title(reference: date) -> str:
    """Return the navigation title for the month containing *reference*."""
    return f"{calendar.month_name[reference.month]} {reference.year}"


def month_grid(
    reference: date,
    today: date | None = None,
    week_starts_on: int | str = calendar.SUNDAY,
) -> MonthGrid:
    """Return the day-cell grid for the month containing *reference*.

    Rows hold 7 consecutive days, starting on *week_starts_on*. Six full rows
    are generated, then the last row is dropped if it has no day of the target
    month, so the result has 5 or 6 rows. Cells from the neighbouring months
    are flagged with ``outside_month``.

    Raises CalendarRangeError if the grid would extend past ``date.min`` or
    ``date.max``.
    """
    reference = as_date(reference)
    today = as_date(today) if today is not None else None
    start_weekday = parse_weekday(week_starts_on)

    first = reference.replace(day=1)
    offset = (first.weekday() - start_weekday) % 7
    try:
        current = first - timedelta(days=offset)
        grid: MonthGrid = []
        row: list[DayCell] = []
        while True:
            row.append(DayCell(
                date=current,
                day=current.day,
                outside_month=not same_month(current, first),
                is_today=current == today,
            ))
            if len(row) == 7:
                grid.append(row)
                if len(grid) == _GRID_ROWS:
                    break
                row = []
            # Stop before stepping past the last cell, which may be date.max
            current += timedelta(days=1)
    except OverflowError as exc:
        raise CalendarRangeError(
            f"grid for {month_title(first)} is outside the supported date range"
        ) from exc

    if all(cell.outside_month for cell in grid[-1]):
        grid.pop()
    return grid


def shift_month(reference: date, delta: int) -> date:
    """Return *reference* moved by *delta* calendar months.

    The day is clamped to the length of the target month, so Jan 31 + 1
    gives the last day of February.
    """
    reference = as_date(reference)
    index = reference.year * 12 + (reference.month - 1) + delta
    year, month0 = divmod(index, 12)
    if not date.min.year <= year <= date.max.year:
        raise CalendarRangeError(
            f"shifting {reference.isoformat()} by {delta} months leaves the supported date range"
        )
    month = month0 + 1
    day = min(reference.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def prev_month(reference: date) -> date:
    """Return *reference* moved one month earlier."""
    return shift_month(reference, -1)


def next_month(reference: date) -> date:
    """Return *reference* moved one month later."""
    return shift_month(reference, 1)


def iso_week_numbers(grid: MonthGrid) -> list[str]:
    """Return the ISO week number for each grid row.

    An ISO week is numbered by its Thursday, and every row of 7 consecutive
    days holds exactly one Thursday, whatever the week start.
    """
    weeks: list[str] = []
    for row in grid:
        thursday = next(c for c in row if c.date.weekday() == calendar.THURSDAY)
        weeks.append(str(thursday.date.isocalendar()[1]))
    return weeks


def drag_delta(dx: float, minimum_distance: float = 10) -> int:
    """Map a horizontal drag distance to a month delta.

    Dragging right shows the previous month, dragging left the next one.
    Drags shorter than *minimum_distance* are not navigation.
    """
    if abs(dx) < minimum_distance:
        return 0
    return -1 if dx > 0 else 1
