"""Host-side picker state: the displayed month and its transitions."""

import calendar
import logging
from datetime import date
from typing import Callable

from calendar_logic import (
    CalendarRangeError,
    DayCell,
    MonthGrid,
    as_date,
    iso_week_numbers,
    month_grid,
    month_title,
    parse_weekday,
    same_month,
    shift_month,
    weekday_headers,
)

logger = logging.getLogger(__name__)


class PickerState:
    """The month a picker is displaying, rebuilt on every transition.

    The grid is never patched in place: each transition replaces it with a
    freshly built one.
    """

    def __init__(
        self,
        reference: date,
        today: date,
        week_starts_on: int | str = calendar.SUNDAY,
        on_select: Callable[[date], None] | None = None,
    ) -> None:
        self.week_starts_on = parse_weekday(week_starts_on)
        self.on_select = on_select
        self._reference = as_date(reference)
        self._today = as_date(today)
        self._grid: MonthGrid = month_grid(self._reference, self._today, self.week_starts_on)

    @property
    def reference(self) -> date:
        return self._reference

    @property
    def today(self) -> date:
        return self._today

    @property
    def grid(self) -> MonthGrid:
        return self._grid

    @property
    def title(self) -> str:
        return month_title(self._reference)

    @property
    def headers(self) -> list[str]:
        return weekday_headers(self.week_starts_on)

    @property
    def week_numbers(self) -> list[str]:
        return iso_week_numbers(self._grid)

    def _rebuild(self, reference: date) -> None:
        # Build first so a failure leaves the current month displayed.
        grid = month_grid(reference, self._today, self.week_starts_on)
        self._reference = reference
        self._grid = grid
        logger.debug("Displaying %s (%d rows)", self.title, len(grid))

    def _try_rebuild(self, reference: date, action: str) -> bool:
        try:
            self._rebuild(reference)
        except CalendarRangeError as exc:
            logger.warning("Ignoring %s: %s", action, exc)
            return False
        return True

    def shift(self, delta: int) -> bool:
        """Move the displayed month by *delta*; return False if out of range."""
        if delta == 0:
            return True
        try:
            reference = shift_month(self._reference, delta)
        except CalendarRangeError as exc:
            logger.warning("Ignoring navigation by %+d months: %s", delta, exc)
            return False
        return self._try_rebuild(reference, f"navigation by {delta:+d} months")

    def go_to_today(self) -> bool:
        return self._try_rebuild(self._today, "jump to today")

    def set_today(self, today: date) -> bool:
        """Update the date considered current, e.g. after midnight."""
        self._today = as_date(today)
        return self._try_rebuild(self._reference, "today update")

    def select(self, target: DayCell | date) -> date:
        """Make *target* the active date and report it to ``on_select``.

        The selection is reported even when its month cannot be displayed;
        the picker then stays on the current month.
        """
        selected = target.date if isinstance(target, DayCell) else as_date(target)
        if same_month(selected, self._reference):
            self._reference = selected
        else:
            self._try_rebuild(selected, f"display of {selected.isoformat()}")
        if self.on_select is not None:
            self.on_select(selected)
        return selected
