"""Pay-period (fortnight) derivation.

The calendar is split into two pay periods: fortnight 1 covers days 15-29 of
a month, fortnight 2 covers everything else (the 30th/31st and days 1-14 of
the following month).
"""

import calendar
from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

FIRST_FORTNIGHT_START = 15
FIRST_FORTNIGHT_END = 29
DAYS_PER_FORTNIGHT = 15


def current_fortnight(day: Optional[date] = None) -> int:
    """Return 1 or 2 for the pay period containing ``day`` (default today)."""
    if day is None:
        day = date.today()
    return 1 if FIRST_FORTNIGHT_START <= day.day <= FIRST_FORTNIGHT_END else 2


def fortnight_bounds(day: Optional[date] = None) -> tuple[date, date]:
    """Return the first and last date of the pay period containing ``day``.

    Months without a 30th day start fortnight 2 on the 1st of the next month.
    """
    if day is None:
        day = date.today()

    if current_fortnight(day) == 1:
        return day.replace(day=FIRST_FORTNIGHT_START), day.replace(day=FIRST_FORTNIGHT_END)

    if day.day > FIRST_FORTNIGHT_END:
        start = day.replace(day=FIRST_FORTNIGHT_END + 1)
        end = (day + relativedelta(months=1)).replace(day=FIRST_FORTNIGHT_START - 1)
        return start, end

    previous = day - relativedelta(months=1)
    days_in_previous = calendar.monthrange(previous.year, previous.month)[1]
    if days_in_previous > FIRST_FORTNIGHT_END:
        start = previous.replace(day=FIRST_FORTNIGHT_END + 1)
    else:
        start = day.replace(day=1)
    return start, day.replace(day=FIRST_FORTNIGHT_START - 1)


def previous_fortnight_bounds(day: Optional[date] = None) -> tuple[date, date]:
    """Return the bounds of the pay period before the one containing ``day``."""
    start, _ = fortnight_bounds(day)
    return fortnight_bounds(start - timedelta(days=1))


def fortnights_until(due_date: date, today: Optional[date] = None) -> int:
    """Number of (15-day) pay periods left before ``due_date``; 0 once due."""
    if today is None:
        today = date.today()
    days_left = (due_date - today).days
    if days_left <= 0:
        return 0
    return -(-days_left // DAYS_PER_FORTNIGHT)
