"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from payledger.domain.errors import ValidationError
from payledger.utils.fortnight import fortnight_bounds, previous_fortnight_bounds


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    words: "today", "yesterday", "tomorrow", "last/this/next month|year|week".

    Raises:
        ValidationError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)
        elif period == "fortnight":
            return previous_fortnight_bounds(today)[0]

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())
        elif period == "fortnight":
            return fortnight_bounds(today)[0]

    elif date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        elif period == "week":
            return today + timedelta(days=(7 - today.weekday()))

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValidationError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of this-fortnight, last-fortnight, this-month, last-month

    Raises:
        ValidationError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-fortnight":
        start_date, _ = fortnight_bounds(today)
        return (start_date, today)

    elif period == "last-fortnight":
        return previous_fortnight_bounds(today)

    elif period == "this-month":
        return (today.replace(day=1), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    raise ValidationError(
        f"Unknown period: '{period}'. Supported periods: "
        "this-fortnight, last-fortnight, this-month, last-month"
    )
