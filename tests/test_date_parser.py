"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta

from payledger.domain.errors import ValidationError
from payledger.utils.date_parser import parse_date, get_date_range
from payledger.utils.fortnight import fortnight_bounds, previous_fortnight_bounds


def test_parse_absolute_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)


@pytest.mark.parametrize(
    "text,offset",
    [("today", 0), ("yesterday", -1), ("tomorrow", 1), ("  Today ", 0)],
)
def test_parse_relative_days(text, offset):
    assert parse_date(text) == date.today() + timedelta(days=offset)


def test_parse_last_month():
    """Should be first day of last month."""
    expected = (date.today() - relativedelta(months=1)).replace(day=1)
    assert parse_date("last month") == expected


def test_parse_week_words_are_mondays():
    today = date.today()
    assert parse_date("this week") == today - timedelta(days=today.weekday())
    assert parse_date("last week") == today - timedelta(days=today.weekday() + 7)
    assert parse_date("next week").weekday() == 0


def test_parse_years():
    today = date.today()
    assert parse_date("this year") == date(today.year, 1, 1)
    assert parse_date("last year") == date(today.year - 1, 1, 1)
    assert parse_date("next year") == date(today.year + 1, 1, 1)


def test_parse_fortnights():
    assert parse_date("this fortnight") == fortnight_bounds()[0]
    assert parse_date("last fortnight") == previous_fortnight_bounds()[0]


def test_parse_invalid_relative():
    with pytest.raises(ValidationError):
        parse_date("last invalid")


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_date("not a date at all")


def test_parse_standard_formats():
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


def test_get_date_range_this_fortnight():
    today = date.today()
    start, end = get_date_range("this-fortnight")
    assert start == fortnight_bounds(today)[0]
    assert end == today


def test_get_date_range_last_fortnight():
    start, end = get_date_range("last-fortnight")
    assert (start, end) == previous_fortnight_bounds(date.today())
    assert end < fortnight_bounds()[0]


def test_get_date_range_this_month():
    today = date.today()
    assert get_date_range("this-month") == (date(today.year, today.month, 1), today)


def test_get_date_range_last_month():
    today = date.today()
    start, end = get_date_range("last-month")
    expected_start = (today - relativedelta(months=1)).replace(day=1)
    assert start == expected_start
    assert end == today.replace(day=1) - timedelta(days=1)
    assert end.month == expected_start.month


def test_get_date_range_invalid_period():
    with pytest.raises(ValidationError, match="Unknown period"):
        get_date_range("this-decade")
