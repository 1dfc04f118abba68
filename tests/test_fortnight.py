"""Tests for pay-period derivation."""

from datetime import date

import pytest

from payledger.utils.fortnight import (
    current_fortnight,
    fortnight_bounds,
    fortnights_until,
    previous_fortnight_bounds,
)


@pytest.mark.parametrize(
    "day,expected",
    [(1, 2), (14, 2), (15, 1), (22, 1), (29, 1), (30, 2), (31, 2)],
)
def test_current_fortnight(day, expected):
    assert current_fortnight(date(2025, 3, day)) == expected


def test_current_fortnight_defaults_to_today():
    assert current_fortnight() in (1, 2)


def test_bounds_first_fortnight():
    assert fortnight_bounds(date(2025, 3, 20)) == (date(2025, 3, 15), date(2025, 3, 29))


def test_bounds_second_fortnight_end_of_month():
    assert fortnight_bounds(date(2025, 3, 30)) == (date(2025, 3, 30), date(2025, 4, 14))


def test_bounds_second_fortnight_start_of_month():
    assert fortnight_bounds(date(2025, 4, 5)) == (date(2025, 3, 30), date(2025, 4, 14))


def test_bounds_after_short_february():
    """February has no 30th, so the period starts on March 1st."""
    assert fortnight_bounds(date(2025, 3, 5)) == (date(2025, 3, 1), date(2025, 3, 14))


def test_previous_bounds():
    assert previous_fortnight_bounds(date(2025, 3, 20)) == (date(2025, 3, 1), date(2025, 3, 14))
    assert previous_fortnight_bounds(date(2025, 4, 5)) == (date(2025, 3, 15), date(2025, 3, 29))


@pytest.mark.parametrize(
    "due,expected",
    [
        (date(2024, 12, 1), 0),
        (date(2025, 1, 1), 0),
        (date(2025, 1, 2), 1),
        (date(2025, 1, 16), 1),
        (date(2025, 1, 17), 2),
        (date(2025, 1, 31), 2),
        (date(2025, 2, 1), 3),
    ],
)
def test_fortnights_until(due, expected):
    assert fortnights_until(due, date(2025, 1, 1)) == expected
