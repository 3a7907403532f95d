"""
tibcal.core.time
----------------
Day arithmetic on the Western dates attached to Tibetan months.

Dates are plain ``datetime.date`` values (proleptic Gregorian). Before the
1582 reform the month starts carry Julian-calendar labels, so a shift that
crosses the reform, or the end of February in a year that is a leap year only
in the Julian reckoning (1100, 1300, 1400, 1500), is nudged once.

add_days and sub_days are not inverses across those thresholds: the
thresholds differ by direction and a Julian Feb 29 is written as a second
Feb 28.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Tuple, Union

from .errors import AlgorithmInvariantError

# Dates from this year on need no compensation
MODERN_YEAR = 1900

JULIAN_ONLY_LEAP_YEARS = (1500, 1400, 1300, 1100)

REFORM_GAP = 10

# First label that does not exist in the mixed Julian/Gregorian reckoning,
# and the first Gregorian day after the reform.
FORWARD_REFORM = date(1582, 10, 5)
BACKWARD_REFORM = date(1582, 10, 15)

# (threshold, adjustment), checked in this order
FORWARD_THRESHOLDS: Tuple[Tuple[date, int], ...] = ((FORWARD_REFORM, REFORM_GAP),) + tuple(
    (date(y, 3, 1), -1) for y in JULIAN_ONLY_LEAP_YEARS
)
BACKWARD_THRESHOLDS: Tuple[Tuple[date, int], ...] = ((BACKWARD_REFORM, -REFORM_GAP),) + tuple(
    (date(y, 2, 28), 1) for y in JULIAN_ONLY_LEAP_YEARS
)

DateLike = Union[date, datetime]


def strip_time(value: DateLike) -> date:
    """Drop the time-of-day part of a datetime; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def add_days(d: date, n: int) -> date:
    """Return the date n >= 0 days after d."""
    if n < 0:
        raise ValueError("n must be non-negative")
    if d.year < MODERN_YEAR:
        target = d + timedelta(days=n)
        for threshold, adjust in FORWARD_THRESHOLDS:
            if d < threshold <= target:
                d = d + timedelta(days=adjust)
                break
    return d + timedelta(days=n)


def sub_days(d: date, n: int) -> date:
    """Return the date n >= 0 days before d."""
    if n < 0:
        raise ValueError("n must be non-negative")
    if d.year < MODERN_YEAR:
        target = d - timedelta(days=n)
        for threshold, adjust in BACKWARD_THRESHOLDS:
            if target < threshold < d:
                d = d + timedelta(days=adjust)
                break
    return d - timedelta(days=n)


def day_difference(a: date, b: date, *, limit: int = 1000) -> int:
    """
    Smallest n >= 0 such that add_days(earlier, n) >= later.

    Linear search; the table never needs more than a few dozen steps, so
    running past `limit` means the caller passed unrelated dates.
    """
    if a == b:
        return 0
    earlier, later = (a, b) if a < b else (b, a)
    n = 0
    while add_days(earlier, n) < later:
        n += 1
        if n > limit:
            raise AlgorithmInvariantError(
                f"day difference between {earlier} and {later} exceeds {limit} days"
            )
    return n
