# tests/test_time.py

import pytest
from datetime import date, datetime, timedelta

from tibcal.core.errors import AlgorithmInvariantError
from tibcal.core.time import add_days, day_difference, strip_time, sub_days


def test_modern_dates_are_plain_arithmetic():
    assert add_days(date(2000, 1, 1), 31) == date(2000, 2, 1)
    assert sub_days(date(2000, 3, 1), 1) == date(2000, 2, 29)
    assert add_days(date(1950, 12, 31), 0) == date(1950, 12, 31)


def test_forward_reform_jump():
    assert add_days(date(1582, 10, 4), 1) == date(1582, 10, 15)
    assert add_days(date(1582, 10, 3), 1) == date(1582, 10, 4)


def test_backward_reform_jump():
    assert sub_days(date(1582, 10, 16), 2) == date(1582, 10, 4)
    # the threshold itself is excluded on both sides
    assert sub_days(date(1582, 10, 15), 1) == date(1582, 10, 14)


def test_julian_leap_day_is_second_feb_28():
    assert add_days(date(1500, 2, 28), 1) == date(1500, 2, 28)
    assert add_days(date(1500, 2, 28), 2) == date(1500, 3, 1)
    assert sub_days(date(1500, 3, 1), 2) == date(1500, 2, 28)


def test_only_first_threshold_applies():
    # crosses both 1400-03-01 and 1500-03-01; one compensation only
    d = date(1400, 2, 1)
    assert add_days(d, 36600) == d + timedelta(days=36599)


def test_negative_shift_rejected():
    with pytest.raises(ValueError):
        add_days(date(2000, 1, 1), -1)
    with pytest.raises(ValueError):
        sub_days(date(2000, 1, 1), -1)


def test_strip_time():
    assert strip_time(datetime(2024, 2, 10, 23, 59)) == date(2024, 2, 10)
    assert strip_time(date(2024, 2, 10)) == date(2024, 2, 10)


def test_day_difference():
    assert day_difference(date(2024, 2, 10), date(2024, 2, 10)) == 0
    assert day_difference(date(2024, 2, 10), date(2024, 3, 1)) == 20
    assert day_difference(date(2024, 3, 1), date(2024, 2, 10)) == 20
    # ten labels vanish at the reform
    assert day_difference(date(1582, 9, 17), date(1582, 10, 25)) == 28


def test_day_difference_limit():
    with pytest.raises(AlgorithmInvariantError):
        day_difference(date(2000, 1, 1), date(2001, 1, 1), limit=100)
