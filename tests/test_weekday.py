# tests/test_weekday.py

import pytest

from tibcal.core.errors import AlgorithmInvariantError
from tibcal.engines.roots import WEEKDAY_RADIX, month_roots
from tibcal.engines.weekday import (
    EquationBranch,
    borrow_digitwise,
    carry_once,
    corrected_weekday,
    normalize_negative,
    radix_add,
    reckon_day,
    sun_anomaly,
    sun_equation,
    tdivmod,
)

EPOCH_WEEKDAYS = [
    1, 1, 2, 3, 4, 5, 6, 0, 1, 2, 3, 4, 5, 6, 0,
    2, 3, 4, 5, 6, 0, 1, 2, 3, 4, 4, 5, 6, 0, 1,
]


def test_tdivmod_truncates_toward_zero():
    assert tdivmod(7, 3) == (2, 1)
    assert tdivmod(-7, 3) == (-2, -1)
    assert tdivmod(-6, 3) == (-2, 0)
    assert divmod(-7, 3) == (-3, 2)


def test_radix_add_wraps_top_digit():
    assert radix_add((6, 59), (0, 2), (7, 60)) == (0, 1)
    assert radix_add((1, 2, 3, 4, 5), (0, 0, 0, 0, 0), WEEKDAY_RADIX) == (1, 2, 3, 4, 5)


def test_carry_once():
    assert carry_once([6, 61, 60], (7, 60, 60)) == [0, 2, 0]
    assert carry_once([1, 2, 3], (7, 60, 60)) == [1, 2, 3]


def test_borrow_digitwise_and_normalize():
    assert borrow_digitwise([3, -2, 10], [False, True, False], (7, 60, 60)) == [2, 58, 10]
    assert normalize_negative((1, -1, 5), (7, 60, 60)) == (0, 59, 5)
    assert normalize_negative((0, 0, -1), (7, 60, 60)) == (6, 59, 59)


def test_sun_anomaly_can_be_slightly_negative():
    assert sun_anomaly((6, 10, 0, 0, 0)) == (-1, 25)
    assert sun_anomaly((5, 50, 0, 0, 0)) == (26, 5)
    assert sun_anomaly((20, 45, 0, 0, 0)) == (14, 0)


def test_epoch_month_weekdays():
    roots = month_roots(0)
    assert [corrected_weekday(d, roots) for d in range(1, 31)] == EPOCH_WEEKDAYS


def test_last_day_of_previous_month():
    assert corrected_weekday(30, month_roots(-1)) == 0


@pytest.mark.parametrize("zladag", [-11134, -4261, -1, 0, 753, 3708])
def test_weekday_in_range(zladag):
    roots = month_roots(zladag)
    for d in range(1, 31):
        assert 0 <= corrected_weekday(d, roots) <= 6


def test_reckon_day_matches_corrected_weekday():
    roots = month_roots(0)
    for d in range(1, 31):
        rk = reckon_day(d, roots)
        assert rk.day == d
        assert rk.corrected_weekday == EPOCH_WEEKDAYS[d - 1]
        assert rk.moon_branch in (EquationBranch.ADD, EquationBranch.SUBTRACT)
        assert len(rk.weekday) == 6
        assert 0 <= rk.sun[0] < 27
        assert all(x >= 0 for x in rk.weekday)


def test_sun_equation_remainder_must_vanish():
    # a last digit of 1/67 cannot be re-expressed in 135ths
    with pytest.raises(AlgorithmInvariantError):
        sun_equation((10, 0, 0, 0, 1))

