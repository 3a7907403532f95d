# tests/test_roots.py

from tibcal.engines.roots import (
    LUNATION_PERIOD,
    SUN_PERIOD,
    WEEKDAY_PERIOD,
    lunar_weekday_root,
    lunation_root,
    month_roots,
    normalize_index,
    solar_position_root,
)


def test_normalize_index():
    assert normalize_index(5, 804) == 5
    assert normalize_index(0, 804) == 0
    assert normalize_index(-1, 804) == 803
    assert normalize_index(-11134, 804) == -11134 + 14 * 804


def test_epoch_month_roots():
    r = month_roots(0)
    assert r.weekday == (6, 57, 53, 2, 20)
    assert r.sun == (25, 9, 10, 4, 32)
    assert r.lunation == (13, 103)


def test_roots_around_epoch():
    assert lunar_weekday_root(1) == (1, 29, 43, 2, 500)
    assert solar_position_root(1) == (0, 20, 8, 5, 49)
    assert lunation_root(1) == (15, 104)

    assert lunar_weekday_root(-1) == (5, 26, 3, 1, 247)
    assert solar_position_root(-1) == (22, 58, 12, 3, 15)
    assert lunation_root(-1) == (11, 102)


def test_first_month_of_table():
    r = month_roots(-11134)
    assert r.weekday == (3, 24, 33, 2, 620)
    assert r.sun == (21, 27, 32, 1, 29)
    assert r.lunation == (1, 57)


def test_roots_are_periodic():
    for z in (-11134, -1, 0, 7, 3708):
        assert lunar_weekday_root(z) == lunar_weekday_root(z + WEEKDAY_PERIOD)
        assert solar_position_root(z) == solar_position_root(z + SUN_PERIOD)
        assert lunation_root(z) == lunation_root(z + LUNATION_PERIOD)
