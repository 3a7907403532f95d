"""
tibcal.engines.roots
--------------------
Root figures (gza'-dhru, nyi-dhru, ril-cha) of a month from its zladag.

Each recurrence is linear in the month count modulo its period, so negative
month counts are moved forward by whole periods before evaluation.
"""

from __future__ import annotations

from typing import Tuple

from tibcal.core.types import MonthRoots

WEEKDAY_PERIOD = 39592
SUN_PERIOD = 804
LUNATION_PERIOD = 3528

WEEKDAY_RADIX = (7, 60, 60, 6, 707)
SUN_RADIX = (27, 60, 60, 6, 67)
LUNATION_RADIX = (28, 126)


def normalize_index(m: int, period: int) -> int:
    """Shift a negative month count by whole periods until it is >= 0."""
    if m >= 0:
        return m
    return m % period


def lunar_weekday_root(zladag: int) -> Tuple[int, int, int, int, int]:
    """gza'-dhru: mean lunar weekday at the start of the month."""
    m = normalize_index(zladag, WEEKDAY_PERIOD)
    r4, d4 = divmod(480 * m + 20, 707)
    r3, d3 = divmod(2 + r4, 6)
    r2, d2 = divmod(50 * m + 53 + r3, 60)
    r1, d1 = divmod(31 * m + 57 + r2, 60)
    d0 = (m + 6 + r1) % 7
    return (d0, d1, d2, d3, d4)


def solar_position_root(zladag: int) -> Tuple[int, int, int, int, int]:
    """nyi-dhru: mean sun in lunar mansions at the start of the month."""
    m = normalize_index(zladag, SUN_PERIOD)
    r4, d4 = divmod(17 * m + 32, 67)
    r3, d3 = divmod(m + 4 + r4, 6)
    r2, d2 = divmod(58 * m + 10 + r3, 60)
    r1, d1 = divmod(10 * m + 9 + r2, 60)
    d0 = (2 * m + 25 + r1) % 27
    return (d0, d1, d2, d3, d4)


def lunation_root(zladag: int) -> Tuple[int, int]:
    """ril-cha: position in the anomalistic cycle."""
    m = normalize_index(zladag, LUNATION_PERIOD)
    r1, d1 = divmod(m + 103, 126)
    d0 = (2 * m + 13 + r1) % 28
    return (d0, d1)


def month_roots(zladag: int) -> MonthRoots:
    return MonthRoots(
        weekday=lunar_weekday_root(zladag),
        sun=solar_position_root(zladag),
        lunation=lunation_root(zladag),
    )
