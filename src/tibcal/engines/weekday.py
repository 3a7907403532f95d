"""
tibcal.engines.weekday
----------------------
Corrected lunar weekday (gza'-dag) of a lunar day, Phugpa reckoning.

For lunar day d of a month with root figures (gza'-dhru, nyi-dhru, ril-cha):

  mean weekday  = gza'-dhru + d * daily weekday motion      (gza'-bar)
  mean sun      = nyi-dhru  + d * daily solar motion        (nyi-bar)
  half-corrected weekday = mean weekday +/- equation of the moon
  corrected weekday      = half-corrected weekday +/- equation of the sun

All quantities are mixed-radix integers, most significant digit first.
The result must agree digit for digit with the almanac: a single carry
difference moves a skipped or doubled day.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

from tibcal.core.errors import AlgorithmInvariantError
from tibcal.core.types import MonthRoots
from .roots import SUN_RADIX, WEEKDAY_RADIX

Digits = Tuple[int, ...]

# Weekday after the solar correction: the last 707 digit is re-expressed in 67ths
# with a trailing remainder in 707ths.
CORRECTED_RADIX = (7, 60, 60, 6, 67)
CORRECTED_FULL_RADIX = (7, 60, 60, 6, 67, 707)

# Equation of the moon: (table value, difference to next row) over 14 steps
MOON_EQUATION = (
    (0, 5), (5, 5), (10, 5), (15, 4), (19, 3), (22, 2), (24, 1),
    (25, 1), (24, 2), (22, 3), (19, 4), (15, 5), (10, 5), (5, 5),
)

# Equation of the sun over six 135-unit steps of half an anomalistic cycle
SUN_EQUATION = ((0, 6), (6, 4), (10, 1), (11, 1), (10, 4), (6, 6))

# Solar anomaly origin (6;45 mansions) and half cycle (13;30)
SUN_APOGEE = (6, 45)
SUN_HALF_CYCLE = (13, 30)


class EquationBranch(Enum):
    ADD = "add"
    SUBTRACT = "subtract"


# ---------------------------------------------------------
# Mixed-radix helpers
# ---------------------------------------------------------

def tdivmod(a: int, b: int) -> Tuple[int, int]:
    """divmod truncating toward zero; the remainder takes the sign of a (b > 0)."""
    q = abs(a) // b
    if a < 0:
        q = -q
    return q, a - q * b


def radix_add(x: Sequence[int], y: Sequence[int], radix: Sequence[int]) -> Digits:
    """Digit-wise sum with full carry; the top digit wraps around its radix."""
    out = [0] * len(radix)
    carry = 0
    for i in range(len(radix) - 1, -1, -1):
        carry, out[i] = divmod(x[i] + y[i] + carry, radix[i])
    return tuple(out)


def carry_once(digits: Sequence[int], radix: Sequence[int]) -> List[int]:
    """Reduce each digit by its radix at most once, carrying 1 upward."""
    out = list(digits)
    for i in range(len(out) - 1, 0, -1):
        if out[i] >= radix[i]:
            out[i] -= radix[i]
            out[i - 1] += 1
    if out[0] >= radix[0]:
        out[0] -= radix[0]
    return out


def borrow_digitwise(diff: Sequence[int], borrows: Sequence[bool], radix: Sequence[int]) -> List[int]:
    """
    Apply precomputed borrows to a digit-wise difference.

    borrows[k] is decided on the operands' own digits, not on borrows
    received from below, so a digit may end at -1; normalize_negative
    settles that afterwards.
    """
    out = list(diff)
    for k in range(1, len(out)):
        if borrows[k]:
            out[k] += radix[k]
            out[k - 1] -= 1
    return out


def normalize_negative(digits: Sequence[int], radix: Sequence[int]) -> Digits:
    """Lift negative digits by their radix, borrowing from the next digit up."""
    out = list(digits)
    for i in range(len(out) - 1, -1, -1):
        if out[i] < 0:
            out[i] += radix[i]
            if i:
                out[i - 1] -= 1
    return tuple(out)


# ---------------------------------------------------------
# Daily motions
# ---------------------------------------------------------

def weekday_motion(d: int) -> Digits:
    """gza'-rtag times d: 1;59,3,4,16 weekdays per lunar day."""
    r4, d4 = divmod(16 * d, 707)
    r3, d3 = divmod(4 * d + r4, 6)
    r2, d2 = divmod(3 * d + r3, 60)
    r1, d1 = divmod(59 * d + r2, 60)
    return (r1 % 7, d1, d2, d3, d4)


def sun_motion(d: int) -> Digits:
    """nyi-rtag times d: 0;4,21,5,43 mansions per lunar day."""
    r4, d4 = divmod(43 * d, 67)
    r3, d3 = divmod(5 * d + r4, 6)
    r2, d2 = divmod(21 * d + r3, 60)
    r1, d1 = divmod(4 * d + r2, 60)
    return (r1 % 27, d1, d2, d3, d4)


# ---------------------------------------------------------
# Equation of the moon
# ---------------------------------------------------------

def moon_equation(d: int, lunation: Sequence[int]) -> Tuple[EquationBranch, Digits]:
    """
    Correction to the mean weekday from the anomaly step (ril-cha + d).

    Steps 0..13 of an even cycle are added, of an odd cycle subtracted.
    The fractional ril-cha digit interpolates the table in 126ths and is
    re-expressed in the weekday radix; it must divide out exactly.
    """
    cycles, step = divmod(lunation[0] + d, 14)
    value, diff = MOON_EQUATION[step]

    r2, z2 = divmod(lunation[1] * diff, 126)
    r3, z3 = divmod(60 * z2, 126)
    r4, z4 = divmod(6 * z3, 126)
    r5, z5 = divmod(707 * z4, 126)
    if z5 != 0:
        raise AlgorithmInvariantError(f"moon equation remainder {z5} for day {d}, ril-cha {tuple(lunation)}")

    if step <= 6:
        corr = (0, value + r2, r3, r4, r5)
    else:
        corr = (0, value - r2 - 1, 59 - r3, 5 - r4, 707 - r5)

    branch = EquationBranch.ADD if cycles % 2 == 0 else EquationBranch.SUBTRACT
    return branch, corr


def _apply_moon_add(mean: Digits, corr: Digits) -> List[int]:
    return carry_once([m + c for m, c in zip(mean, corr)], WEEKDAY_RADIX)


def _apply_moon_subtract(mean: Digits, corr: Digits) -> List[int]:
    diff = [m - c for m, c in zip(mean, corr)]
    borrows = [False] + [corr[k] > mean[k] for k in range(1, 5)]
    return borrow_digitwise(diff, borrows, WEEKDAY_RADIX)


_MOON_APPLY = {
    EquationBranch.ADD: _apply_moon_add,
    EquationBranch.SUBTRACT: _apply_moon_subtract,
}


# ---------------------------------------------------------
# Equation of the sun
# ---------------------------------------------------------

def sun_anomaly(mean_sun: Sequence[int]) -> Tuple[int, int]:
    """
    Mean sun minus 6;45 mansions, as (mansions, 60ths).

    Only mansions below 6 are wrapped, so suns in 6;00..6;44 give a small
    negative anomaly (-1, 15..59).
    """
    mansion, part = mean_sun[0], mean_sun[1]
    if mansion < SUN_APOGEE[0]:
        mansion += 27
    if part < SUN_APOGEE[1]:
        mansion -= 1
        part += 60
    return mansion - SUN_APOGEE[0], part - SUN_APOGEE[1]


def _past_half_cycle(anomaly: Tuple[int, int]) -> bool:
    a1, a2 = anomaly
    return (a1 >= SUN_HALF_CYCLE[0] and a2 >= SUN_HALF_CYCLE[1]) or a1 > SUN_HALF_CYCLE[0]


def sun_equation(mean_sun: Sequence[int]) -> Tuple[EquationBranch, Tuple[int, int], Digits]:
    """
    Correction from the solar anomaly, in the solar radix below mansions.

    The anomaly is folded into half a cycle and split into 135-unit steps;
    the first half of the cycle is added, the second subtracted. Division
    truncates toward zero so the negative anomaly near the apogee keeps a
    consistent sign through the chain.
    """
    anomaly = sun_anomaly(mean_sun)
    a1, a2 = anomaly
    if a1 >= 13 and a2 >= 30:
        b1, b2 = a1 - 13, a2 - 30
    elif a1 > 13:
        b1, b2 = a1 - 14, a2 + 30
    else:
        b1, b2 = a1, a2

    row, rem = tdivmod(60 * b1 + b2, 135)
    value, diff = SUN_EQUATION[row]

    _, _, s2, s3, s4 = mean_sun
    r4, z4 = tdivmod(s4 * diff, 67)
    r3, z3 = tdivmod(s3 * diff + r4, 6)
    r2, z2 = tdivmod(s2 * diff + r3, 60)
    q1 = rem * diff + r2

    e1, y1 = tdivmod(q1, 135)
    e2, y2 = tdivmod(60 * y1 + z2, 135)
    e3, y3 = tdivmod(6 * y2 + z3, 135)
    e4, y4 = tdivmod(67 * y3 + z4, 135)
    if y4 != 0:
        raise AlgorithmInvariantError(f"sun equation remainder {y4} for mean sun {tuple(mean_sun)}")

    if row <= 2:
        corr = (0, value + e1, e2, e3, e4)
    else:
        corr = (0, value - e1 - 1, 59 - e2, 5 - e3, 67 - e4)

    branch = EquationBranch.ADD if _past_half_cycle(anomaly) else EquationBranch.SUBTRACT
    return branch, anomaly, corr


def _apply_sun_to_weekday_add(half: Sequence[int], units: int, rem: int, corr: Digits) -> Digits:
    digits = carry_once(
        [half[0], half[1] + corr[1], half[2] + corr[2], half[3] + corr[3], units + corr[4]],
        CORRECTED_RADIX,
    )
    return tuple(digits) + (rem,)


def _apply_sun_to_weekday_subtract(half: Sequence[int], units: int, rem: int, corr: Digits) -> Digits:
    diff = [half[0], half[1] - corr[1], half[2] - corr[2], half[3] - corr[3], units - corr[4] - 1]
    borrows = [False, corr[1] > half[1], corr[2] > half[2], corr[3] > half[3], corr[4] - 1 > units]
    digits = borrow_digitwise(diff, borrows, CORRECTED_RADIX)
    return tuple(digits) + (707 - rem,)


_SUN_APPLY = {
    EquationBranch.ADD: _apply_sun_to_weekday_add,
    EquationBranch.SUBTRACT: _apply_sun_to_weekday_subtract,
}


def _corrected_sun(mean_sun: Digits, branch: EquationBranch, corr: Digits) -> Digits:
    if branch is EquationBranch.ADD:
        digits = carry_once([m + c for m, c in zip(mean_sun, corr)], SUN_RADIX)
    else:
        diff = [m - c for m, c in zip(mean_sun, corr)]
        borrows = [False] + [corr[k] > mean_sun[k] for k in range(1, 5)]
        digits = borrow_digitwise(diff, borrows, SUN_RADIX)
    return normalize_negative(digits, SUN_RADIX)


# ---------------------------------------------------------
# Public entry points
# ---------------------------------------------------------

@dataclass(frozen=True)
class DayReckoning:
    """Intermediate figures of the weekday reckoning for one lunar day."""
    day: int
    mean_weekday: Digits
    mean_sun: Digits
    moon_branch: EquationBranch
    moon_correction: Digits
    half_weekday: Digits
    sun_anomaly: Tuple[int, int]
    sun_branch: EquationBranch
    sun_correction: Digits
    weekday: Digits
    sun: Digits

    @property
    def corrected_weekday(self) -> int:
        return self.weekday[0]


def _reckon(d: int, roots: MonthRoots):
    mean_weekday = radix_add(roots.weekday, weekday_motion(d), WEEKDAY_RADIX)
    mean_sun = radix_add(roots.sun, sun_motion(d), SUN_RADIX)

    moon_branch, moon_corr = moon_equation(d, roots.lunation)
    half = _MOON_APPLY[moon_branch](mean_weekday, moon_corr)

    sun_branch, anomaly, sun_corr = sun_equation(mean_sun)
    # last weekday digit re-expressed: 707ths -> 67ths plus remainder
    units, rem = divmod(67 * half[4], 707)
    weekday = _SUN_APPLY[sun_branch](half, units, rem, sun_corr)
    weekday = normalize_negative(weekday, CORRECTED_FULL_RADIX)

    return mean_weekday, mean_sun, moon_branch, moon_corr, tuple(half), anomaly, sun_branch, sun_corr, weekday


def corrected_weekday(d: int, roots: MonthRoots) -> int:
    """gza'-dag of lunar day d (1..30): weekday 0..6 on which the day ends."""
    return _reckon(d, roots)[-1][0]


def reckon_day(d: int, roots: MonthRoots) -> DayReckoning:
    (mean_weekday, mean_sun, moon_branch, moon_corr, half,
     anomaly, sun_branch, sun_corr, weekday) = _reckon(d, roots)
    return DayReckoning(
        day=d,
        mean_weekday=mean_weekday,
        mean_sun=mean_sun,
        moon_branch=moon_branch,
        moon_correction=moon_corr,
        half_weekday=half,
        sun_anomaly=anomaly,
        sun_branch=sun_branch,
        sun_correction=sun_corr,
        weekday=weekday,
        sun=_corrected_sun(mean_sun, sun_branch, sun_corr),
    )
