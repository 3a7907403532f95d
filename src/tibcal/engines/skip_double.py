"""
tibcal.engines.skip_double
--------------------------
Skipped and doubled lunar days from consecutive corrected weekdays.

A lunar day whose weekday equals the previous day's weekday ends on the same
civil day and is skipped; one whose weekday jumps by two (mod 7) spans two
civil days and is doubled. The weekday of day 30 of a month is the
predecessor of day 1 of the next.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Sequence, Tuple

from tibcal.core.config import DAYS_PER_MONTH
from tibcal.core.types import MonthDescriptor
from .roots import month_roots
from .weekday import corrected_weekday

log = logging.getLogger(__name__)


def month_weekdays(zladag: int) -> List[int]:
    """Corrected weekdays of lunar days 1..30 of a month."""
    roots = month_roots(zladag)
    return [corrected_weekday(d, roots) for d in range(1, DAYS_PER_MONTH + 1)]


def is_skip(prev: int, cur: int) -> bool:
    return cur == prev


def is_double(prev: int, cur: int) -> bool:
    if prev < 5:
        return cur == prev + 2
    return cur == prev - 5


def find_skips_and_doubles(weekdays: Sequence[int], prev: int) -> Tuple[List[int], List[int]]:
    """Skip and double day positions (1-based) of one month, given the preceding weekday."""
    skips: List[int] = []
    doubles: List[int] = []
    for d, cur in enumerate(weekdays, start=1):
        if is_skip(prev, cur):
            skips.append(d)
        elif is_double(prev, cur):
            doubles.append(d)
        prev = cur
    return skips, doubles


def assign_slots(found: List[int], kind: str, desc: MonthDescriptor) -> Tuple[int, int]:
    if len(found) > 2:
        for extra in found[2:]:
            log.error("third %s day %d in month %s dropped", kind, extra, desc.key)
    first = found[0] if found else 0
    second = found[1] if len(found) > 1 else 0
    return first, second


def detect_skips_and_doubles(records: Sequence[MonthDescriptor]) -> List[MonthDescriptor]:
    """
    Fill skip1/skip2/double1/double2 of every record but the first.

    The first record only seeds the weekday of its day 30.
    """
    if not records:
        return []

    out = [records[0]]
    prev = corrected_weekday(DAYS_PER_MONTH, month_roots(records[0].zladag))

    for desc in records[1:]:
        weekdays = month_weekdays(desc.zladag)
        skips, doubles = find_skips_and_doubles(weekdays, prev)
        prev = weekdays[-1]

        skip1, skip2 = assign_slots(skips, "skipped", desc)
        double1, double2 = assign_slots(doubles, "doubled", desc)
        out.append(replace(desc, skip1=skip1, skip2=skip2, double1=double1, double2=double2))

    log.debug("computed skipped and doubled days for %d months", len(out))
    return out
