"""
tibcal.diagnostics.self_check
-----------------------------
Fixed-point checks against dates printed in published almanacs and the
historical reference tables: month starts, the Julian-only leap years
1100/1300/1400/1500, the 1582 reform and the doubled month of 1899/1900.
"""

from __future__ import annotations

import argparse
from datetime import date
from typing import List, Optional, Tuple

import tibcal

# (rabjung, year, month, flag) -> Western start of the month
MONTH_STARTS: List[Tuple[Tuple[int, int, int, int], date]] = [
    ((1, 1, 1, 0), date(1027, 1, 11)),
    ((2, 14, 2, 0), date(1100, 2, 12)),
    ((5, 34, 3, 0), date(1300, 3, 22)),
    ((8, 54, 2, 0), date(1500, 3, 1)),
    ((10, 16, 9, 0), date(1582, 9, 17)),
    ((10, 16, 10, 0), date(1582, 10, 27)),
    ((15, 33, 11, 1), date(1899, 12, 3)),
    ((15, 33, 11, 2), date(1900, 1, 2)),
    ((16, 1, 2, 0), date(1927, 4, 3)),
    ((17, 2, 1, 0), date(1988, 2, 18)),
]

# (rabjung, year, month, day) -> Western date of the day, None when skipped
TIBETAN_DAYS: List[Tuple[Tuple[int, int, int, int], Optional[date]]] = [
    ((2, 14, 2, 16), date(1100, 2, 28)),
    ((2, 14, 2, 17), None),
    ((2, 14, 2, 18), date(1100, 2, 28)),
    ((2, 14, 2, 19), date(1100, 3, 1)),
    ((7, 14, 2, 4), date(1400, 2, 28)),
    ((7, 14, 2, 5), date(1400, 3, 1)),
    ((10, 16, 9, 18), date(1582, 10, 4)),
    ((10, 16, 9, 19), date(1582, 10, 15)),
]

# Western date -> (rabjung, year, month, flag, day)
WESTERN_DAYS: List[Tuple[date, Tuple[int, int, int, int, int]]] = [
    (date(1500, 2, 28), (8, 54, 1, 0, 29)),
    (date(1500, 3, 1), (8, 54, 2, 0, 1)),
    (date(1582, 10, 25), (10, 16, 9, 0, 29)),
    (date(1900, 1, 1), (15, 33, 11, 1, 30)),
    (date(1900, 1, 2), (15, 33, 11, 2, 1)),
    (date(1988, 2, 18), (17, 2, 1, 0, 1)),
    (date(2000, 1, 1), (17, 13, 11, 0, 25)),
    (date(2024, 2, 10), (17, 38, 1, 0, 1)),
]


def run_checks() -> List[str]:
    """Return a description of every failed check."""
    failures: List[str] = []

    for key, expected in MONTH_STARTS:
        desc = tibcal.lookup_month(*key)
        got = None if desc is None else desc.western_start
        if got != expected:
            failures.append(f"month start {key}: expected {expected}, got {got}")

    for (r, y, m, d), expected in TIBETAN_DAYS:
        pairs = tibcal.tibetan_to_gregorian(r, y, m, d)
        got_dates = [p.western for p in pairs]
        if expected not in got_dates:
            failures.append(f"tibetan day {(r, y, m, d)}: expected {expected}, got {got_dates}")

    for d, expected in WESTERN_DAYS:
        t = tibcal.gregorian_to_tibetan(d)
        got = (t.rabjung, t.tib_year, t.month_no, t.month_flag, t.tithi)
        if got != expected:
            failures.append(f"western day {d}: expected {expected}, got {got}")

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Check the month table against known historical dates.")
    p.add_argument("--quiet", action="store_true", help="Only print failures.")
    args = p.parse_args(argv)

    failures = run_checks()
    for f in failures:
        print("FAIL", f)

    n = len(MONTH_STARTS) + len(TIBETAN_DAYS) + len(WESTERN_DAYS)
    if not failures:
        if not args.quiet:
            print(f"All {n} checks passed.")
        return 0

    print(f"{len(failures)} of {n} checks failed.")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
