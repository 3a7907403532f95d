from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Tuple

# Supported window: 20 sixty-year cycles
RABJUNG_START = 1
RABJUNG_END = 20
YEARS_PER_RABJUNG = 60
MONTHS_PER_YEAR = 12
DAYS_PER_MONTH = 30

# Number of month records appended before month 2 of year 1 of rabjung 16.
# The root recurrences are interpolations around that month, so it gets zladag 0.
ZLADAG_OFFSET = 11134


@dataclass(frozen=True)
class TableConfig:
    """
    Parameters of a month-table build.

    anchor / anchor_date pin one month start to a verified Gregorian date;
    every other month start is propagated from it.
    strict=False downgrades propagation invariant violations to log records.
    """
    anchor: Tuple[int, int, int, int] = (17, 2, 1, 0)
    anchor_date: date = date(1988, 2, 18)
    zladag_offset: int = ZLADAG_OFFSET
    max_day_search: int = 1000
    strict: bool = True

    def __post_init__(self) -> None:
        if len(self.anchor) != 4:
            raise ValueError("anchor must be (rabjung, year, month, month_flag)")
        r, y, m, flag = self.anchor
        if not (RABJUNG_START <= r <= RABJUNG_END):
            raise ValueError(f"anchor rabjung must be in {RABJUNG_START}..{RABJUNG_END}")
        if not (1 <= y <= YEARS_PER_RABJUNG):
            raise ValueError("anchor year must be in 1..60")
        if not (1 <= m <= MONTHS_PER_YEAR):
            raise ValueError("anchor month must be in 1..12")
        if flag not in (0, 1, 2):
            raise ValueError("anchor month_flag must be 0, 1 or 2")
        if self.max_day_search <= DAYS_PER_MONTH:
            raise ValueError("max_day_search must exceed the length of a month")


DEFAULT_CONFIG = TableConfig()
