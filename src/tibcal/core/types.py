from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

# Wildcard for tibetan_to_gregorian: "every value in range"
ANY = None

MonthKey = Tuple[int, int, int, int]  # (rabjung, tib_year, month_no, month_flag)


@dataclass(frozen=True)
class TibetanDate:
    """
    month_flag: 0 regular month, 1 first / 2 second instance of a doubled month.
    double_day_flag: 0 regular day, 1 first / 2 second occurrence of a doubled day.
    """
    rabjung: int
    tib_year: int
    month_no: int
    month_flag: int
    tithi: int
    is_skipped_day: bool = False
    double_day_flag: int = 0

    @property
    def month_key(self) -> MonthKey:
        return (self.rabjung, self.tib_year, self.month_no, self.month_flag)


@dataclass(frozen=True)
class DatePair:
    """A Tibetan day and its Western date; skipped days have none."""
    tibetan: TibetanDate
    western: Optional[date]


@dataclass(frozen=True)
class MonthDescriptor:
    """
    One Tibetan month of the table.

    zladag is the signed elapsed-month index (0 = month 2, year 1, rabjung 16).
    skip*/double* are day positions 1..30, or 0 when absent.
    western_start is the Western date of day 1; None until propagation.
    """
    rabjung: int
    tib_year: int
    month_no: int
    month_flag: int
    zladag: int
    intercalation_index: int = 0
    skip1: int = 0
    skip2: int = 0
    double1: int = 0
    double2: int = 0
    western_start: Optional[date] = None

    @property
    def key(self) -> MonthKey:
        return (self.rabjung, self.tib_year, self.month_no, self.month_flag)

    @property
    def skips(self) -> Tuple[int, ...]:
        return tuple(d for d in (self.skip1, self.skip2) if d)

    @property
    def doubles(self) -> Tuple[int, ...]:
        return tuple(d for d in (self.double1, self.double2) if d)

    @property
    def length(self) -> int:
        """Number of Western days covered by this month."""
        n = 30
        if self.skip1 and not self.double1:
            n -= 1
        if self.skip2 and not self.double2:
            n -= 1
        return n

    def to_row(self) -> str:
        start = self.western_start.isoformat() if self.western_start is not None else ""
        fields = (
            self.rabjung, self.tib_year, self.month_no, self.month_flag, self.zladag,
            self.skip1, self.skip2, self.double1, self.double2,
        )
        return "\t".join(str(f) for f in fields) + "\t" + start


@dataclass(frozen=True)
class MonthRoots:
    """Root figures for the start of a month, most significant digit first."""
    weekday: Tuple[int, int, int, int, int]   # gza'-dhru, radix (7, 60, 60, 6, 707)
    sun: Tuple[int, int, int, int, int]       # nyi-dhru,  radix (27, 60, 60, 6, 67)
    lunation: Tuple[int, int]                 # ril-cha,   radix (28, 126)
