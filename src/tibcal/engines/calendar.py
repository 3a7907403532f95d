"""
tibcal.engines.calendar
-----------------------
Query side of the converter: a TibetanCalendar wraps a fully built
MonthTable and answers Tibetan -> Western and Western -> Tibetan queries.

The table is never modified after construction, so one calendar can be
shared freely between threads.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from tibcal.core.config import (
    DAYS_PER_MONTH,
    DEFAULT_CONFIG,
    MONTHS_PER_YEAR,
    RABJUNG_END,
    RABJUNG_START,
    YEARS_PER_RABJUNG,
    TableConfig,
)
from tibcal.core.errors import AlgorithmInvariantError, DateOutOfRangeError
from tibcal.core.time import DateLike, add_days, day_difference, strip_time
from tibcal.core.types import ANY, DatePair, MonthDescriptor, TibetanDate
from .month_table import MonthTable
from .roots import month_roots
from .weekday import reckon_day

MONTH_FLAGS = (0, 1, 2)


def _expand(value: Optional[int], lo: int, hi: int) -> Iterable[int]:
    """Wildcard -> full range; explicit value -> itself, or nothing when out of range."""
    if value is ANY:
        return range(lo, hi + 1)
    if lo <= value <= hi:
        return (value,)
    return ()


def day_offset(desc: MonthDescriptor, tithi: int) -> int:
    """Western days from the month start to lunar day `tithi`."""
    skipped_before = sum(1 for s in desc.skips if s < tithi)
    doubled_before = sum(1 for d in desc.doubles if d < tithi)
    return (tithi - 1) - skipped_before + doubled_before


def reverse_lookup_is_exact(desc: MonthDescriptor) -> bool:
    """
    True when gregorian_to_tibetan inverts tibetan_to_gregorian on every day of the month.

    Western -> Tibetan applies the skip corrections before the double
    corrections. That is exact only when the month has at most one doubled
    day and it lies after every skipped day; otherwise some Western dates are
    labelled with a skipped lunar day or a wrong double-day flag, as in the
    almanac reckoning.
    """
    if len(desc.doubles) > 1:
        return False
    return all(d > s for d in desc.doubles for s in desc.skips)


def tithi_pairs(desc: MonthDescriptor, tithi: int) -> List[DatePair]:
    """DatePairs of one lunar day: one pair, a skipped pair, or two for a doubled day."""
    if desc.western_start is None:
        raise AlgorithmInvariantError(f"month {desc.key} has no Western start")

    base = dict(
        rabjung=desc.rabjung,
        tib_year=desc.tib_year,
        month_no=desc.month_no,
        month_flag=desc.month_flag,
        tithi=tithi,
    )
    if tithi in desc.skips:
        return [DatePair(TibetanDate(is_skipped_day=True, **base), None)]

    western = add_days(desc.western_start, day_offset(desc, tithi))
    if tithi in desc.doubles:
        return [
            DatePair(TibetanDate(double_day_flag=1, **base), western),
            DatePair(TibetanDate(double_day_flag=2, **base), add_days(western, 1)),
        ]
    return [DatePair(TibetanDate(**base), western)]


class TibetanCalendar:
    def __init__(self, table: MonthTable, config: TableConfig = DEFAULT_CONFIG):
        self.table = table
        self.config = config

    def __repr__(self) -> str:
        first, last = self.supported_range()
        return f"TibetanCalendar({len(self.table)} months, {first} .. {last})"

    # ---------------------------------------------------------
    # Months
    # ---------------------------------------------------------

    def supported_range(self) -> Tuple[date, date]:
        return self.table.supported_range()

    def lookup_month(self, rabjung: int, year: int, month: int, flag: int = 0) -> Optional[MonthDescriptor]:
        return self.table.lookup(rabjung, year, month, flag)

    def prev_month(self, rabjung: int, year: int, month: int, flag: int = 0) -> Optional[MonthDescriptor]:
        desc = self.lookup_month(rabjung, year, month, flag)
        return None if desc is None else self.table.previous(desc)

    def next_month(self, rabjung: int, year: int, month: int, flag: int = 0) -> Optional[MonthDescriptor]:
        desc = self.lookup_month(rabjung, year, month, flag)
        return None if desc is None else self.table.next(desc)

    def month_days(self, rabjung: int, year: int, month: int, flag: int = 0) -> List[DatePair]:
        """Every lunar day of a month in order; empty when the label does not exist."""
        desc = self.lookup_month(rabjung, year, month, flag)
        if desc is None:
            return []
        out: List[DatePair] = []
        for tithi in range(1, DAYS_PER_MONTH + 1):
            out.extend(tithi_pairs(desc, tithi))
        return out

    def month_bounds(self, rabjung: int, year: int, month: int, flag: int = 0) -> Optional[Tuple[date, date]]:
        """First and last Western date of a month."""
        dates = [p.western for p in self.month_days(rabjung, year, month, flag) if p.western is not None]
        if not dates:
            return None
        return dates[0], dates[-1]

    def new_year_day(self, rabjung: int, year: int) -> Optional[date]:
        """Western date of Losar: day 1 of month 1, first instance when doubled."""
        for flag in (0, 1):
            desc = self.lookup_month(rabjung, year, 1, flag)
            if desc is not None:
                return desc.western_start
        return None

    # ---------------------------------------------------------
    # Conversions
    # ---------------------------------------------------------

    def tibetan_to_gregorian(
        self,
        rabjung: Optional[int] = ANY,
        year: Optional[int] = ANY,
        month: Optional[int] = ANY,
        day: Optional[int] = ANY,
    ) -> List[DatePair]:
        """
        All DatePairs matching the pattern; ANY (None) matches every value.

        Explicit values outside their ranges match nothing, as do month labels
        the table does not contain.
        """
        out: List[DatePair] = []
        for r in _expand(rabjung, RABJUNG_START, RABJUNG_END):
            for y in _expand(year, 1, YEARS_PER_RABJUNG):
                for m in _expand(month, 1, MONTHS_PER_YEAR):
                    for flag in MONTH_FLAGS:
                        desc = self.table.lookup(r, y, m, flag)
                        if desc is None:
                            continue
                        for tithi in _expand(day, 1, DAYS_PER_MONTH):
                            out.extend(tithi_pairs(desc, tithi))
        return out

    def gregorian_to_tibetan(self, value: DateLike) -> TibetanDate:
        d = strip_time(value)
        first, last = self.supported_range()
        if not (first <= d <= last):
            raise DateOutOfRangeError(f"{d} is outside the supported range {first} .. {last}")

        desc = self.table.containing(d)
        if desc is None or desc.western_start is None:
            raise AlgorithmInvariantError(f"no month found for {d}")

        tithi = day_difference(desc.western_start, d, limit=self.config.max_day_search) + 1

        for s in desc.skips:
            if tithi >= s:
                tithi += 1

        double_flag = 1 if tithi in desc.doubles else 0
        for dd in desc.doubles:
            if tithi > dd:
                tithi -= 1
                if tithi == dd:
                    double_flag = 2

        return TibetanDate(
            rabjung=desc.rabjung,
            tib_year=desc.tib_year,
            month_no=desc.month_no,
            month_flag=desc.month_flag,
            tithi=tithi,
            double_day_flag=double_flag,
        )

    def explain(self, value: DateLike) -> Dict[str, Any]:
        """Western -> Tibetan with the month record and the weekday reckoning of the day."""
        d = strip_time(value)
        t = self.gregorian_to_tibetan(d)
        desc = self.table.lookup(*t.month_key)
        if desc is None:
            raise AlgorithmInvariantError(f"month {t.month_key} vanished from the table")
        roots = month_roots(desc.zladag)
        rk = reckon_day(t.tithi, roots)
        return {
            "date": d,
            "tibetan": t,
            "month": desc,
            "roots": roots,
            "mean_weekday": rk.mean_weekday,
            "mean_sun": rk.mean_sun,
            "moon_equation": (rk.moon_branch.value, rk.moon_correction),
            "sun_anomaly": rk.sun_anomaly,
            "sun_equation": (rk.sun_branch.value, rk.sun_correction),
            "corrected_weekday": rk.weekday,
            "corrected_sun": rk.sun,
        }
