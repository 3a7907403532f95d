"""
tibcal.engines.month_table
--------------------------
Ordered table of Tibetan month labels for rabjungs 1..20.

Month labels are generated from the Phugpa intercalation remainder

    z = (2a + 55) mod 65,   a = months elapsed since the epoch month

which decides whether a label is regular, doubled, or carries the month
before it. Each appended record receives the next zladag, so record 0 of the
table has zladag -ZLADAG_OFFSET.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from datetime import date
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from tibcal.core.config import (
    MONTHS_PER_YEAR,
    RABJUNG_END,
    RABJUNG_START,
    YEARS_PER_RABJUNG,
    ZLADAG_OFFSET,
)
from tibcal.core.errors import AlgorithmInvariantError
from tibcal.core.time import add_days
from tibcal.core.types import MonthDescriptor, MonthKey

log = logging.getLogger(__name__)

# (rabjung, year, month, month_flag, intercalation_index)
Label = Tuple[int, int, int, int, int]

# Years counted from rabjung 1, year 1 to the epoch year of the remainder
EPOCH_YEARS = 901


class MonthCase(Enum):
    INSERT_PREVIOUS = "insert_previous"    # z in 0, 1
    NORMAL = "normal"                      # z in 2..47
    FIRST_OF_DOUBLE = "first_of_double"    # z in 48, 49
    SECOND_OF_DOUBLE = "second_of_double"  # z in 50, 51
    SHIFTED = "shifted"                    # z in 52..64


def intercalation_remainder(rabjung: int, year: int, month: int) -> int:
    """Intercalation remainder z in 0..64 of a month label."""
    total_years = YEARS_PER_RABJUNG * (rabjung - 1) + year
    if month > 2:
        m1, y1 = month, total_years - EPOCH_YEARS
    else:
        m1, y1 = month + 12, total_years - EPOCH_YEARS - 1
    a = 12 * y1 + m1 - 3
    return (2 * a + 55) % 65


def classify(z: int) -> MonthCase:
    if z in (0, 1):
        return MonthCase.INSERT_PREVIOUS
    if 2 <= z <= 47:
        return MonthCase.NORMAL
    if z in (48, 49):
        return MonthCase.FIRST_OF_DOUBLE
    if z in (50, 51):
        return MonthCase.SECOND_OF_DOUBLE
    if 52 <= z <= 64:
        return MonthCase.SHIFTED
    raise AlgorithmInvariantError(f"intercalation remainder out of range: {z}")


def previous_label(rabjung: int, year: int, month: int) -> Tuple[int, int, int]:
    """Month label preceding (rabjung, year, month); year 0 rolls into the previous rabjung."""
    if month > 1:
        return rabjung, year, month - 1
    year -= 1
    if year == 0:
        return rabjung - 1, YEARS_PER_RABJUNG, MONTHS_PER_YEAR
    return rabjung, year, MONTHS_PER_YEAR


def _insert_previous(r: int, y: int, m: int, z: int) -> List[Label]:
    pr, py, pm = previous_label(r, y, m)
    return [(pr, py, pm, 0, 0), (r, y, m, 0, z)]


def _normal(r: int, y: int, m: int, z: int) -> List[Label]:
    return [(r, y, m, 0, z)]


def _first_of_double(r: int, y: int, m: int, z: int) -> List[Label]:
    return [(r, y, m, 1, z)]


def _second_of_double(r: int, y: int, m: int, z: int) -> List[Label]:
    pr, py, pm = previous_label(r, y, m)
    return [(pr, py, pm, 2, z)]


def _shifted(r: int, y: int, m: int, z: int) -> List[Label]:
    pr, py, pm = previous_label(r, y, m)
    return [(pr, py, pm, 0, z)]


_HANDLERS: Dict[MonthCase, Callable[[int, int, int, int], List[Label]]] = {
    MonthCase.INSERT_PREVIOUS: _insert_previous,
    MonthCase.NORMAL: _normal,
    MonthCase.FIRST_OF_DOUBLE: _first_of_double,
    MonthCase.SECOND_OF_DOUBLE: _second_of_double,
    MonthCase.SHIFTED: _shifted,
}


def labels_for(rabjung: int, year: int, month: int) -> List[Label]:
    """Labels appended to the table while visiting (rabjung, year, month)."""
    z = intercalation_remainder(rabjung, year, month)
    return _HANDLERS[classify(z)](rabjung, year, month, z)


def build_month_records(zladag_offset: int = ZLADAG_OFFSET) -> List[MonthDescriptor]:
    """Generate every month label of rabjungs 1..20 in calendar order."""
    records: List[MonthDescriptor] = []
    for r in range(RABJUNG_START, RABJUNG_END + 1):
        for y in range(1, YEARS_PER_RABJUNG + 1):
            for m in range(1, MONTHS_PER_YEAR + 1):
                for lr, ly, lm, flag, z in labels_for(r, y, m):
                    records.append(MonthDescriptor(
                        rabjung=lr,
                        tib_year=ly,
                        month_no=lm,
                        month_flag=flag,
                        zladag=len(records) - zladag_offset,
                        intercalation_index=z,
                    ))
    log.debug("generated %d month labels", len(records))
    return records


class MonthTable:
    """
    Immutable ordered sequence of MonthDescriptor with a label index.

    Position i of the table holds zladag i - zladag_offset.
    """

    def __init__(self, records: Sequence[MonthDescriptor], *, zladag_offset: int = ZLADAG_OFFSET):
        self._records: Tuple[MonthDescriptor, ...] = tuple(records)
        self._offset = zladag_offset
        self._index: Dict[MonthKey, int] = {}
        for pos, rec in enumerate(self._records):
            if rec.key in self._index:
                raise AlgorithmInvariantError(f"duplicate month label {rec.key}")
            if rec.zladag != pos - zladag_offset:
                raise AlgorithmInvariantError(f"record {pos} has zladag {rec.zladag}")
            self._index[rec.key] = pos
        self._starts: Optional[List[date]] = None

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MonthDescriptor]:
        return iter(self._records)

    def __getitem__(self, pos: int) -> MonthDescriptor:
        return self._records[pos]

    @property
    def records(self) -> Tuple[MonthDescriptor, ...]:
        return self._records

    @property
    def zladag_offset(self) -> int:
        return self._offset

    def with_records(self, records: Sequence[MonthDescriptor]) -> "MonthTable":
        """New table over updated records with the same labels."""
        return MonthTable(records, zladag_offset=self._offset)

    def position(self, key: MonthKey) -> Optional[int]:
        return self._index.get(tuple(key))

    def lookup(self, rabjung: int, year: int, month: int, flag: int = 0) -> Optional[MonthDescriptor]:
        pos = self._index.get((rabjung, year, month, flag))
        return None if pos is None else self._records[pos]

    def by_zladag(self, zladag: int) -> Optional[MonthDescriptor]:
        pos = zladag + self._offset
        if 0 <= pos < len(self._records):
            return self._records[pos]
        return None

    def previous(self, desc: MonthDescriptor) -> Optional[MonthDescriptor]:
        return self.by_zladag(desc.zladag - 1)

    def next(self, desc: MonthDescriptor) -> Optional[MonthDescriptor]:
        return self.by_zladag(desc.zladag + 1)

    # ---------------------------------------------------------
    # Western dates (available once propagated)
    # ---------------------------------------------------------

    def starts(self) -> List[date]:
        if self._starts is None:
            starts = [rec.western_start for rec in self._records]
            if any(s is None for s in starts):
                raise AlgorithmInvariantError("month table has no Western dates yet")
            self._starts = starts  # type: ignore[assignment]
        return self._starts  # type: ignore[return-value]

    def supported_range(self) -> Tuple[date, date]:
        """First and last Western date covered by the table."""
        starts = self.starts()
        last = self._records[-1]
        return starts[0], add_days(starts[-1], last.length - 1)

    def containing(self, d: date) -> Optional[MonthDescriptor]:
        """Last month whose Western start is on or before d."""
        pos = bisect_right(self.starts(), d) - 1
        if pos < 0:
            return None
        return self._records[pos]
