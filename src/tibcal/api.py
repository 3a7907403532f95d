from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from .core.config import TableConfig
from .core.time import DateLike
from .core.types import ANY, DatePair, MonthDescriptor, TibetanDate
from .engines.calendar import TibetanCalendar
from .engines.factory import build_calendar

_calendar: Optional[TibetanCalendar] = None


def set_calendar(cal: TibetanCalendar) -> None:
    global _calendar
    _calendar = cal


def configure(config: TableConfig) -> TibetanCalendar:
    """Rebuild the default calendar with a different configuration."""
    cal = build_calendar(config)
    set_calendar(cal)
    return cal


def _cal() -> TibetanCalendar:
    global _calendar
    # the table is built on first use, not on import
    if _calendar is None:
        _calendar = build_calendar()
    return _calendar


def get_calendar() -> TibetanCalendar:
    return _cal()


def supported_range() -> Tuple[date, date]:
    return _cal().supported_range()


def gregorian_to_tibetan(d: DateLike) -> TibetanDate:
    return _cal().gregorian_to_tibetan(d)


def tibetan_to_gregorian(
    rabjung: Optional[int] = ANY,
    year: Optional[int] = ANY,
    month: Optional[int] = ANY,
    day: Optional[int] = ANY,
) -> List[DatePair]:
    return _cal().tibetan_to_gregorian(rabjung, year, month, day)


def explain(d: DateLike) -> Dict[str, Any]:
    return _cal().explain(d)

# ============================================================
# Month-level API
# ============================================================

def lookup_month(rabjung: int, year: int, month: int, flag: int = 0) -> Optional[MonthDescriptor]:
    return _cal().lookup_month(rabjung, year, month, flag)


def month_days(rabjung: int, year: int, month: int, flag: int = 0) -> List[DatePair]:
    return _cal().month_days(rabjung, year, month, flag)


def month_bounds(rabjung: int, year: int, month: int, flag: int = 0) -> Optional[Tuple[date, date]]:
    return _cal().month_bounds(rabjung, year, month, flag)


def new_year_day(rabjung: int, year: int) -> Optional[date]:
    return _cal().new_year_day(rabjung, year)


def prev_month(rabjung: int, year: int, month: int, flag: int = 0) -> Optional[MonthDescriptor]:
    return _cal().prev_month(rabjung, year, month, flag)


def next_month(rabjung: int, year: int, month: int, flag: int = 0) -> Optional[MonthDescriptor]:
    return _cal().next_month(rabjung, year, month, flag)
