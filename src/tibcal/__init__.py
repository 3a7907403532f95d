"""tibcal public API.

Phugpa Tibetan <-> Gregorian date conversion. The month table is built on
first use of a module-level function; build_calendar() gives a private one.
"""

from .api import (
    configure,
    get_calendar,
    set_calendar,
    supported_range,
    gregorian_to_tibetan,
    tibetan_to_gregorian,
    explain,
    lookup_month,
    month_days,
    month_bounds,
    new_year_day,
    prev_month,
    next_month,
)
from .core.config import TableConfig
from .core.errors import AlgorithmInvariantError, DateOutOfRangeError, TibcalError
from .core.types import ANY, DatePair, MonthDescriptor, TibetanDate
from .engines.calendar import TibetanCalendar
from .engines.factory import build_calendar, build_table

__all__ = [
    "configure",
    "get_calendar",
    "set_calendar",
    "supported_range",
    "gregorian_to_tibetan",
    "tibetan_to_gregorian",
    "explain",
    "lookup_month",
    "month_days",
    "month_bounds",
    "new_year_day",
    "prev_month",
    "next_month",
    "TableConfig",
    "TibcalError",
    "AlgorithmInvariantError",
    "DateOutOfRangeError",
    "ANY",
    "DatePair",
    "MonthDescriptor",
    "TibetanDate",
    "TibetanCalendar",
    "build_calendar",
    "build_table",
]
