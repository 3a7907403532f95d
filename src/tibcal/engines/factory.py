"""
tibcal.engines.factory
----------------------
Builds the month table in its three phases and wraps it in a calendar.
"""

from __future__ import annotations

import logging

from tibcal.core.config import DEFAULT_CONFIG, TableConfig
from tibcal.engines.calendar import TibetanCalendar
from tibcal.engines.month_table import MonthTable, build_month_records
from tibcal.engines.skip_double import detect_skips_and_doubles
from tibcal.engines.western import propagate_western_dates

log = logging.getLogger(__name__)


def build_table(config: TableConfig = DEFAULT_CONFIG) -> MonthTable:
    """Labels -> skipped/doubled days -> Western dates. Any invariant failure aborts the build."""
    # 1. Month labels
    table = MonthTable(build_month_records(config.zladag_offset), zladag_offset=config.zladag_offset)

    # 2. Skipped and doubled days
    records = detect_skips_and_doubles(table.records)

    # 3. Western dates
    records = propagate_western_dates(records, config)

    table = table.with_records(records)
    first, last = table.supported_range()
    log.debug("month table ready: %d months, %s .. %s", len(table), first, last)
    return table


def build_calendar(config: TableConfig = DEFAULT_CONFIG) -> TibetanCalendar:
    return TibetanCalendar(build_table(config), config)
