"""
tibcal.engines.western
----------------------
Western start dates of every month, propagated from one anchored month.

Forward of the anchor each start is the previous start plus the previous
month's length; backward of it each start is sub_days(next start, length),
which carries the Julian/Gregorian compensation of the older dates.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import List, Optional, Sequence

from tibcal.core.config import DEFAULT_CONFIG, TableConfig
from tibcal.core.errors import AlgorithmInvariantError
from tibcal.core.time import sub_days
from tibcal.core.types import MonthDescriptor

log = logging.getLogger(__name__)


def month_length(desc: MonthDescriptor, *, strict: bool = True) -> int:
    """
    Western days covered by a month (MonthDescriptor.length), after checking
    that every doubled day has its skipped day.

    A double day without a matching skip cannot occur in a consistent table.
    """
    if (desc.double1 and not desc.skip1) or (desc.double2 and not desc.skip2):
        msg = f"month {desc.key} has a doubled day without a skipped day"
        if strict:
            raise AlgorithmInvariantError(msg)
        log.error(msg)
    return desc.length


def propagate_western_dates(
    records: Sequence[MonthDescriptor],
    config: TableConfig = DEFAULT_CONFIG,
) -> List[MonthDescriptor]:
    """Return the records with western_start set, anchored at config.anchor."""
    anchor_pos: Optional[int] = None
    for pos, desc in enumerate(records):
        if desc.key == tuple(config.anchor):
            anchor_pos = pos
            break
    if anchor_pos is None:
        raise AlgorithmInvariantError(f"anchor month {config.anchor} not in table")

    lengths = [month_length(desc, strict=config.strict) for desc in records]
    starts: List[Optional[date]] = [None] * len(records)
    starts[anchor_pos] = config.anchor_date

    for pos in range(anchor_pos + 1, len(records)):
        starts[pos] = starts[pos - 1] + timedelta(days=lengths[pos - 1])

    for pos in range(anchor_pos - 1, -1, -1):
        starts[pos] = sub_days(starts[pos + 1], lengths[pos])

    log.debug("propagated Western dates: %s .. %s", starts[0], starts[-1])
    return [replace(desc, western_start=start) for desc, start in zip(records, starts)]
