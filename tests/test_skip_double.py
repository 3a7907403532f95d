# tests/test_skip_double.py

from tibcal.core.types import MonthDescriptor
import logging

from tibcal.engines.skip_double import (
    assign_slots,
    detect_skips_and_doubles,
    find_skips_and_doubles,
    is_double,
    is_skip,
    month_weekdays,
)


def test_skip_and_double_rules():
    assert is_skip(3, 3)
    assert not is_skip(3, 4)
    assert is_double(0, 2)
    assert is_double(4, 6)
    assert is_double(5, 0)
    assert is_double(6, 1)
    assert not is_double(5, 0 + 7)
    assert not is_double(3, 4)


def test_find_positions():
    skips, doubles = find_skips_and_doubles([1, 1, 3, 4], prev=0)
    assert skips == [2]
    assert doubles == [3]


def test_epoch_month():
    # day 30 of zladag -1 falls on weekday 0
    skips, doubles = find_skips_and_doubles(month_weekdays(0), prev=month_weekdays(-1)[-1])
    assert skips == [2, 26]
    assert doubles == [16]


def test_detect_keeps_first_record_bare():
    records = [
        MonthDescriptor(15, 60, 12, 2, -2),
        MonthDescriptor(16, 1, 1, 0, -1),
        MonthDescriptor(16, 1, 2, 0, 0),
        MonthDescriptor(16, 1, 3, 0, 1),
    ]
    out = detect_skips_and_doubles(records)
    assert out[0] == records[0]
    assert (out[1].skips, out[1].doubles) == ((), ())
    assert (out[2].skip1, out[2].skip2, out[2].double1, out[2].double2) == (2, 26, 16, 0)
    assert (out[3].skip1, out[3].skip2, out[3].double1, out[3].double2) == (29, 0, 0, 0)
    assert [m.key for m in out] == [m.key for m in records]


def test_third_candidate_is_logged_and_dropped(caplog):
    desc = MonthDescriptor(17, 1, 1, 0, 0)
    with caplog.at_level(logging.ERROR, logger="tibcal.engines.skip_double"):
        assert assign_slots([3, 9, 20], "skipped", desc) == (3, 9)
    assert len(caplog.records) == 1
    assert "third skipped day 20" in caplog.records[0].getMessage()
    assert "(17, 1, 1, 0)" in caplog.records[0].getMessage()


def test_slots_without_overflow(caplog):
    desc = MonthDescriptor(17, 1, 1, 0, 0)
    assert assign_slots([], "doubled", desc) == (0, 0)
    assert assign_slots([7], "doubled", desc) == (7, 0)
    assert assign_slots([7, 21], "doubled", desc) == (7, 21)
    assert caplog.records == []
