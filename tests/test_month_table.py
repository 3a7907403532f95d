# tests/test_month_table.py

import pytest
from collections import Counter

from tibcal.core.errors import AlgorithmInvariantError
from tibcal.core.types import MonthDescriptor
from tibcal.engines.month_table import (
    MonthCase,
    MonthTable,
    build_month_records,
    classify,
    intercalation_remainder,
    labels_for,
    previous_label,
)


@pytest.fixture(scope="module")
def records():
    return build_month_records()


def test_classify():
    assert classify(0) is MonthCase.INSERT_PREVIOUS
    assert classify(1) is MonthCase.INSERT_PREVIOUS
    assert classify(2) is MonthCase.NORMAL
    assert classify(47) is MonthCase.NORMAL
    assert classify(48) is MonthCase.FIRST_OF_DOUBLE
    assert classify(51) is MonthCase.SECOND_OF_DOUBLE
    assert classify(52) is MonthCase.SHIFTED
    assert classify(64) is MonthCase.SHIFTED
    with pytest.raises(AlgorithmInvariantError):
        classify(65)


def test_intercalation_remainder_is_non_negative():
    assert intercalation_remainder(1, 1, 1) == 31
    assert intercalation_remainder(16, 1, 1) == 51
    assert intercalation_remainder(16, 1, 2) == 53
    assert intercalation_remainder(16, 1, 3) == 55


def test_previous_label_rolls_over():
    assert previous_label(16, 1, 3) == (16, 1, 2)
    assert previous_label(16, 5, 1) == (16, 4, 12)
    assert previous_label(16, 1, 1) == (15, 60, 12)


def test_labels_around_epoch():
    # month 1 of rabjung 16 closes the doubled month 12 of the previous year
    assert labels_for(16, 1, 1) == [(15, 60, 12, 2, 51)]
    assert labels_for(16, 1, 2) == [(16, 1, 1, 0, 53)]
    assert labels_for(16, 1, 3) == [(16, 1, 2, 0, 55)]


def test_table_size_and_flags(records):
    assert len(records) == 14843
    flags = Counter(r.month_flag for r in records)
    assert flags == {0: 13957, 1: 443, 2: 443}


def test_zladag_numbering(records):
    assert records[0].key == (1, 1, 1, 0)
    assert records[0].zladag == -11134
    assert records[-1].key == (20, 60, 12, 0)
    assert records[-1].zladag == 3708

    epoch = [r for r in records if r.zladag in (-2, -1, 0, 1, 2)]
    assert [r.key for r in epoch] == [
        (15, 60, 12, 2),
        (16, 1, 1, 0),
        (16, 1, 2, 0),
        (16, 1, 3, 0),
        (16, 1, 4, 0),
    ]


def test_doubled_months_are_adjacent(records):
    for i, r in enumerate(records):
        if r.month_flag == 1:
            nxt = records[i + 1]
            assert nxt.month_flag == 2
            assert (nxt.rabjung, nxt.tib_year, nxt.month_no) == (r.rabjung, r.tib_year, r.month_no)


def test_month_table_index(records):
    table = MonthTable(records)
    assert len(table) == 14843
    assert table.lookup(16, 1, 2).zladag == 0
    assert table.lookup(15, 33, 11, 1).zladag == -338
    assert table.lookup(15, 33, 11) is None
    assert table.lookup(21, 1, 1) is None
    assert table.position((1, 1, 1, 0)) == 0
    assert table.by_zladag(0) is table.lookup(16, 1, 2)
    assert table.by_zladag(3709) is None
    assert table.previous(table[0]) is None
    assert table.next(table.lookup(16, 1, 2)).key == (16, 1, 3, 0)


def test_duplicate_labels_rejected():
    m = MonthDescriptor(1, 1, 1, 0, zladag=0)
    with pytest.raises(AlgorithmInvariantError):
        MonthTable([m, MonthDescriptor(1, 1, 1, 0, zladag=1)], zladag_offset=0)


def test_western_dates_required_for_search(records):
    with pytest.raises(AlgorithmInvariantError):
        MonthTable(records).supported_range()
