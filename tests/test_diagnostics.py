# tests/test_diagnostics.py

from datetime import date

import pytest

from tibcal.diagnostics import pretty_month, round_trip, self_check


def test_self_check(cal):
    assert self_check.run_checks() == []
    assert self_check.main(["--quiet"]) == 0


def test_round_trip(cal, capsys):
    failures, inexact = round_trip.roundtrip_test(300, date(1600, 1, 1), date(2200, 12, 31), seed=7, max_failures=1)
    assert failures == 0
    assert 0 <= inexact < 300
    assert round_trip.main(["--N", "50"]) == 0
    assert "All round-trip tests passed." in capsys.readouterr().out


def test_pretty_month(cal):
    grid = pretty_month.lunar_month_grid(17, 38, 1)
    assert grid.startswith("Tibetan month  R=17  Y=38  M=1")
    assert "02-10" in grid
    assert pretty_month.lunar_month_grid(17, 38, 13) is None

    greg = pretty_month.gregorian_month_grid(2024, 2)
    assert greg.startswith("Gregorian month  2024-02")
    assert "01-01" in greg


def test_month_stats(cal, capsys):
    np = pytest.importorskip("numpy")
    from tibcal.diagnostics import month_stats

    months = month_stats.select_months(1, 20)
    st = month_stats.month_statistics(np, months)
    assert st["months"] == 14843
    assert st["doubled_months"] == 443
    assert set(st["length_counts"]) <= {28, 29, 30}
    assert st["skip_hist"].shape == (30,)
    assert int(st["skip_hist"].sum()) == st["skips"]
    assert st["skips"] - st["doubles"] == sum(30 - m.length for m in months)

    assert month_stats.main(["--from-rabjung", "17", "--to-rabjung", "17"]) == 0
    assert "Rabjung 17..17" in capsys.readouterr().out
