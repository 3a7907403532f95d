# tests/test_cli.py

from tibcal.cli import main


def test_bare_date(cal, capsys):
    assert main(["2024-02-10"]) == 0
    assert capsys.readouterr().out.strip() == "R17 Y38 M1 D1"


def test_day_doubled_month(cal, capsys):
    assert main(["day", "1900-01-01"]) == 0
    assert capsys.readouterr().out.strip() == "R15 Y33 M11 (first of doubled month) D30"


def test_day_explain(cal, capsys):
    assert main(["day", "1927-04-18", "--explain"]) == 0
    out = capsys.readouterr().out
    assert "D16 (second of doubled day)" in out
    assert "zladag=0" in out
    assert "corrected weekday" in out


def test_out_of_range(cal, capsys):
    assert main(["day", "1000-01-01"]) == 2
    assert "outside the supported range" in capsys.readouterr().err


def test_tib_skipped(cal, capsys):
    assert main(["tib", "2", "14", "2", "17"]) == 0
    out = capsys.readouterr().out
    assert "(skipped)" in out
    assert out.rstrip().endswith("-")


def test_tib_wildcard(cal, capsys):
    assert main(["tib", "17", "38", "*", "1"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) >= 12
    assert lines[0].endswith("2024-02-10")


def test_tib_nothing(cal, capsys):
    assert main(["tib", "21", "1", "1", "1"]) == 1


def test_new_year(cal, capsys):
    assert main(["new-year", "17", "38"]) == 0
    assert capsys.readouterr().out.strip() == "2024-02-10"


def test_month(cal, capsys):
    assert main(["month", "17", "2", "1"]) == 0
    out = capsys.readouterr().out
    assert "start=1988-02-18" in out


def test_dump_table(cal, capsys):
    assert main(["dump-table", "--from-zladag", "0", "--to-zladag", "1"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert lines[1] == "16\t1\t2\t0\t0\t2\t26\t16\t0\t1927-04-03"
    assert lines[2] == "16\t1\t3\t0\t1\t29\t0\t0\t0\t1927-05-02"
