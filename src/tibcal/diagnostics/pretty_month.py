from __future__ import annotations

from datetime import date, timedelta
import calendar as pycal
import argparse
from typing import List, Optional, Tuple

import tibcal
from tibcal.core.types import TibetanDate


def dow_header() -> str:
    return "Mo     Tu     We     Th     Fr     Sa     Su"


def cell(top: str, bot: str, w: int = 6) -> Tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def month_tag(t: TibetanDate) -> str:
    return {0: "", 1: "a", 2: "b"}[t.month_flag]


def day_tag(t: TibetanDate) -> str:
    return "+" if t.double_day_flag == 2 else ""


def layout_weeks(first: date, cells: List[Tuple[str, str]]) -> List[List[Tuple[str, str]]]:
    weeks: List[List[Tuple[str, str]]] = []
    wk: List[Tuple[str, str]] = []
    for _ in range(first.weekday()):  # Monday=0
        wk.append(cell("", ""))
    for c in cells:
        wk.append(c)
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks


def format_grid(title: str, weeks: List[List[Tuple[str, str]]]) -> str:
    lines = [title, dow_header(), "-" * len(dow_header())]
    for wk in weeks:
        lines.append(" ".join(c[0] for c in wk).rstrip())
        lines.append(" ".join(c[1] for c in wk).rstrip())
    return "\n".join(lines) + "\n"


def lunar_month_grid(rabjung: int, year: int, month: int, flag: int = 0) -> Optional[str]:
    """Grid of one Tibetan month: lunar day over Western MM-DD; skipped days are listed below."""
    pairs = tibcal.month_days(rabjung, year, month, flag)
    if not pairs:
        return None

    skipped = [p.tibetan.tithi for p in pairs if p.western is None]
    dated = [(p.tibetan, p.western) for p in pairs if p.western is not None]
    first, last = dated[0][1], dated[-1][1]
    cells = [cell(f"{t.tithi:2d}{day_tag(t)}", f"{d.month:02d}-{d.day:02d}") for t, d in dated]

    tag = {0: "", 1: " (first)", 2: " (second)"}[flag]
    title = f"Tibetan month  R={rabjung}  Y={year}  M={month}{tag}   ({first} .. {last})"
    out = format_grid(title, layout_weeks(first, cells))
    if skipped:
        out += "skipped: " + ", ".join(str(s) for s in skipped) + "\n"
    return out


def gregorian_month_grid(gy: int, gm: int) -> str:
    """Grid of one Western month: day of month over Tibetan month-day."""
    first = date(gy, gm, 1)
    last = date(gy, gm, pycal.monthrange(gy, gm)[1])

    cells = []
    d = first
    while d <= last:
        t = tibcal.gregorian_to_tibetan(d)
        cells.append(cell(f"{d.day:2d}", f"{t.month_no:02d}{month_tag(t)}-{t.tithi:02d}{day_tag(t)}"))
        d += timedelta(days=1)

    return format_grid(f"Gregorian month  {gy}-{gm:02d}", layout_weeks(first, cells))


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a Tibetan-month calendar and/or a Gregorian-month calendar with paired labels."
    )
    p.add_argument("--lunar", nargs=3, type=int, metavar=("R", "Y", "M"),
                   help="Tibetan month to print: rabjung, year in cycle, month (e.g. 17 38 1)")
    p.add_argument("--flag", type=int, choices=(0, 1, 2), default=0,
                   help="Month instance: 0 regular, 1/2 first/second of a doubled month.")
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 2024 2)")
    args = p.parse_args(argv)

    if not args.lunar and not args.greg:
        print(lunar_month_grid(17, 38, 1))
        print(gregorian_month_grid(2024, 2))
        return 0

    if args.lunar:
        r, y, m = args.lunar
        grid = lunar_month_grid(r, y, m, args.flag)
        if grid is None:
            print(f"No month R={r} Y={y} M={m} flag={args.flag}")
            return 1
        print(grid)

    if args.greg:
        gy, gm = args.greg
        print(gregorian_month_grid(gy, gm))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
