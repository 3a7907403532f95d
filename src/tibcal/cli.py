from __future__ import annotations

import argparse
from datetime import date
import importlib
import inspect
import logging
import re
import sys
from typing import Optional

from tibcal.core.errors import TibcalError
from tibcal.core.types import DatePair, MonthDescriptor, TibetanDate


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _parse_field(s: str) -> Optional[int]:
    return None if s == "*" else int(s)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def format_tibetan(t: TibetanDate) -> str:
    s = f"R{t.rabjung} Y{t.tib_year} M{t.month_no}"
    if t.month_flag:
        s += f" ({'first' if t.month_flag == 1 else 'second'} of doubled month)"
    s += f" D{t.tithi}"
    if t.is_skipped_day:
        s += " (skipped)"
    elif t.double_day_flag:
        s += f" ({'first' if t.double_day_flag == 1 else 'second'} of doubled day)"
    return s


def format_pair(p: DatePair) -> str:
    western = p.western.isoformat() if p.western is not None else "-"
    return f"{format_tibetan(p.tibetan):60s} {western}"


def format_month(m: MonthDescriptor) -> str:
    return (
        f"R{m.rabjung} Y{m.tib_year} M{m.month_no} flag={m.month_flag}  zladag={m.zladag}  "
        f"start={m.western_start}  length={m.length}  "
        f"skipped={list(m.skips)}  doubled={list(m.doubles)}"
    )


def cmd_day(argv: list[str]) -> int:
    import tibcal

    p = argparse.ArgumentParser(prog="tibcal day", description="Gregorian -> Tibetan day label")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--explain", action="store_true", help="show the month record and weekday reckoning")
    args = p.parse_args(argv)

    d = _parse_ymd(args.date)
    if not args.explain:
        print(format_tibetan(tibcal.gregorian_to_tibetan(d)))
        return 0

    info = tibcal.explain(d)
    print(format_tibetan(info["tibetan"]))
    print("month:            ", format_month(info["month"]))
    roots = info["roots"]
    print("roots:            ", f"gza'-dhru={roots.weekday} nyi-dhru={roots.sun} ril-cha={roots.lunation}")
    print("mean weekday:     ", info["mean_weekday"])
    print("mean sun:         ", info["mean_sun"])
    print("moon equation:    ", info["moon_equation"])
    print("sun anomaly:      ", info["sun_anomaly"])
    print("sun equation:     ", info["sun_equation"])
    print("corrected weekday:", info["corrected_weekday"])
    print("corrected sun:    ", info["corrected_sun"])
    return 0


def cmd_tib(argv: list[str]) -> int:
    import tibcal

    p = argparse.ArgumentParser(prog="tibcal tib", description="Tibetan -> Gregorian ('*' matches any value)")
    p.add_argument("rabjung")
    p.add_argument("year")
    p.add_argument("month")
    p.add_argument("day")
    args = p.parse_args(argv)

    pairs = tibcal.tibetan_to_gregorian(
        _parse_field(args.rabjung), _parse_field(args.year), _parse_field(args.month), _parse_field(args.day)
    )
    for pair in pairs:
        print(format_pair(pair))
    return 0 if pairs else 1


def cmd_month(argv: list[str]) -> int:
    import tibcal

    p = argparse.ArgumentParser(prog="tibcal month", description="Month record and its days")
    p.add_argument("rabjung", type=int)
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)
    p.add_argument("--flag", type=int, choices=(0, 1, 2), default=0)
    args = p.parse_args(argv)

    m = tibcal.lookup_month(args.rabjung, args.year, args.month, args.flag)
    if m is None:
        print("no such month")
        return 1
    print(format_month(m))
    for pair in tibcal.month_days(args.rabjung, args.year, args.month, args.flag):
        print(format_pair(pair))
    return 0


def cmd_new_year(argv: list[str]) -> int:
    import tibcal

    p = argparse.ArgumentParser(prog="tibcal new-year", description="Western date of Losar")
    p.add_argument("rabjung", type=int)
    p.add_argument("year", type=int)
    args = p.parse_args(argv)

    d = tibcal.new_year_day(args.rabjung, args.year)
    if d is None:
        print("no such year")
        return 1
    print(d.isoformat())
    return 0


def cmd_dump_table(argv: list[str]) -> int:
    import tibcal

    p = argparse.ArgumentParser(prog="tibcal dump-table", description="Tab-separated month table")
    p.add_argument("--from-zladag", type=int, default=None)
    p.add_argument("--to-zladag", type=int, default=None)
    args = p.parse_args(argv)

    print("rabjung\tyear\tmonth\tflag\tzladag\tskip1\tskip2\tdouble1\tdouble2\tstart")
    for m in tibcal.get_calendar().table:
        if args.from_zladag is not None and m.zladag < args.from_zladag:
            continue
        if args.to_zladag is not None and m.zladag > args.to_zladag:
            break
        print(m.to_row())
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `tibcal YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        argv = ["day"] + list(argv)

    p = argparse.ArgumentParser(prog="tibcal", description="Phugpa Tibetan calendar converter.")
    p.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Gregorian -> Tibetan day label")
    sub.add_parser("tib", help="Tibetan -> Gregorian dates")
    sub.add_parser("month", help="Month record and its days")
    sub.add_parser("new-year", help="Western date of Losar")
    sub.add_parser("dump-table", help="Print the month table")

    # diagnostics
    sub.add_parser("pretty-month", help="Print Tibetan/Gregorian month calendars (diagnostics)")
    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["self-check", "round-trip", "month-stats"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)
    _setup_logging(args.verbose)

    commands = {
        "day": cmd_day,
        "tib": cmd_tib,
        "month": cmd_month,
        "new-year": cmd_new_year,
        "dump-table": cmd_dump_table,
    }

    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)

        if args.cmd == "pretty-month":
            return _run_module_main("tibcal.diagnostics.pretty_month", rest)

        if args.cmd == "diag":
            tool_map = {
                "self-check": "tibcal.diagnostics.self_check",
                "round-trip": "tibcal.diagnostics.round_trip",
                "month-stats": "tibcal.diagnostics.month_stats",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except TibcalError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
