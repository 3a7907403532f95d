#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import Dict, List, Optional

import tibcal
from tibcal.core.types import MonthDescriptor


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "tibcal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "tibcal[diagnostics]"') from e


def select_months(from_rabjung: int, to_rabjung: int) -> List[MonthDescriptor]:
    table = tibcal.get_calendar().table
    return [m for m in table if from_rabjung <= m.rabjung <= to_rabjung]


def month_statistics(np, months: List[MonthDescriptor]) -> Dict[str, object]:
    """Month length and skip/double position statistics as numpy arrays and scalars."""
    lengths = np.array([m.length for m in months], dtype=int)
    skips = np.array([s for m in months for s in m.skips], dtype=int)
    doubles = np.array([d for m in months for d in m.doubles], dtype=int)
    flags = np.array([m.month_flag for m in months], dtype=int)

    return {
        "months": int(lengths.size),
        "doubled_months": int(np.count_nonzero(flags == 1)),
        "length_counts": {int(k): int(v) for k, v in zip(*np.unique(lengths, return_counts=True))},
        "mean_length": float(lengths.mean()) if lengths.size else 0.0,
        "skips": int(skips.size),
        "doubles": int(doubles.size),
        "skip_hist": np.bincount(skips, minlength=31)[1:],
        "double_hist": np.bincount(doubles, minlength=31)[1:],
    }


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Statistics of month lengths and skipped/doubled day positions.")
    p.add_argument("--from-rabjung", type=int, default=1)
    p.add_argument("--to-rabjung", type=int, default=20)
    p.add_argument("--plot", default="", help="Write a histogram of skip/double positions to this file.")
    args = p.parse_args(argv)

    if args.to_rabjung < args.from_rabjung:
        raise SystemExit("--to-rabjung must be >= --from-rabjung")

    np = _need_numpy()
    months = select_months(args.from_rabjung, args.to_rabjung)
    st = month_statistics(np, months)

    print(f"Rabjung {args.from_rabjung}..{args.to_rabjung}: {st['months']} months, "
          f"{st['doubled_months']} doubled")
    print(f"  mean length (Western days): {st['mean_length']:.6f}")
    for length, count in sorted(st["length_counts"].items()):
        print(f"  length {length}: {count}")
    print(f"  skipped days: {st['skips']}   doubled days: {st['doubles']}")

    if args.plot:
        plt = _need_matplotlib()
        days = np.arange(1, 31)
        fig, ax = plt.subplots(figsize=(10, 4))
        ax.bar(days - 0.2, st["skip_hist"], width=0.4, label="skipped")
        ax.bar(days + 0.2, st["double_hist"], width=0.4, label="doubled")
        ax.set_xlabel("lunar day")
        ax.set_ylabel("count")
        ax.set_xticks(days)
        ax.legend()
        fig.tight_layout()
        fig.savefig(args.plot, dpi=150)
        print(f"Wrote {args.plot}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
