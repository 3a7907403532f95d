"""Diagnostics package.

Runnable tools with a main(argv); month_stats needs the diagnostics extra
(numpy, optionally matplotlib).
"""

__all__ = ["pretty_month", "self_check", "round_trip", "month_stats"]
