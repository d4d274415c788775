"""Utility constants and helpers for timelane.

All policy is fixed here at build time: the epoch, the representable range of
a mark, and the fixed ratios between regular lanes.
"""

# The year whose January 1st, 00:00:00 UTC is second 0, day 1 and month 1
EPOCH_YEAR = 2000

# Marks are signed 64-bit integers
MARK_BITS = 64
MARK_MIN = -(2 ** (MARK_BITS - 1))
MARK_MAX = 2 ** (MARK_BITS - 1) - 1

# Fixed ratios between adjacent regular lanes
NANOSECONDS_PER_MICROSECOND = 1000
MICROSECONDS_PER_MILLISECOND = 1000
MILLISECONDS_PER_SECOND = 1000
MICROSECONDS_PER_SECOND = MICROSECONDS_PER_MILLISECOND * MILLISECONDS_PER_SECOND
SECONDS_PER_MINUTE = 60
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
MINUTES_PER_DAY = MINUTES_PER_HOUR * HOURS_PER_DAY
MONTHS_PER_YEAR = 12

# Gregorian cycle: 400 years, 97 of them leap years
YEARS_PER_CYCLE = 400
DAYS_PER_CYCLE = 365 * YEARS_PER_CYCLE + 97


def ceil_div(a: int, b: int) -> int:
    """Divide rounding towards positive infinity."""
    return -(-a // b)


def in_range(value: int) -> bool:
    return MARK_MIN <= value <= MARK_MAX
