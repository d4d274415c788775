"""UTC leap seconds and the second <-> minute conversion they affect.

The table is fixed at build time. Every known leap second was inserted at
23:59:60 UTC on the last day of June or December; conversions past the last
entry assume no further leap seconds. A new leap second announced by the IERS
requires a new release, until then results after it are off by one second.
"""

import logging
from bisect import bisect_left
from dataclasses import dataclass

from timelane import gregorian
from timelane.lane import Mark, Rounding
from timelane.util import MINUTES_PER_DAY, SECONDS_PER_MINUTE

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class LeapSecond:
    """A minute of the UTC record, by minute mark, flagged with its extra second."""

    minute: Mark
    extra: bool = True

    @property
    def length(self) -> int:
        return SECONDS_PER_MINUTE + 1 if self.extra else SECONDS_PER_MINUTE


# (year, month) of the first day following each leap second
_INSERTIONS = (
    (1972, 7), (1973, 1), (1974, 1), (1975, 1), (1976, 1), (1977, 1),
    (1978, 1), (1979, 1), (1980, 1), (1981, 7), (1982, 7), (1983, 7),
    (1985, 7), (1988, 1), (1990, 1), (1991, 1), (1992, 7), (1993, 7),
    (1994, 7), (1996, 1), (1997, 7), (1999, 1), (2006, 1), (2009, 1),
    (2012, 7), (2015, 7), (2017, 1),
)  # fmt: skip


def year_month_to_minute(year: int, month: int) -> Mark:
    """Return the minute mark of midnight at the start of a month."""
    return (gregorian.month_start_day_mark(year, month) - 1) * MINUTES_PER_DAY


#: Every minute that received a leap second, in increasing minute order.
LEAP_SECONDS: tuple[LeapSecond, ...] = tuple(
    LeapSecond(minute=year_month_to_minute(year, month) - 1)
    for year, month in _INSERTIONS
)

_EXTENDED = tuple(entry.minute for entry in LEAP_SECONDS if entry.extra)
_EXTENDED_SET = frozenset(_EXTENDED)

# Leap seconds inserted before the epoch minute, subtracted so that the
# cumulative count is 0 at minute 0
_EPOCH_OFFSET = bisect_left(_EXTENDED, 0)

logger.debug(
    "Loaded %d leap seconds (minute marks %d..%d); later minutes are assumed "
    "to have %d seconds",
    len(LEAP_SECONDS),
    LEAP_SECONDS[0].minute,
    LEAP_SECONDS[-1].minute,
    SECONDS_PER_MINUTE,
)


def cumulative_leap_seconds(minute: Mark) -> int:
    """Count leap seconds inserted in minutes strictly before the given one.

    The count is relative to the epoch minute 0, so it is negative for
    minutes before the leap seconds of 1972..1998.

    Example:
        >>> cumulative_leap_seconds(0)
        0
        >>> cumulative_leap_seconds(-10**9)
        -22
    """
    return bisect_left(_EXTENDED, minute) - _EPOCH_OFFSET


def minute_length(minute: Mark) -> int:
    """Return 61 for a minute that received a leap second, 60 otherwise."""
    if minute in _EXTENDED_SET:
        return SECONDS_PER_MINUTE + 1
    return SECONDS_PER_MINUTE


def minute_start_second_mark(minute: Mark) -> Mark:
    """Return the second mark of the first second of a minute."""
    return SECONDS_PER_MINUTE * minute + cumulative_leap_seconds(minute)


def second_to_minute_mark(second: Mark, rounding: Rounding = Rounding.DOWN) -> Mark:
    """Convert a second mark to a minute mark.

    DOWN returns the minute containing the second. UP returns that minute if
    the second is its first one, and the following minute otherwise.
    """
    # The leap second count never changes by more than one between the
    # estimate and the answer, so one correction step is enough.
    estimate = second // SECONDS_PER_MINUTE
    minute = (second - cumulative_leap_seconds(estimate)) // SECONDS_PER_MINUTE
    start = minute_start_second_mark(minute)
    if start > second:
        minute -= 1
        start = minute_start_second_mark(minute)
    else:
        following = minute_start_second_mark(minute + 1)
        if following <= second:
            minute += 1
            start = following
    if rounding is Rounding.UP and start != second:
        minute += 1
    return minute
