"""Conversions between marks and standard library dates.

Marks are UTC. Aware datetimes are converted to UTC, `date` objects mean
midnight UTC, and ISO-8601 strings are parsed with dateutil (strings without
an offset are read as UTC).
"""

from datetime import date, datetime, time, timezone
from typing import Any

from dateutil.parser import isoparse

from timelane import gregorian, leapseconds
from timelane.core import scale
from timelane.lane import Lane, Mark, Rounding
from timelane.util import (
    MICROSECONDS_PER_SECOND,
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    SECONDS_PER_MINUTE,
)


def _coerce_moment(value: Any) -> datetime:
    """Convert a supported value to an aware UTC datetime.

    Accepts:
    - datetime: Must be timezone-aware
    - date: Midnight UTC of that day
    - str: ISO-8601 date or datetime, UTC unless it carries an offset

    Raises:
        TypeError: If value is an unsupported type or a naive datetime
        ValueError: If a string is not valid ISO-8601
    """
    if isinstance(value, str):
        parsed = isoparse(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise TypeError(
                f"mark_of() needs a timezone-aware datetime.\n"
                f"Got naive datetime: {value!r}\n"
                f"Hint: Add timezone info:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    raise TypeError(
        f"mark_of() accepts a datetime, date or ISO-8601 string.\n"
        f"Got {type(value).__name__!r}: {value!r}\n"
        f"Examples:\n"
        f"  mark_of(datetime(2025, 1, 1, tzinfo=timezone.utc))\n"
        f"  mark_of(date(2025, 1, 1), Lane.DAY)\n"
        f"  mark_of('2025-01-01T12:00:00Z')"
    )


def mark_of(
    value: datetime | date | str,
    lane: Lane | str = Lane.SECOND,
    rounding: Rounding | str = Rounding.DOWN,
) -> Mark:
    """Return the mark of a moment in the given lane.

    The moment is located to the microsecond, then scaled to the lane with the
    rounding mode. Lanes finer than a microsecond get the first mark of that
    microsecond.

    Args:
        value: Timezone-aware datetime, date, or ISO-8601 string
        lane: Lane of the returned mark (default Lane.SECOND)
        rounding: How to round when the lane is coarser than a microsecond

    Returns:
        Mark of the moment in the lane

    Example:
        >>> from datetime import date
        >>> from timelane import Lane, mark_of
        >>>
        >>> mark_of(date(2000, 2, 1), Lane.DAY)
        32
        >>> mark_of("2000-01-01T00:01:00Z")
        60
    """
    lane = Lane.coerce(lane)
    rounding = Rounding.coerce(rounding)
    moment = _coerce_moment(value)

    day = gregorian.month_start_day_mark(moment.year, moment.month) + moment.day - 1
    minute = (
        (day - 1) * MINUTES_PER_DAY
        + moment.hour * MINUTES_PER_HOUR
        + moment.minute
    )
    second = leapseconds.minute_start_second_mark(minute) + moment.second
    microsecond = second * MICROSECONDS_PER_SECOND + moment.microsecond

    if lane < Lane.MICROSECOND:
        rounding = Rounding.DOWN
    return scale(microsecond, Lane.MICROSECOND, lane, rounding)


def datetime_of(mark: Mark, lane: Lane | str = Lane.SECOND) -> datetime:
    """Return the UTC datetime at which a mark starts.

    Marks finer than a microsecond are truncated to their microsecond.

    Raises:
        ValueError: If the mark starts on a leap second (23:59:60), or falls
            outside the years datetime supports
    """
    lane = Lane.coerce(lane)
    microsecond = scale(mark, lane, Lane.MICROSECOND, Rounding.DOWN)
    second, fraction = divmod(microsecond, MICROSECONDS_PER_SECOND)

    minute = leapseconds.second_to_minute_mark(second)
    second_of_minute = second - leapseconds.minute_start_second_mark(minute)
    if second_of_minute >= SECONDS_PER_MINUTE:
        raise ValueError(
            f"{lane} mark {mark} starts on a leap second (23:59:60 UTC), "
            f"which datetime cannot represent.\n"
            f"Hint: scale the mark to Lane.MINUTE or read it as a second mark"
        )

    day, minute_of_day = divmod(minute, MINUTES_PER_DAY)
    day += 1
    year, month = gregorian.day_to_month(day)
    if not 1 <= year <= 9999:
        raise ValueError(
            f"{lane} mark {mark} falls in year {year}; "
            f"datetime supports years 1 to 9999"
        )
    hour, minute_of_hour = divmod(minute_of_day, MINUTES_PER_HOUR)
    return datetime(
        year,
        month,
        day - gregorian.month_start_day_mark(year, month) + 1,
        hour,
        minute_of_hour,
        second_of_minute,
        fraction,
        tzinfo=timezone.utc,
    )
