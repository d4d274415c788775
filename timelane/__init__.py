from .core import Step, compress, expand, path, scale, span
from .dates import datetime_of, mark_of
from .gregorian import (
    days_in_month,
    day_to_month,
    day_to_year,
    is_leap_year,
    leap_days_before_year,
    month_start_day_mark,
    year_start_day_mark,
    year_to_day_mark,
)
from .interval import Interval
from .lane import ArithmeticOverflow, Lane, Mark, Rounding
from .leapseconds import (
    LEAP_SECONDS,
    LeapSecond,
    cumulative_leap_seconds,
    minute_length,
    minute_start_second_mark,
    second_to_minute_mark,
)
from .scaler import Scaler, scaler_for
from .util import EPOCH_YEAR, MARK_MAX, MARK_MIN

__all__ = [
    "Lane",
    "Mark",
    "Rounding",
    "ArithmeticOverflow",
    "Interval",
    "Step",
    "Scaler",
    "scale",
    "expand",
    "compress",
    "path",
    "span",
    "scaler_for",
    "is_leap_year",
    "days_in_month",
    "leap_days_before_year",
    "year_start_day_mark",
    "year_to_day_mark",
    "month_start_day_mark",
    "day_to_year",
    "day_to_month",
    "LeapSecond",
    "LEAP_SECONDS",
    "cumulative_leap_seconds",
    "minute_length",
    "minute_start_second_mark",
    "second_to_minute_mark",
    "mark_of",
    "datetime_of",
    "EPOCH_YEAR",
    "MARK_MIN",
    "MARK_MAX",
]
