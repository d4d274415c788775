"""Proleptic Gregorian calendar arithmetic on day, month and year marks.

Years use astronomical numbering: year 0 is 1BC, year -1 is 2BC, and so on.
The leap-year rule is applied to every year, so 1BC is a leap year.

Mark conventions:
- Year marks are the year numbers themselves.
- Month mark 1 is January of EPOCH_YEAR.
- Day mark 1 is January 1st of EPOCH_YEAR.
"""

from bisect import bisect_right

from timelane.lane import Mark, Rounding
from timelane.util import (
    DAYS_PER_CYCLE,
    EPOCH_YEAR,
    MONTHS_PER_YEAR,
    YEARS_PER_CYCLE,
    ceil_div,
)

#: Gregorian month lengths of a common year.
MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

#: Month lengths of a leap year (February 29th).
MONTH_LENGTHS_LEAP = (MONTH_LENGTHS[0], MONTH_LENGTHS[1] + 1) + MONTH_LENGTHS[2:]


def _starts(lengths: tuple[int, ...]) -> tuple[int, ...]:
    offsets = [0]
    for length in lengths[:-1]:
        offsets.append(offsets[-1] + length)
    return tuple(offsets)


# Zero-based day of year on which each month starts
_MONTH_STARTS = _starts(MONTH_LENGTHS)
_MONTH_STARTS_LEAP = _starts(MONTH_LENGTHS_LEAP)


def is_leap_year(year: int) -> bool:
    """Return True if the year has a February 29th.

    Defined for all integers, including year 0 (1BC, a leap year) and
    negative years.
    """
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _check_month(month: int) -> None:
    if not 1 <= month <= MONTHS_PER_YEAR:
        raise ValueError(
            f"month must be in range [1, {MONTHS_PER_YEAR}], got {month}.\n"
            f"Hint: months are numbered from 1 (January) to 12 (December)"
        )


def days_in_month(year: int, month: int) -> int:
    _check_month(month)
    lengths = MONTH_LENGTHS_LEAP if is_leap_year(year) else MONTH_LENGTHS
    return lengths[month - 1]


def leap_days_before_year(year: int) -> int:
    """Count the leap years between year 1 and the given year (exclusive).

    The count is negative for years before 1AD: there is one leap year
    (1BC) between year 0 and year 1, so ``leap_days_before_year(0) == -1``.

    Example:
        >>> leap_days_before_year(5)
        1
        >>> leap_days_before_year(-4)
        -2
    """
    elapsed = year - 1
    return elapsed // 4 - elapsed // 100 + elapsed // 400


_EPOCH_LEAP_DAYS = leap_days_before_year(EPOCH_YEAR)


def year_start_day_mark(year: int) -> Mark:
    """Return the day mark of January 1st of the given year."""
    elapsed = year - EPOCH_YEAR
    return elapsed * 365 + leap_days_before_year(year) - _EPOCH_LEAP_DAYS + 1


def year_to_day_mark(year: int, rounding: Rounding = Rounding.DOWN) -> Mark:
    """Return the first (DOWN) or last (UP) day mark of the given year."""
    if rounding is Rounding.UP:
        return year_start_day_mark(year + 1) - 1
    return year_start_day_mark(year)


def month_start_day_mark(year: int, month: int) -> Mark:
    """Return the day mark of the first day of a month of a year."""
    _check_month(month)
    starts = _MONTH_STARTS_LEAP if is_leap_year(year) else _MONTH_STARTS
    return year_start_day_mark(year) + starts[month - 1]


def year_month_to_month_mark(year: int, month: int) -> Mark:
    _check_month(month)
    return (year - EPOCH_YEAR) * MONTHS_PER_YEAR + month


def year_to_month_mark(year: int) -> Mark:
    """Return the month mark of January of the given year."""
    return (year - EPOCH_YEAR) * MONTHS_PER_YEAR + 1


def month_mark_to_year_month(mark: Mark) -> tuple[int, int]:
    """Split a month mark into its (year, month) pair, month in 1..12."""
    elapsed, month_index = divmod(mark - 1, MONTHS_PER_YEAR)
    return EPOCH_YEAR + elapsed, month_index + 1


def month_to_day_mark(mark: Mark) -> Mark:
    """Return the day mark of the first day of a month mark."""
    return month_start_day_mark(*month_mark_to_year_month(mark))


def month_to_year_mark(mark: Mark, rounding: Rounding = Rounding.DOWN) -> Mark:
    if rounding is Rounding.UP:
        return EPOCH_YEAR + ceil_div(mark - 1, MONTHS_PER_YEAR)
    return EPOCH_YEAR + (mark - 1) // MONTHS_PER_YEAR


def day_to_year(day: Mark) -> tuple[int, int]:
    """Return the year containing a day mark and the 1-based day of that year.

    The year is first estimated from the mean Gregorian year length
    (146097 / 400 = 365.2425 days). The estimate is never off by more than
    one year, so a single correction settles it.
    """
    year = EPOCH_YEAR + (day - 1) * YEARS_PER_CYCLE // DAYS_PER_CYCLE
    start = year_start_day_mark(year)
    if start > day:
        year -= 1
        start = year_start_day_mark(year)
    else:
        following = year_start_day_mark(year + 1)
        if following <= day:
            year += 1
            start = following
    return year, day - start + 1


def day_to_month(day: Mark) -> tuple[int, int]:
    """Return the (year, month) pair containing a day mark."""
    year, day_of_year = day_to_year(day)
    starts = _MONTH_STARTS_LEAP if is_leap_year(year) else _MONTH_STARTS
    return year, bisect_right(starts, day_of_year - 1)


def day_to_month_mark(day: Mark, rounding: Rounding = Rounding.DOWN) -> Mark:
    """Convert a day mark to the month containing it (DOWN), or to the first
    month starting on or after it (UP)."""
    year, month = day_to_month(day)
    mark = year_month_to_month_mark(year, month)
    if rounding is Rounding.UP and month_start_day_mark(year, month) != day:
        mark += 1
    return mark


def day_to_year_mark(day: Mark, rounding: Rounding = Rounding.DOWN) -> Mark:
    """Convert a day mark straight to a year mark, skipping the month lane."""
    year, day_of_year = day_to_year(day)
    if rounding is Rounding.UP and day_of_year != 1:
        year += 1
    return year
