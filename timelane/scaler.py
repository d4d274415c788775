"""Conversion rules between adjacent lanes.

Each Scaler links a finer lane to the next coarser one. Scalers work on plain
Python integers and never range-check; the checked entry points live in
`timelane.core`.
"""

from abc import ABC, abstractmethod

from typing_extensions import override

from timelane import gregorian, leapseconds
from timelane.lane import Lane, Mark, Rounding
from timelane.util import (
    HOURS_PER_DAY,
    MICROSECONDS_PER_MILLISECOND,
    MILLISECONDS_PER_SECOND,
    MINUTES_PER_HOUR,
    NANOSECONDS_PER_MICROSECOND,
    ceil_div,
)


class Scaler(ABC):

    #: True if every coarse mark holds the same number of fine marks.
    regular: bool = False

    def __init__(self, fine: Lane, coarse: Lane):
        if coarse.finer is not fine:
            raise ValueError(
                f"Scalers link adjacent lanes, got {fine} -> {coarse}.\n"
                f"Hint: use timelane.scale() to convert between distant lanes"
            )
        self.fine: Lane = fine
        self.coarse: Lane = coarse

    @abstractmethod
    def expand(self, mark: Mark) -> Mark:
        """Return the first fine mark contained in a coarse mark."""
        pass

    @abstractmethod
    def compress(self, mark: Mark, rounding: Rounding = Rounding.DOWN) -> Mark:
        """Return the coarse mark for a fine mark under the rounding mode."""
        pass

    def last(self, mark: Mark) -> Mark:
        """Return the last fine mark contained in a coarse mark."""
        return self.expand(mark + 1) - 1

    @property
    def ratio(self) -> int | None:
        """Fine marks per coarse mark, None when it varies."""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.fine} -> {self.coarse})"


class RatioScaler(Scaler):
    """Fixed number of fine marks per coarse mark.

    `offset` is the coarse mark whose first fine mark is 0 (day 1 starts at
    hour 0).
    """

    regular = True

    def __init__(self, fine: Lane, coarse: Lane, ratio: int, offset: int = 0):
        super().__init__(fine, coarse)
        self._ratio: int = ratio
        self.offset: int = offset

    @property
    @override
    def ratio(self) -> int:
        return self._ratio

    @override
    def expand(self, mark: Mark) -> Mark:
        return (mark - self.offset) * self._ratio

    @override
    def compress(self, mark: Mark, rounding: Rounding = Rounding.DOWN) -> Mark:
        if rounding is Rounding.UP:
            return ceil_div(mark, self._ratio) + self.offset
        return mark // self._ratio + self.offset


class LeapSecondScaler(Scaler):
    """Second <-> minute, with 61-second minutes from the leap second table."""

    def __init__(self):
        super().__init__(Lane.SECOND, Lane.MINUTE)

    @override
    def expand(self, mark: Mark) -> Mark:
        return leapseconds.minute_start_second_mark(mark)

    @override
    def compress(self, mark: Mark, rounding: Rounding = Rounding.DOWN) -> Mark:
        return leapseconds.second_to_minute_mark(mark, rounding)


class MonthScaler(Scaler):
    """Day <-> month, following Gregorian month lengths."""

    def __init__(self):
        super().__init__(Lane.DAY, Lane.MONTH)

    @override
    def expand(self, mark: Mark) -> Mark:
        return gregorian.month_to_day_mark(mark)

    @override
    def compress(self, mark: Mark, rounding: Rounding = Rounding.DOWN) -> Mark:
        return gregorian.day_to_month_mark(mark, rounding)


class YearScaler(Scaler):
    """Month <-> year, with year marks numbered as astronomical years."""

    def __init__(self):
        super().__init__(Lane.MONTH, Lane.YEAR)

    @override
    def expand(self, mark: Mark) -> Mark:
        return gregorian.year_to_month_mark(mark)

    @override
    def compress(self, mark: Mark, rounding: Rounding = Rounding.DOWN) -> Mark:
        return gregorian.month_to_year_mark(mark, rounding)


#: Scaler for each lane, keyed by its finer lane.
SCALERS: dict[Lane, Scaler] = {
    scaler.fine: scaler
    for scaler in (
        RatioScaler(Lane.NANOSECOND, Lane.MICROSECOND, NANOSECONDS_PER_MICROSECOND),
        RatioScaler(
            Lane.MICROSECOND, Lane.MILLISECOND, MICROSECONDS_PER_MILLISECOND
        ),
        RatioScaler(Lane.MILLISECOND, Lane.SECOND, MILLISECONDS_PER_SECOND),
        LeapSecondScaler(),
        RatioScaler(Lane.MINUTE, Lane.HOUR, MINUTES_PER_HOUR),
        RatioScaler(Lane.HOUR, Lane.DAY, HOURS_PER_DAY, offset=1),
        MonthScaler(),
        YearScaler(),
    )
}


def scaler_for(fine: Lane, coarse: Lane) -> Scaler:
    """Return the Scaler linking two adjacent lanes.

    Raises:
        ValueError: If the lanes are not adjacent, finer first
    """
    scaler = SCALERS.get(fine)
    if scaler is None or scaler.coarse is not coarse:
        raise ValueError(
            f"No scaler links {fine} -> {coarse}.\n"
            f"Scalers link a lane to the next coarser one, e.g. "
            f"scaler_for(Lane.DAY, Lane.MONTH)"
        )
    return scaler
