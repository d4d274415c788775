from dataclasses import dataclass
from functools import cache

from timelane import gregorian
from timelane.interval import Interval
from timelane.lane import Lane, Mark, Rounding, check_mark
from timelane.scaler import scaler_for


@dataclass(frozen=True, kw_only=True)
class Step:
    """One hop of a conversion, between adjacent lanes or from day to year."""

    source: Lane
    target: Lane

    @property
    def compressing(self) -> bool:
        return self.target > self.source

    def apply(self, mark: Mark, rounding: Rounding = Rounding.DOWN) -> Mark:
        fine, coarse = sorted((self.source, self.target))
        if fine is Lane.DAY and coarse is Lane.YEAR:
            if self.compressing:
                return gregorian.day_to_year_mark(mark, rounding)
            return gregorian.year_to_day_mark(mark, rounding)

        scaler = scaler_for(fine, coarse)
        if self.compressing:
            return scaler.compress(mark, rounding)
        if rounding is Rounding.UP:
            return scaler.last(mark)
        return scaler.expand(mark)


@cache
def _path(source: Lane, target: Lane) -> tuple[Step, ...]:
    direction = 1 if target > source else -1
    lanes = [Lane(value) for value in range(source, target + direction, direction)]
    # Day -> month -> year is one calendar step
    if Lane.DAY in lanes and Lane.YEAR in lanes:
        lanes.remove(Lane.MONTH)
    return tuple(
        Step(source=here, target=there) for here, there in zip(lanes, lanes[1:])
    )


def path(source: Lane | str, target: Lane | str) -> tuple[Step, ...]:
    """Return the hops walked when converting from source to target.

    Lanes are totally ordered, so the hops visit every lane in between, except
    that a path crossing both day and year takes one calendar step over the
    month lane. Converting a lane to itself takes no steps.
    """
    return _path(Lane.coerce(source), Lane.coerce(target))


def _walk(steps: tuple[Step, ...], mark: Mark, rounding: Rounding) -> Mark:
    for step in steps:
        mark = step.apply(mark, rounding)
    return mark


def scale(
    mark: Mark,
    source: Lane | str,
    target: Lane | str,
    rounding: Rounding | str = Rounding.DOWN,
) -> Mark:
    """Convert a mark from one lane to another.

    Compressing to a coarser lane, DOWN returns the coarse mark containing the
    source mark and UP the first coarse mark starting at or after it. The
    rounding is applied once, against the source mark, so chaining conversions
    through intermediate lanes gives the same answer as a direct conversion.

    Expanding to a finer lane, DOWN returns the first and UP the last fine mark
    contained in the source mark.

    Args:
        mark: Integer position in the source lane
        source: Lane of the mark (Lane or lane name)
        target: Lane to convert to (Lane or lane name)
        rounding: Rounding.DOWN (default) or Rounding.UP, or "down"/"up"

    Returns:
        The converted mark in the target lane

    Raises:
        ArithmeticOverflow: If the mark or the result is outside the Mark range
        TypeError: If the mark is not an int
        ValueError: If a lane or rounding name is unknown

    Example:
        >>> from timelane import Lane, Rounding, scale
        >>>
        >>> scale(2, Lane.MONTH, Lane.DAY)  # February 1st, 2000
        32
        >>> scale(32, "day", "month", "up")
        2
        >>> scale(0, "second", "year")
        2000
        >>> scale(2000, "year", "second", "up")  # 2000-12-31T23:59:59
        31622399
    """
    source = Lane.coerce(source)
    target = Lane.coerce(target)
    rounding = Rounding.coerce(rounding)
    check_mark(mark, f"{source} mark")

    if source is target:
        return mark

    if target > source:
        result = _walk(_path(source, target), mark, Rounding.DOWN)
        if rounding is Rounding.UP:
            start = _walk(_path(target, source), result, Rounding.DOWN)
            if start != mark:
                result += 1
    else:
        result = _walk(_path(source, target), mark, rounding)

    return check_mark(result, f"{target} mark")


def expand(
    mark: Mark, lane: Lane | str, rounding: Rounding | str = Rounding.DOWN
) -> Mark:
    """Convert a mark to the adjacent finer lane.

    DOWN returns the first and UP the last finer mark contained in the mark.
    """
    lane = Lane.coerce(lane)
    finer = lane.finer
    if finer is None:
        raise ValueError(
            f"Cannot expand the {lane} lane, it is the finest lane.\n"
            f"Hint: expand() converts to the next finer lane, "
            f"e.g. expand(1, Lane.DAY) gives hour 0"
        )
    check_mark(mark, f"{lane} mark")
    result = Step(source=lane, target=finer).apply(mark, Rounding.coerce(rounding))
    return check_mark(result, f"{finer} mark")


def compress(
    mark: Mark, lane: Lane | str, rounding: Rounding | str = Rounding.DOWN
) -> Mark:
    """Convert a mark to the adjacent coarser lane."""
    lane = Lane.coerce(lane)
    coarser = lane.coarser
    if coarser is None:
        raise ValueError(
            f"Cannot compress the {lane} lane, it is the coarsest lane.\n"
            f"Hint: compress() converts to the next coarser lane, "
            f"e.g. compress(32, Lane.DAY) gives month 2"
        )
    check_mark(mark, f"{lane} mark")
    result = Step(source=lane, target=coarser).apply(mark, Rounding.coerce(rounding))
    return check_mark(result, f"{coarser} mark")


def span(mark: Mark, lane: Lane | str, target: Lane | str) -> Interval:
    """Return the range of target marks covered by a mark.

    Example:
        >>> span(2, "month", "day")  # February 2000
        Interval(start=32, end=60, lane=<Lane.DAY: 6>)
    """
    lane = Lane.coerce(lane)
    target = Lane.coerce(target)
    if target > lane:
        raise ValueError(
            f"span() needs a target lane at least as fine as the source, "
            f"got {lane} -> {target}.\n"
            f"Hint: use scale() with a rounding mode to convert to a coarser lane"
        )
    return Interval(
        start=scale(mark, lane, target, Rounding.DOWN),
        end=scale(mark, lane, target, Rounding.UP),
        lane=target,
    )
