from enum import Enum, IntEnum
from typing import Any, TypeAlias

from timelane.util import MARK_MAX, MARK_MIN, in_range

Mark: TypeAlias = int


class ArithmeticOverflow(OverflowError):
    """A mark, or the result of a conversion, does not fit in the Mark range."""

    def __init__(self, value: int, context: str = "mark"):
        self.value: int = value
        super().__init__(
            f"{context} {value} is outside the representable range "
            f"[{MARK_MIN}, {MARK_MAX}]"
        )


class Lane(IntEnum):
    """Time granularities, ordered from finest to coarsest."""

    NANOSECOND = 0
    MICROSECOND = 1
    MILLISECOND = 2
    SECOND = 3
    MINUTE = 4
    HOUR = 5
    DAY = 6
    MONTH = 7
    YEAR = 8

    @property
    def finer(self) -> "Lane | None":
        """The adjacent finer lane, or None for the finest lane."""
        if self is Lane.NANOSECOND:
            return None
        return Lane(self - 1)

    @property
    def coarser(self) -> "Lane | None":
        """The adjacent coarser lane, or None for the coarsest lane."""
        if self is Lane.YEAR:
            return None
        return Lane(self + 1)

    @classmethod
    def coerce(cls, value: Any) -> "Lane":
        """Accept a Lane or its case-insensitive name ("second", "Day", ...)."""
        if isinstance(value, Lane):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                valid = ", ".join(lane.name.lower() for lane in cls)
                raise ValueError(
                    f"Unknown lane {value!r}.\nValid lanes: {valid}"
                ) from None
        raise TypeError(
            f"Lane must be a Lane or a lane name.\n"
            f"Got {type(value).__name__!r}: {value!r}\n"
            f"Examples:\n"
            f"  Lane.SECOND\n"
            f"  'second'"
        )

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, format_spec: str) -> str:
        # IntEnum formats as its value otherwise
        return format(str(self), format_spec)


class Rounding(Enum):
    """How a conversion picks a mark when the source does not map exactly.

    DOWN picks the latest coarse mark starting at or before the source and,
    when expanding, the first fine mark of the coarse mark. UP picks the
    earliest coarse mark starting at or after the source and, when expanding,
    the last fine mark of the coarse mark.
    """

    DOWN = "down"
    UP = "up"

    @classmethod
    def coerce(cls, value: Any) -> "Rounding":
        if isinstance(value, Rounding):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                raise ValueError(
                    f"Unknown rounding {value!r}.\nValid roundings: down, up"
                ) from None
        raise TypeError(
            f"Rounding must be a Rounding or 'down'/'up'.\n"
            f"Got {type(value).__name__!r}: {value!r}"
        )


def check_mark(value: Any, context: str = "mark") -> Mark:
    """Validate a mark argument or result.

    Raises:
        TypeError: If value is not an int (bool is rejected)
        ArithmeticOverflow: If value is outside the Mark range
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            f"{context} must be an int.\n"
            f"Got {type(value).__name__!r}: {value!r}\n"
            f"Hint: marks are integer positions in a lane; convert dates with "
            f"timelane.mark_of()"
        )
    if not in_range(value):
        raise ArithmeticOverflow(value, context)
    return value
