from dataclasses import dataclass

from timelane.lane import Lane, Mark


@dataclass(frozen=True, kw_only=True)
class Interval:
    """Inclusive range of marks in one lane."""

    start: Mark
    end: Mark
    lane: Lane

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Interval start ({self.start}) must be <= end ({self.end})"
            )

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __contains__(self, mark: object) -> bool:
        return isinstance(mark, int) and self.start <= mark <= self.end

    def __str__(self) -> str:
        """Human-friendly string showing range and mark count."""
        return f"Interval({self.lane} {self.start}→{self.end}, {len(self)} marks)"
