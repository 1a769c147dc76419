from __future__ import annotations

from dataclasses import dataclass

"""Period (inclusive day range) used to scope attendance statistics.

No calendar validation is done: day 31 is accepted for every month.
"""

__all__ = [
    "Period",
    "PERIOD_NAMES",
    "period_from_name",
]


@dataclass(frozen=True)
class Period:
    start: int
    end: int
    name: str = "custom"

    @classmethod
    def full(cls) -> Period:
        return cls(1, 31, "full")

    @classmethod
    def first_half(cls) -> Period:
        return cls(1, 15, "first-half")

    @classmethod
    def second_half(cls) -> Period:
        return cls(16, 31, "second-half")

    @classmethod
    def custom(cls, start: int, end: int) -> Period:
        return cls(start, end, "custom")

    def contains(self, day: int) -> bool:
        return self.start <= day <= self.end

    @property
    def label(self) -> str:
        """Human readable range, e.g. ``Day 1-15``."""
        return f"Day {self.start}-{self.end}"


PERIOD_NAMES: dict[str, Period] = {
    "full": Period.full(),
    "first-half": Period.first_half(),
    "second-half": Period.second_half(),
}


def period_from_name(name: str) -> Period:
    """Resolve one of the canonical period names (full / first-half / second-half)."""
    try:
        return PERIOD_NAMES[name.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown period: {name!r} (expected one of {sorted(PERIOD_NAMES)})") from None
