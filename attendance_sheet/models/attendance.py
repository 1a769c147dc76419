from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

"""Attendance domain models.

These are the value objects produced by one ingestion pass. Everything here is
frozen: a new ingestion builds a fresh Employee set instead of patching the
previous one, and statistics are recomputed for every period/selection.
"""

__all__ = [
    "DailyEntry",
    "Employee",
    "AttendanceStats",
    "STAT_FIELDS",
]


@dataclass(frozen=True)
class DailyEntry:
    """One day of attendance for one employee.

    The status code is normalized (trimmed + upper-cased) by the record builder
    before the entry is created.
    """
    label: str  # day-column header (wide) or date cell (long)
    status_code: str


@dataclass(frozen=True)
class Employee:
    """Employee record reconstructed from the source rows.

    `daily_entries` keeps source order; an employee with no entries is valid.
    """
    id: str
    name: str
    daily_entries: tuple[DailyEntry, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "daily_entries": [asdict(e) for e in self.daily_entries],
        }


@dataclass(frozen=True)
class AttendanceStats:
    """Counters derived from a (period-filtered) sequence of daily entries."""
    present_count: int = 0
    absent_count: int = 0
    late_count: int = 0
    casual_leave_count: int = 0
    sick_leave_count: int = 0
    early_leave_count: int = 0
    no_reason_absent_count: int = 0

    @property
    def leaves_with_reason(self) -> int:
        """Casual + sick leave days (the report's "leaves with reason" line)."""
        return self.casual_leave_count + self.sick_leave_count

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


# Counter names accepted by the classification table, in report order.
STAT_FIELDS: tuple[str, ...] = tuple(AttendanceStats.__dataclass_fields__.keys())
