from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from ..models.attendance import STAT_FIELDS, AttendanceStats, DailyEntry, Employee
from ..models.config_models import DEFAULT_PROFILE, IngestProfile
from ..models.period import Period
from .period_filter import filter_entries

"""Attendance aggregator: fold daily entries into AttendanceStats.

Classification is looked up in the profile's status table (code -> counter
names). Codes missing from the table (W.H, blank, anything else) are ignored.
CL and SL count toward present AND absent as well as their leave counter.
"""

__all__ = [
    "aggregate",
    "employee_stats",
]


def _counter_field(counter: str) -> str:
    name = f"{counter}_count"
    if name not in STAT_FIELDS:
        raise ValueError(f"unknown attendance counter: {counter}")
    return name


def aggregate(
    entries: Iterable[DailyEntry],
    status_table: Mapping[str, Sequence[str]] | None = None,
) -> AttendanceStats:
    """Count entries per classification. Always returns a complete snapshot."""
    table = DEFAULT_PROFILE.status_table if status_table is None else status_table
    counts = dict.fromkeys(STAT_FIELDS, 0)
    for entry in entries:
        for counter in table.get(entry.status_code, ()):
            counts[_counter_field(counter)] += 1
    return AttendanceStats(**counts)


def employee_stats(
    employee: Employee,
    period: Period | None = None,
    profile: IngestProfile = DEFAULT_PROFILE,
) -> AttendanceStats:
    """Statistics for one employee over a period (full month when None)."""
    entries = filter_entries(employee.daily_entries, period or Period.full(), profile)
    return aggregate(entries, profile.status_table)
