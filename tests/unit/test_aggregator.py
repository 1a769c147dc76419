from __future__ import annotations

import pytest

from attendance_sheet.models.attendance import AttendanceStats, DailyEntry, Employee
from attendance_sheet.models.period import Period
from attendance_sheet.services.aggregator import aggregate, employee_stats

"""Unit tests for the status-table aggregation into AttendanceStats."""


def _entries(*codes: str) -> list[DailyEntry]:
    return [DailyEntry(str(i + 1), code) for i, code in enumerate(codes)]


def test_empty_sequence_gives_zero_stats():
    assert aggregate([]) == AttendanceStats()


@pytest.mark.parametrize(
    "code, expected",
    [
        ("P", {"present_count": 1}),
        ("A", {"absent_count": 1, "no_reason_absent_count": 1}),
        ("L", {"late_count": 1}),
        ("CL", {"present_count": 1, "absent_count": 1, "casual_leave_count": 1}),
        ("SL", {"present_count": 1, "absent_count": 1, "sick_leave_count": 1}),
        ("EL", {"early_leave_count": 1}),
        ("W.H", {}),
        ("", {}),
        ("X", {}),
    ],
)
def test_classification_table(code, expected):
    assert aggregate(_entries(code)) == AttendanceStats(**expected)


def test_casual_leave_counts_as_present_and_absent():
    stats = aggregate(_entries("CL"))
    assert stats.present_count == 1
    assert stats.absent_count == 1


def test_mixed_month():
    stats = aggregate(_entries("P", "P", "A", "L", "CL", "SL", "EL", "W.H", ""))
    assert stats == AttendanceStats(
        present_count=4,
        absent_count=3,
        late_count=1,
        casual_leave_count=1,
        sick_leave_count=1,
        early_leave_count=1,
        no_reason_absent_count=1,
    )
    assert stats.leaves_with_reason == 2


def test_lowercase_codes_are_not_classified():
    # statuses are normalized by the record builder, not the aggregator
    assert aggregate(_entries("p")) == AttendanceStats()


def test_custom_status_table():
    table = {"PRESENT": ("present",), "WFH": ("present",)}
    stats = aggregate(_entries("PRESENT", "WFH", "P"), table)
    assert stats.present_count == 2


def test_unknown_counter_in_table_is_rejected():
    with pytest.raises(ValueError):
        aggregate(_entries("P"), {"P": ("bogus",)})


def test_employee_stats_filters_by_period():
    emp = Employee("E001", "Ann", (DailyEntry("15", "CL"), DailyEntry("16", "A")))
    first = employee_stats(emp, Period.first_half())
    assert first.present_count == 1 and first.absent_count == 1
    assert first.no_reason_absent_count == 0
    assert employee_stats(emp).absent_count == 2


def test_stats_are_immutable():
    stats = aggregate(_entries("P"))
    with pytest.raises(AttributeError):
        stats.present_count = 5  # type: ignore[misc]
