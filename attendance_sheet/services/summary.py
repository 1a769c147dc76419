from __future__ import annotations

from ..models.attendance import AttendanceStats, Employee
from ..models.period import Period
from ..models.processing_result import ProcessingResult

"""Text rendering: the batch SUMMARY line and the per-employee report."""

__all__ = [
    "render_summary_line",
    "render_employee_report",
]


def _format_number(value: float) -> str:
    """Integers without decimals, tiny values without scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip('0').rstrip('.')
    return str(round(value, 3))


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY files={total}/{total} success={success} failed={failed}
    employees={employees} entries={entries} degraded={degraded}
    elapsed_sec={elapsed} throughput_rps={throughput}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_employees=10, total_entries=310,
        ...     degraded_files=0, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_rows_per_sec=155.0
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 employees=10 entries=310 degraded=0 elapsed_sec=2 throughput_rps=155'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"employees={result.total_employees} "
        f"entries={result.total_entries} "
        f"degraded={result.degraded_files} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )


def render_employee_report(employee: Employee, stats: AttendanceStats, period: Period) -> list[str]:
    """Performance tracking report lines for one employee.

    Absent days are reported as "days Leave"; leaves with reason are casual
    plus sick leave.
    """
    return [
        f"Performance tracking report ({period.name}: {period.label})",
        f"Employee name - {employee.name or 'Unnamed'}",
        f"Employee ID - {employee.id}",
        f"Attendance - {stats.absent_count} days Leave",
        f"Late attendance - {stats.late_count} days",
        f"Early Leave - {stats.early_leave_count}",
        f"Leaves (without reason) - {stats.no_reason_absent_count}",
        f"Leaves (with reason) - {stats.leaves_with_reason}",
        f"Present - {stats.present_count}",
    ]
