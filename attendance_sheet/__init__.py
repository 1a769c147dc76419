"""Attendance sheet ingester.

Turns a comma-separated spreadsheet export into per-employee attendance
records and categorized statistics over a day range.
"""

from .models.attendance import AttendanceStats, DailyEntry, Employee
from .models.period import Period, period_from_name
from .services.aggregator import aggregate, employee_stats
from .services.period_filter import filter_entries
from .services.pipeline import ingest_text
from .services.search import search_employees, select_employee

__all__ = [
    "AttendanceStats",
    "DailyEntry",
    "Employee",
    "Period",
    "period_from_name",
    "aggregate",
    "employee_stats",
    "filter_entries",
    "ingest_text",
    "search_employees",
    "select_employee",
]

__version__ = "0.1.0"
