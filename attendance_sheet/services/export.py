from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..models.attendance import STAT_FIELDS, Employee
from ..models.config_models import DEFAULT_PROFILE, IngestProfile
from ..models.period import Period
from .aggregator import employee_stats

"""Tabular export of per-employee statistics.

Read-only over the Employee set: one row per employee with the counters for
the selected period. Written as CSV, or XLSX through openpyxl.
"""

__all__ = [
    "EXPORT_COLUMNS",
    "stats_frame",
    "entries_frame",
    "write_stats",
]

EXPORT_COLUMNS = ["id", "name", "period", "days", *STAT_FIELDS, "leaves_with_reason"]


def stats_frame(
    employees: Sequence[Employee],
    period: Period,
    profile: IngestProfile = DEFAULT_PROFILE,
) -> pd.DataFrame:
    records = []
    for emp in employees:
        stats = employee_stats(emp, period, profile)
        records.append(
            {
                "id": emp.id,
                "name": emp.name,
                "period": period.label,
                "days": len(emp.daily_entries),
                **stats.as_dict(),
                "leaves_with_reason": stats.leaves_with_reason,
            }
        )
    return pd.DataFrame.from_records(records, columns=EXPORT_COLUMNS)


def entries_frame(employees: Sequence[Employee]) -> pd.DataFrame:
    """Long-form frame: one row per (employee, daily entry)."""
    records = [
        {"id": emp.id, "name": emp.name, "label": e.label, "status_code": e.status_code}
        for emp in employees
        for e in emp.daily_entries
    ]
    return pd.DataFrame.from_records(records, columns=["id", "name", "label", "status_code"])


def write_stats(frame: pd.DataFrame, path: Path, entries: pd.DataFrame | None = None) -> Path:
    """Write the frame as .csv or .xlsx (chosen by suffix).

    For .xlsx, `entries` (see `entries_frame`) is added as a second
    "entries" sheet. CSV holds one table, so `entries` is ignored there.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    suffix = path.suffix.lower()
    if suffix == ".xlsx":
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            frame.to_excel(writer, sheet_name="attendance", index=False)
            if entries is not None:
                entries.to_excel(writer, sheet_name="entries", index=False)
    elif suffix == ".csv":
        frame.to_csv(path, index=False, encoding="utf-8")
    else:
        raise ValueError(f"unsupported export format: {path.suffix} (use .csv or .xlsx)")
    return path
