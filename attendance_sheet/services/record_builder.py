from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..csvtext.tokenizer import RawRow
from ..models.attendance import DailyEntry, Employee
from ..models.config_models import DEFAULT_PROFILE, IngestProfile
from ..models.header_map import HeaderMap, SourceLayout

"""Row -> Employee record builder.

Two source shapes are supported:

WIDE (no status column, at least one day column)
    one row per employee, one DailyEntry per day column.
LONG (everything else with a status column)
    one row per employee-day; rows are grouped on the derived id.

Ids come from the configured fallback columns (primary id, then serial
number) and, when all of them are blank, a positional ``GEN-<n>`` id where
``n`` is the 1-based data row index. Rows with no id source and no name are
dropped. Employees keep first-appearance order; a repeated id merges into the
first-seen employee.
"""

__all__ = [
    "normalize_status",
    "derive_id",
    "build_employees",
]

logger = logging.getLogger(__name__)


def normalize_status(value: str | None) -> str:
    return (value or "").strip().upper()


def _cell(row: RawRow, index: int | None) -> str:
    if index is None or index >= len(row):
        return ""
    return row[index].strip()


def derive_id(row: RawRow, header_map: HeaderMap, row_number: int, profile: IngestProfile = DEFAULT_PROFILE) -> str | None:
    """Derive the employee id for one data row.

    Returns None when no id source is present AND the name is blank (row is
    dropped by the caller).
    """
    for column_name in profile.id_fallback:
        value = _cell(row, header_map.column(column_name))
        if value:
            return value
    if not _cell(row, header_map.name):
        return None
    return f"{profile.generated_id_prefix}{row_number}"


@dataclass
class _Draft:
    id: str
    name: str
    entries: list[DailyEntry] = field(default_factory=list)

    def freeze(self) -> Employee:
        return Employee(id=self.id, name=self.name, daily_entries=tuple(self.entries))


def _wide_entries(row: RawRow, header_map: HeaderMap) -> list[DailyEntry]:
    return [
        DailyEntry(label=col.label, status_code=normalize_status(_cell(row, col.index)))
        for col in header_map.day_columns
    ]


def _long_entry(row: RawRow, header_map: HeaderMap) -> DailyEntry:
    return DailyEntry(
        label=_cell(row, header_map.date),
        status_code=normalize_status(_cell(row, header_map.status)),
    )


def build_employees(
    data_rows: Sequence[RawRow],
    header_map: HeaderMap,
    profile: IngestProfile = DEFAULT_PROFILE,
) -> tuple[Employee, ...]:
    """Build the ordered Employee set from the rows following the header."""
    layout = header_map.layout
    if layout is SourceLayout.UNRESOLVED:
        return ()

    drafts: dict[str, _Draft] = {}
    dropped = 0
    for idx, row in enumerate(data_rows):
        emp_id = derive_id(row, header_map, idx + 1, profile)
        if emp_id is None:
            dropped += 1
            continue
        draft = drafts.get(emp_id)
        if draft is None:
            draft = _Draft(id=emp_id, name=_cell(row, header_map.name))
            drafts[emp_id] = draft
        if layout is SourceLayout.WIDE:
            draft.entries.extend(_wide_entries(row, header_map))
        else:
            draft.entries.append(_long_entry(row, header_map))

    if dropped:
        logger.debug("dropped %d rows without id or name", dropped)
    return tuple(d.freeze() for d in drafts.values())
