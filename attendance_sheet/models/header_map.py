from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""HeaderMap model: canonical column -> source column index for one ingestion."""

__all__ = [
    "DayColumn",
    "HeaderMap",
    "SourceLayout",
]


class SourceLayout(Enum):
    """Shape of the source rows.

    - WIDE: one row per employee, one column per day
    - LONG: one row per employee-day, grouped on id
    - UNRESOLVED: no identifier column or no status/day columns (empty result)
    """
    WIDE = "wide"
    LONG = "long"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class DayColumn:
    index: int  # source column index
    label: str  # header cell, trimmed


@dataclass(frozen=True)
class HeaderMap:
    """Resolved header row. Unresolved columns are None (never an error)."""
    header_index: int  # index of the header row within the tokenized rows
    header_found: bool  # False when detection fell back to row 0
    headers: tuple[str, ...]
    id: int | None = None
    name: int | None = None
    status: int | None = None
    serial: int | None = None
    date: int | None = None
    day_columns: tuple[DayColumn, ...] = ()

    def column(self, field_name: str) -> int | None:
        """Look up a canonical column index by name (id/name/status/serial/date)."""
        return getattr(self, field_name, None)

    @property
    def has_identifier(self) -> bool:
        return self.id is not None or self.serial is not None

    @property
    def layout(self) -> SourceLayout:
        if not self.has_identifier:
            return SourceLayout.UNRESOLVED
        if self.status is None and self.day_columns:
            return SourceLayout.WIDE
        if self.status is None:
            return SourceLayout.UNRESOLVED
        return SourceLayout.LONG
