from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

"""Config dataclasses for the attendance sheet ingester.

The ingest engine is driven entirely by an `IngestProfile`: alias lists for
column resolution, header probes, day-column patterns, the status
classification table and the id fallback policy. Sheet variants differ only in
these tables, so one engine serves all of them.

`DEFAULT_PROFILE` holds the stock tables. `config.loader` builds a profile from
YAML overrides on top of it.
"""

__all__ = [
    "ColumnAliases",
    "HeaderProbes",
    "IngestProfile",
    "SheetSourceConfig",
    "AppConfig",
    "DEFAULT_PROFILE",
    "DEFAULT_STATUS_TABLE",
]


@dataclass(frozen=True)
class ColumnAliases:
    """Ordered alias lists per canonical column (compared lower-cased, trimmed).

    The first alias that matches a header cell wins.
    """
    id: tuple[str, ...] = ("id", "e.id", "eid", "e id", "emp id", "employee id", "employee_id", "employee")
    name: tuple[str, ...] = ("name", "employee name", "emp name", "full name")
    status: tuple[str, ...] = ("status", "attendance", "state")
    serial: tuple[str, ...] = ("sl", "sl.", "sl no", "sl. no", "sl no.", "sl. no.", "s.no", "s no", "serial", "serial no")
    date: tuple[str, ...] = ("date", "day")


@dataclass(frozen=True)
class HeaderProbes:
    """Regex probes (case-insensitive search) used to spot the header row."""
    name_pattern: str = r"name"
    id_pattern: str = r"\bid\b|_id\b|^e\.?id$|^emp\.?\s*id$|^employee$"


# status code -> counters incremented. CL/SL bump both present and absent.
DEFAULT_STATUS_TABLE: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "P": ("present",),
    "A": ("absent", "no_reason_absent"),
    "L": ("late",),
    "CL": ("present", "absent", "casual_leave"),
    "SL": ("present", "absent", "sick_leave"),
    "EL": ("early_leave",),
})


@dataclass(frozen=True)
class IngestProfile:
    """Data-driven tables for one sheet variant (column aliases, status table, id fallback)."""
    aliases: ColumnAliases = field(default_factory=ColumnAliases)
    header_probes: HeaderProbes = field(default_factory=HeaderProbes)
    # Bare integer headers ("7") and labelled day headers ("Day 7"). Group 1 = day number.
    day_column_patterns: tuple[str, ...] = (r"^([0-9]+)$", r"^day\s*([0-9]+)$")
    # read-only; a profile never changes classification after construction
    status_table: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: DEFAULT_STATUS_TABLE)
    # Columns consulted in order for the employee id; the generated id is the last resort.
    id_fallback: tuple[str, ...] = ("id", "serial")
    generated_id_prefix: str = "GEN-"

    def compiled_day_patterns(self) -> list[re.Pattern[str]]:
        return [re.compile(p, re.IGNORECASE) for p in self.day_column_patterns]


@dataclass(frozen=True)
class SheetSourceConfig:
    """Spreadsheet export location (used by the fetch collaborator only)."""
    sheet_id: str | None = None
    gid: str | None = None


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object for a batch run / CLI invocation."""
    source_directory: str  # directory scanned for exported files
    profile: IngestProfile = field(default_factory=IngestProfile)
    file_suffixes: tuple[str, ...] = (".csv",)
    default_period: str = "full"
    sheet: SheetSourceConfig = field(default_factory=SheetSourceConfig)


DEFAULT_PROFILE = IngestProfile()
