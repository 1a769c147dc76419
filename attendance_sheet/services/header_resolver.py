from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from ..csvtext.tokenizer import RawRow
from ..models.config_models import DEFAULT_PROFILE, IngestProfile
from ..models.header_map import DayColumn, HeaderMap

"""Header row detection and column alias resolution.

The header row is the first row holding both a name-like cell and an
identifier-like cell. Rows above it are preamble (titles, report dates) and
are discarded. When no row qualifies, row 0 is used.
"""

__all__ = [
    "find_header_row",
    "resolve_columns",
    "resolve_header",
]

logger = logging.getLogger(__name__)

_ALIAS_FIELDS = ("id", "name", "status", "serial", "date")


def find_header_row(rows: Sequence[RawRow], profile: IngestProfile = DEFAULT_PROFILE) -> int | None:
    """Return the index of the first header-like row, or None."""
    name_probe = re.compile(profile.header_probes.name_pattern, re.IGNORECASE)
    id_probe = re.compile(profile.header_probes.id_pattern, re.IGNORECASE)
    for idx, row in enumerate(rows):
        cells = [c.strip() for c in row]
        has_name = any(name_probe.search(c) for c in cells if c)
        has_id = any(id_probe.search(c) for c in cells if c)
        if has_name and has_id:
            return idx
    return None


def _match_alias(headers: Sequence[str], aliases: Sequence[str]) -> int | None:
    lowered = [h.strip().lower() for h in headers]
    for alias in aliases:
        target = alias.strip().lower()
        for idx, cell in enumerate(lowered):
            if cell == target:
                return idx
    return None


def resolve_columns(
    headers: Sequence[str],
    header_index: int = 0,
    header_found: bool = True,
    profile: IngestProfile = DEFAULT_PROFILE,
) -> HeaderMap:
    """Build a HeaderMap from one header row."""
    resolved: dict[str, int | None] = {}
    for field_name in _ALIAS_FIELDS:
        resolved[field_name] = _match_alias(headers, getattr(profile.aliases, field_name))

    patterns = profile.compiled_day_patterns()
    day_columns: list[DayColumn] = []
    for idx, cell in enumerate(headers):
        label = cell.strip()
        if label and any(p.match(label) for p in patterns):
            day_columns.append(DayColumn(index=idx, label=label))

    return HeaderMap(
        header_index=header_index,
        header_found=header_found,
        headers=tuple(h.strip() for h in headers),
        day_columns=tuple(day_columns),
        **resolved,
    )


def resolve_header(rows: Sequence[RawRow], profile: IngestProfile = DEFAULT_PROFILE) -> HeaderMap | None:
    """Detect the header row and resolve its columns.

    Returns None only for an empty row list.
    """
    if not rows:
        return None
    found = find_header_row(rows, profile)
    header_index = found if found is not None else 0
    header_map = resolve_columns(rows[header_index], header_index, found is not None, profile)
    logger.debug(
        "header row=%d found=%s id=%s name=%s status=%s serial=%s days=%d",
        header_index,
        header_map.header_found,
        header_map.id,
        header_map.name,
        header_map.status,
        header_map.serial,
        len(header_map.day_columns),
    )
    return header_map
