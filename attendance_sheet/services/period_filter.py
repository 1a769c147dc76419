from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from ..models.attendance import DailyEntry
from ..models.config_models import DEFAULT_PROFILE, IngestProfile
from ..models.period import Period

"""Period filter: keep the entries whose day label falls inside a range."""

__all__ = [
    "day_number",
    "filter_entries",
]


_ASCII_DIGITS = re.compile(r"[0-9]+")


def day_number(label: str, patterns: Sequence[re.Pattern[str]] = ()) -> int | None:
    """Parse a day label into its day number.

    Bare ASCII integers ("7") always parse; labelled headers ("Day 7") parse
    when they match one of the given day-column patterns and the captured group
    is ASCII digits. Anything else ("+3", "1_5", non-ASCII digits) is None.
    """
    text = label.strip()
    if not text:
        return None
    if _ASCII_DIGITS.fullmatch(text):
        return int(text)
    for pattern in patterns:
        m = pattern.match(text)
        if m and m.groups() and m.group(1) and _ASCII_DIGITS.fullmatch(m.group(1)):
            return int(m.group(1))
    return None


def filter_entries(
    entries: Iterable[DailyEntry],
    period: Period,
    profile: IngestProfile = DEFAULT_PROFILE,
) -> tuple[DailyEntry, ...]:
    """Return the subsequence of entries inside `period` (inclusive).

    Entries without a parseable day label are excluded.
    """
    patterns = profile.compiled_day_patterns()
    kept: list[DailyEntry] = []
    for entry in entries:
        day = day_number(entry.label, patterns)
        if day is not None and period.contains(day):
            kept.append(entry)
    return tuple(kept)
