from __future__ import annotations

from collections.abc import Sequence

from ..models.attendance import Employee

"""Query helpers over the last ingested Employee set.

Selection state (query, selected id) is passed in explicitly; nothing here
holds state between calls.
"""

__all__ = [
    "search_employees",
    "select_employee",
]

SEARCH_FIELDS = ("id", "name")


def search_employees(
    employees: Sequence[Employee],
    query: str | None,
    fields: Sequence[str] = SEARCH_FIELDS,
) -> tuple[Employee, ...]:
    """Case-insensitive substring match on id and/or name.

    An empty query returns every employee in input order.
    """
    q = (query or "").lower()
    if not q:
        return tuple(employees)
    return tuple(
        e for e in employees
        if any(q in (getattr(e, f) or "").lower() for f in fields)
    )


def select_employee(employees: Sequence[Employee], employee_id: str | None) -> Employee | None:
    if not employee_id:
        return None
    for e in employees:
        if e.id == employee_id:
            return e
    return None
