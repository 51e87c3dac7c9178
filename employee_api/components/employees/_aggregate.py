"""
Employee aggregation - pure functions over a fetched collection.

Key behaviors:
- Name search is a case-insensitive substring match that keeps fetch order
- Employees with a null name never match a search
- Highest salary ignores null salaries and is 0 for an empty result
- Top earners sort by salary descending; ties keep fetch order
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import Employee

TOP_EARNERS_LIMIT = 10


def filter_by_name(employees: Iterable[Employee], query: str) -> list[Employee]:
    """Employees whose name contains query, ignoring case."""
    needle = query.lower()
    return [e for e in employees if e.name is not None and needle in e.name.lower()]


def max_salary(employees: Iterable[Employee]) -> int:
    """Highest non-null salary, or 0."""
    return max((e.salary for e in employees if e.salary is not None), default=0)


def rank_top_earners(employees: Sequence[Employee], n: int = TOP_EARNERS_LIMIT) -> list[str | None]:
    """Names of the n best paid employees, highest salary first."""
    if n <= 0:
        return []
    paid = [e for e in employees if e.salary is not None]
    # sorted() is stable, so equal salaries keep fetch order
    ranked = sorted(paid, key=lambda e: e.salary or 0, reverse=True)
    return [e.name for e in ranked[:n]]
