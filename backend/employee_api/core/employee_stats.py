"""Employee Stats — pure read-side aggregation over an already-fetched collection.

Invariants:
    - Inputs are never mutated; results preserve the original fetch order where relevant
    - filter_by_name is a case-insensitive substring match; empty result is valid
    - highest_salary of an empty collection is EMPTY_MAX_SALARY (0), not an error
    - top_earner_names is a stable descending sort: salary ties keep fetch order

Design Decisions:
    - Structural EmployeeLike protocol: core stays free of pydantic/schema imports
    - casefold() over lower(): correct for non-ASCII names
"""

from collections.abc import Sequence
from typing import Protocol, TypeVar

from employee_api.core.domain_types import DEFAULT_TOP_EARNERS, EMPTY_MAX_SALARY


class EmployeeLike(Protocol):
    """Structural contract for anything with a read-only name and salary."""

    @property
    def name(self) -> str: ...

    @property
    def salary(self) -> int: ...


E = TypeVar("E", bound=EmployeeLike)


def filter_by_name(employees: Sequence[E], fragment: str) -> list[E]:
    """Employees whose name contains fragment, ignoring case."""
    needle = fragment.casefold()
    return [e for e in employees if needle in e.name.casefold()]


def highest_salary(employees: Sequence[EmployeeLike]) -> int:
    return max((e.salary for e in employees), default=EMPTY_MAX_SALARY)


def top_earner_names(
    employees: Sequence[EmployeeLike], n: int = DEFAULT_TOP_EARNERS,
) -> list[str]:
    """Names of the n best-paid employees, highest salary first.

    sorted() is stable with reverse=True, so equal salaries stay in fetch order.
    n <= 0 yields an empty list.
    """
    if n <= 0:
        return []
    ranked = sorted(employees, key=lambda e: e.salary, reverse=True)
    return [e.name for e in ranked[:n]]
