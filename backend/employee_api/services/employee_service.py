"""Employee Service — facade over the resilient client plus derived read operations.

Invariants:
    - Every read re-fetches from upstream (no caching, no local state)
    - Simple delegations propagate EmployeeAPIError unchanged
    - delete_by_id: fetch → delete by name, strictly sequential; a failure in either step
      short-circuits, and the composite is never retried as a whole
    - A delete that upstream reports as False raises NOT_FOUND referencing the id

Design Decisions:
    - Derived reads (search, max salary, top earners) are pure functions in core/employee_stats
    - The False-delete → NOT_FOUND mapping is upstream-driven policy, kept literal:
      "already deleted" and "never existed" are not distinguished
"""

import logging
from typing import Protocol

from employee_api.core.domain_types import DEFAULT_TOP_EARNERS, EmployeeId
from employee_api.core.employee_stats import (
    filter_by_name,
    highest_salary,
    top_earner_names,
)
from employee_api.core.errors import EmployeeAPIError, ErrorContext
from employee_api.schemas.employee import Employee, EmployeeCreate

logger = logging.getLogger(__name__)


class EmployeeClient(Protocol):
    """Contract for the upstream client — implemented by ResilientEmployeeClient."""
    def fetch_all(self) -> list[Employee]: ...
    def fetch_by_id(self, employee_id: EmployeeId | str) -> Employee: ...
    def create(self, request: EmployeeCreate) -> Employee: ...
    def delete_by_name(self, name: str) -> bool: ...


class EmployeeService:
    """Employee operations exposed to the API layer."""

    def __init__(self, client: EmployeeClient):
        self.client = client

    def get_all(self) -> list[Employee]:
        return self.client.fetch_all()

    def get_by_id(self, employee_id: EmployeeId | str) -> Employee:
        return self.client.fetch_by_id(employee_id)

    def search_by_name(self, fragment: str) -> list[Employee]:
        """Employees whose name contains fragment, case-insensitively."""
        matches = filter_by_name(self.client.fetch_all(), fragment)
        logger.debug(f"Name search '{fragment}' matched {len(matches)} employee(s)")
        return matches

    def max_salary(self) -> int:
        """Highest salary, or 0 when upstream has no employees."""
        return highest_salary(self.client.fetch_all())

    def top_earners(self, n: int = DEFAULT_TOP_EARNERS) -> list[str]:
        """Names of the n highest earners; ties keep upstream order."""
        return top_earner_names(self.client.fetch_all(), n)

    def create(self, request: EmployeeCreate) -> Employee:
        employee = self.client.create(request)
        logger.info(
            f"Created employee {employee.id}",
            extra={"operation": "create", "resource_id": employee.id},
        )
        return employee

    def delete_by_id(self, employee_id: EmployeeId | str) -> str:
        """Resolve the employee's name by id, then delete by that name.

        Returns the deleted employee's name.
        """
        employee = self.client.fetch_by_id(employee_id)
        name = employee.name
        if not self.client.delete_by_name(name):
            logger.warning(
                f"Upstream reported no deletion for employee {employee_id}",
                extra={"operation": "delete_by_id", "resource_id": str(employee_id)},
            )
            raise EmployeeAPIError.not_found(
                str(employee_id),
                f"Deletion failed for employee ID: {employee_id}",
                context=ErrorContext(operation="delete_by_id"),
            )
        logger.info(
            f"Successfully deleted employee with id: {employee_id}",
            extra={"operation": "delete_by_id", "resource_id": str(employee_id)},
        )
        return name
