"""Service test fixtures — scripted fake client at the EmployeeService boundary.

Invariants:
    - FakeEmployeeClient records every call as (operation, argument)
    - Scripted results are returned as-is; scripted exceptions are raised

Design Decisions:
    - Fake at the client Protocol, not the transport: service tests exercise
      orchestration only, retry/mapping is covered by the client tests
"""

import pytest

from employee_api.schemas.employee import Employee
from employee_api.services.employee_service import EmployeeService


class FakeEmployeeClient:
    """Implements the EmployeeClient protocol from scripted results."""

    def __init__(self, employees=(), by_id=None, delete_result=True, errors=None):
        self.employees = list(employees)
        self.by_id = dict(by_id or {})
        self.delete_result = delete_result
        self.errors = dict(errors or {})
        self.calls = []

    def _record(self, op, arg=None):
        self.calls.append((op, arg))
        if op in self.errors:
            raise self.errors[op]

    def fetch_all(self):
        self._record("fetch_all")
        return list(self.employees)

    def fetch_by_id(self, employee_id):
        self._record("fetch_by_id", employee_id)
        return self.by_id[employee_id]

    def create(self, request):
        self._record("create", request)
        return Employee(
            id="new", name=request.name, salary=request.salary,
            age=request.age, title=request.title,
        )

    def delete_by_name(self, name):
        self._record("delete_by_name", name)
        return self.delete_result

    @property
    def operations(self):
        return [op for op, _ in self.calls]


def make_employee(id, name, salary, age=30, title="Engineer"):
    return Employee(id=id, name=name, salary=salary, age=age, title=title)


@pytest.fixture
def make_service():
    """Build (service, fake_client) from FakeEmployeeClient kwargs."""
    def _make(**kwargs):
        fake = FakeEmployeeClient(**kwargs)
        return EmployeeService(fake), fake
    return _make


@pytest.fixture(name="make_employee")
def make_employee_fixture():
    return make_employee
