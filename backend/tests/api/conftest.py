"""API test fixtures — FastAPI TestClient with the employee service overridden.

Invariants:
    - get_employee_service overridden per test; overrides cleared afterwards
    - Lifespan is not entered: no upstream client is created for route tests

Design Decisions:
    - raise_server_exceptions=False: the catch-all handler's 500 response is
      asserted instead of the exception surfacing in the test
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from employee_api.api.routes.employees import get_employee_service
from employee_api.main import app
from employee_api.services.employee_service import EmployeeService


@pytest.fixture
def service():
    """Autospecced EmployeeService; configure return values per test."""
    return MagicMock(spec=EmployeeService)


@pytest.fixture
def api(service):
    app.dependency_overrides[get_employee_service] = lambda: service
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
