"""Root conftest — shared test configuration and employee fixtures."""

import os

import pytest

# Ensure tests never talk to a real upstream
os.environ.setdefault("EMPLOYEE_API_URL", "http://upstream.test/api/v1/employee")
os.environ.setdefault("LOG_FORMAT", "text")


def _employee_record(
    id="1", name="Nikhil", salary=50_000, age=30, title="Developer",
    email=None,
):
    """Employee as the upstream serializes it."""
    record = {
        "id": id,
        "employee_name": name,
        "employee_salary": salary,
        "employee_age": age,
        "employee_title": title,
    }
    if email is not None:
        record["employee_email"] = email
    return record


@pytest.fixture
def employee_record():
    """Factory for upstream employee dicts."""
    return _employee_record


@pytest.fixture
def sample_records():
    return [
        _employee_record("1", "Nikhil", 50_000, 30),
        _employee_record("2", "Rajat", 60_000, 35, "Manager"),
    ]
