"""Tests for employee schemas — upstream aliases, immutability, inbound validation, envelope."""

import pytest
from pydantic import ValidationError

from employee_api.schemas.employee import (
    DeleteEmployeeRequest,
    Employee,
    EmployeeCreate,
    Envelope,
)


# -- Employee ------------------------------------------------------------------

def test_employee_reads_upstream_field_names(employee_record):
    emp = Employee.model_validate(employee_record(email="nikhil@company.com"))
    assert emp.name == "Nikhil"
    assert emp.salary == 50_000
    assert emp.age == 30
    assert emp.title == "Developer"
    assert emp.email == "nikhil@company.com"


def test_employee_serializes_with_upstream_names(employee_record):
    emp = Employee.model_validate(employee_record())
    dumped = emp.model_dump(by_alias=True)
    assert dumped["employee_name"] == "Nikhil"
    assert dumped["employee_salary"] == 50_000


def test_employee_is_frozen(employee_record):
    emp = Employee.model_validate(employee_record())
    with pytest.raises(ValidationError):
        emp.salary = 1


# -- EmployeeCreate ------------------------------------------------------------

def _create(**overrides):
    data = {"name": "Asha", "salary": 70_000, "age": 41, "title": "Lead"}
    data.update(overrides)
    return EmployeeCreate(**data)


def test_create_strips_name_and_title():
    req = _create(name="  Asha ", title=" Lead  ")
    assert req.name == "Asha"
    assert req.title == "Lead"


@pytest.mark.parametrize("field", ["name", "title"])
def test_create_rejects_blank_strings(field):
    with pytest.raises(ValidationError):
        _create(**{field: "   "})


def test_create_rejects_non_positive_salary():
    with pytest.raises(ValidationError):
        _create(salary=0)


@pytest.mark.parametrize("age", [15, 76])
def test_create_rejects_out_of_range_age(age):
    with pytest.raises(ValidationError):
        _create(age=age)


@pytest.mark.parametrize("age", [16, 75])
def test_create_accepts_age_bounds(age):
    assert _create(age=age).age == age


def test_create_dumps_upstream_body():
    assert _create().model_dump() == {
        "name": "Asha", "salary": 70_000, "age": 41, "title": "Lead",
    }


def test_delete_request_is_name_only():
    assert DeleteEmployeeRequest(name="Nikhil").model_dump() == {"name": "Nikhil"}


# -- Envelope ------------------------------------------------------------------

def test_envelope_unwraps_list(sample_records):
    env = Envelope[list[Employee]].model_validate(
        {"data": sample_records, "status": "Handled successfully."},
    )
    assert [e.id for e in env.data] == ["1", "2"]
    assert env.status == "Handled successfully."


def test_envelope_keeps_false_distinct_from_missing():
    assert Envelope[bool].model_validate({"data": False}).data is False
    assert Envelope[bool].model_validate({}).data is None


def test_envelope_rejects_wrong_payload_type():
    with pytest.raises(ValidationError):
        Envelope[Employee].model_validate({"data": [1, 2, 3]})
