"""Employee Schemas — Pydantic models for the upstream wire format and the inbound API.

Invariants:
    - Employee is frozen: a fetched record is never mutated after unwrapping
    - Employee reads and writes the upstream field names (employee_name, ...) via aliases
    - EmployeeCreate: name/title stripped and non-blank, salary >= 1, 16 <= age <= 75
    - DeleteEmployeeRequest carries a name only — the upstream delete contract is name-keyed
    - Envelope[T].data is None when upstream omitted it; callers decide if that is a violation

Design Decisions:
    - Generic Envelope[T] over per-endpoint wrappers: one parametrized model unwraps
      list, single-record and boolean payloads without reflection
    - Employee does not re-validate ranges: upstream asserted them at creation time
    - field_validator for side-effect-free transforms (strip) — keeps models pure
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class Employee(BaseModel):
    """Employee record as returned by upstream."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str = Field(alias="employee_name")
    salary: int = Field(alias="employee_salary")
    age: int = Field(alias="employee_age")
    title: str = Field(alias="employee_title")
    email: str | None = Field(None, alias="employee_email")


class EmployeeCreate(BaseModel):
    """Employee creation — validated at the inbound edge, forwarded as-is."""
    name: str = Field(min_length=1)
    salary: int = Field(ge=1)
    age: int = Field(ge=16, le=75)
    title: str = Field(min_length=1)

    @field_validator("name", "title")
    @classmethod
    def strip_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class DeleteEmployeeRequest(BaseModel):
    """Upstream delete body."""
    name: str


class Envelope(BaseModel, Generic[T]):
    """Upstream response wrapper: payload plus optional status metadata."""
    data: T | None = None
    status: str | None = None
    error: str | None = None
