"""Employee Routes — REST surface over EmployeeService.

Invariants:
    - Fixed paths (/search, /highestSalary, /topTenHighestEarningEmployeeNames)
      registered before /{employee_id} so they are never captured as ids
    - Create bodies validated by EmployeeCreate before reaching the service
    - EmployeeAPIError propagates to the global handler (api/error_handlers.py)

Design Decisions:
    - Plain def handlers: the upstream client blocks, FastAPI runs these in its threadpool
    - Service provided via Depends(get_employee_service): tests override it
"""

from fastapi import APIRouter, Depends, status

from employee_api.core.domain_types import DEFAULT_TOP_EARNERS
from employee_api.infrastructure.employee_client import (
    ResilientEmployeeClient,
    get_employee_client,
)
from employee_api.schemas.employee import Employee, EmployeeCreate
from employee_api.services.employee_service import EmployeeService

router = APIRouter(prefix="/api/v1/employees", tags=["employees"])


def get_employee_service(
    client: ResilientEmployeeClient = Depends(get_employee_client),
) -> EmployeeService:
    """Facade over the process-wide client."""
    return EmployeeService(client)


@router.get("", response_model=list[Employee])
def get_all_employees(service: EmployeeService = Depends(get_employee_service)):
    return service.get_all()


@router.get("/search/{search_string}", response_model=list[Employee])
def search_employees_by_name(
    search_string: str, service: EmployeeService = Depends(get_employee_service),
):
    """Case-insensitive substring search on employee names."""
    return service.search_by_name(search_string)


@router.get("/highestSalary", response_model=int)
def get_highest_salary(service: EmployeeService = Depends(get_employee_service)):
    """Highest salary across all employees; 0 when there are none."""
    return service.max_salary()


@router.get("/topTenHighestEarningEmployeeNames", response_model=list[str])
def get_top_ten_earner_names(
    service: EmployeeService = Depends(get_employee_service),
):
    return service.top_earners(DEFAULT_TOP_EARNERS)


@router.get("/{employee_id}", response_model=Employee)
def get_employee(
    employee_id: str, service: EmployeeService = Depends(get_employee_service),
):
    return service.get_by_id(employee_id)


@router.post(
    "", response_model=Employee, status_code=status.HTTP_201_CREATED,
)
def create_employee(
    body: EmployeeCreate, service: EmployeeService = Depends(get_employee_service),
):
    return service.create(body)


@router.delete("/{employee_id}", response_model=str)
def delete_employee(
    employee_id: str, service: EmployeeService = Depends(get_employee_service),
):
    """Delete by id; returns the deleted employee's name."""
    return service.delete_by_id(employee_id)
