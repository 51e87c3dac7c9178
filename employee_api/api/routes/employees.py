"""
Employee API Routes.

Thin routing over EmployeeService. Component errors propagate to the
handlers in employee_api.api.exception_handlers, which pick the status code.
Service calls are abandoned if the caller disconnects mid-request.

Fixed paths (highestSalary, topTenHighestEarningEmployeeNames) are declared
before /{employee_id} so they are not captured as ids.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from employee_api.api.deps import get_employee_service
from employee_api.api.disconnect import cancel_on_disconnect
from employee_api.api.schemas import (
    CreateEmployeeRequest,
    EmployeeResponse,
    ValidationErrorResponse,
)
from employee_api.components.employees import (
    TOP_EARNERS_LIMIT,
    CreateEmployeeInput,
    EmployeeService,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[EmployeeResponse])
async def get_all_employees(
    request: Request,
    service: EmployeeService = Depends(get_employee_service),
) -> list[EmployeeResponse]:
    """List every employee."""
    logger.debug("GET request to fetch all employees")
    employees = await cancel_on_disconnect(request, service.list_employees())
    return [EmployeeResponse.from_employee(e) for e in employees]


@router.get("/search/{search_string}", response_model=list[EmployeeResponse])
async def get_employees_by_name_search(
    request: Request,
    search_string: str,
    service: EmployeeService = Depends(get_employee_service),
) -> list[EmployeeResponse]:
    """Employees whose name contains search_string, ignoring case."""
    logger.debug("GET request to search employees by name: %s", search_string)
    matches = await cancel_on_disconnect(request, service.search_by_name(search_string))
    return [EmployeeResponse.from_employee(e) for e in matches]


@router.get("/highestSalary", response_model=int)
async def get_highest_salary_of_employees(
    request: Request,
    service: EmployeeService = Depends(get_employee_service),
) -> int:
    logger.debug("GET request to fetch highest salary")
    return await cancel_on_disconnect(request, service.highest_salary())


@router.get("/topTenHighestEarningEmployeeNames", response_model=list[str | None])
async def get_top_ten_highest_earning_employee_names(
    request: Request,
    service: EmployeeService = Depends(get_employee_service),
) -> list[str | None]:
    logger.debug("GET request to fetch top %d highest earning employees", TOP_EARNERS_LIMIT)
    return await cancel_on_disconnect(request, service.top_earning_names(TOP_EARNERS_LIMIT))


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee_by_id(
    request: Request,
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    logger.debug("GET request to fetch employee by id: %s", employee_id)
    employee = await cancel_on_disconnect(request, service.get_employee(employee_id))
    if employee is None:
        raise HTTPException(status_code=404, detail=f"Employee not found with id: {employee_id}")
    return EmployeeResponse.from_employee(employee)


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationErrorResponse}},
)
async def create_employee(
    request: Request,
    req: CreateEmployeeRequest,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeResponse:
    """Create an employee upstream. Input is validated before any upstream call."""
    logger.debug("POST request to create employee: %s", req.name)
    inp = CreateEmployeeInput(
        name=req.name,
        salary=req.salary,
        age=req.age,
        title=req.title,
    )
    employee = await cancel_on_disconnect(request, service.create_employee(inp))
    return EmployeeResponse.from_employee(employee)


@router.delete("/{employee_id}", response_model=str)
async def delete_employee_by_id(
    request: Request,
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
) -> str:
    """Delete an employee and return the deleted name."""
    logger.debug("DELETE request for employee id: %s", employee_id)
    return await cancel_on_disconnect(request, service.delete_employee(employee_id))
