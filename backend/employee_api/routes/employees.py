"""
Employee API - Employee Route Handlers
=======================================

What:  The CRUD endpoints under /api/employees.
Why:   Exposes the employees collection over HTTP.
How:   Each handler receives already-parsed input, delegates to
       EmployeeService, and returns the result. Errors raised by the service
       are turned into status codes by the global handlers in main.py.

Route Inventory:
    POST    /api/employees                  create           → 201
    GET     /api/employees                  list all         → 200 (404 if empty)
    GET     /api/employees/_id/{object_id}  by generated _id → 200 / 404
    GET     /api/employees/{employee_id}    by custom ID     → 200 / 404
    PUT     /api/employees/{employee_id}    update           → 200 / 404
    DELETE  /api/employees/{employee_id}    delete           → 200 / 404

    Any input problem (missing field, rule violation, duplicate key,
    malformed ObjectId) answers 400.

    POST and GET also answer /api/employees/ directly (no 307 redirect);
    the trailing-slash variants are hidden from the OpenAPI docs.
"""

import logging
from typing import List

from fastapi import APIRouter

from employee_api.schemas.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    ErrorResponse,
    MessageResponse,
)
from employee_api.services.employee_service import employee_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/employees", tags=["Employees"])


@router.post(
    "",
    status_code=201,
    response_model=EmployeeResponse,
    responses={
        201: {"description": "Employee created", "model": EmployeeResponse},
        400: {"description": "Missing field, invalid value or duplicate", "model": ErrorResponse},
    },
    summary="Create an employee",
)
@router.post("/", status_code=201, response_model=EmployeeResponse, include_in_schema=False)
async def create_employee(payload: EmployeeCreate) -> EmployeeResponse:
    """
    Create a new employee record.

    All six fields (employee_id, name, email, job_title, age, date_hired)
    are required. employee_id and email must not already be in use.
    """
    return await employee_service.create_employee(payload)


@router.get(
    "",
    response_model=List[EmployeeResponse],
    responses={
        200: {"description": "All employees"},
        404: {"description": "No employees found", "model": ErrorResponse},
    },
    summary="List all employees",
)
@router.get("/", response_model=List[EmployeeResponse], include_in_schema=False)
async def list_employees() -> List[EmployeeResponse]:
    return await employee_service.list_employees()


@router.get(
    "/_id/{object_id}",
    response_model=EmployeeResponse,
    responses={
        200: {"description": "The employee", "model": EmployeeResponse},
        400: {"description": "Malformed ObjectId", "model": ErrorResponse},
        404: {"description": "Employee not found", "model": ErrorResponse},
    },
    summary="Get an employee by MongoDB _id",
)
async def get_employee_by_object_id(object_id: str) -> EmployeeResponse:
    """
    Look up an employee by the identifier MongoDB generated (`id` in responses).

    Equivalent to the lookup by employee_id below; it only uses a different key.
    """
    return await employee_service.get_employee_by_object_id(object_id)


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={
        200: {"description": "The employee", "model": EmployeeResponse},
        404: {"description": "Employee not found", "model": ErrorResponse},
    },
    summary="Get an employee by employee_id",
)
async def get_employee(employee_id: str) -> EmployeeResponse:
    return await employee_service.get_employee(employee_id)


@router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={
        200: {"description": "Updated employee", "model": EmployeeResponse},
        400: {"description": "Missing field, invalid value or duplicate", "model": ErrorResponse},
        404: {"description": "Employee not found", "model": ErrorResponse},
    },
    summary="Update an employee by employee_id",
)
async def update_employee(employee_id: str, payload: EmployeeUpdate) -> EmployeeResponse:
    """
    Replace name, email, job_title, age and date_hired of an employee.

    All five fields are required. The response is the document as stored
    after the update.
    """
    return await employee_service.update_employee(employee_id, payload)


@router.delete(
    "/{employee_id}",
    response_model=MessageResponse,
    responses={
        200: {"description": "Employee deleted", "model": MessageResponse},
        404: {"description": "Employee not found", "model": ErrorResponse},
    },
    summary="Delete an employee by employee_id",
)
async def delete_employee(employee_id: str) -> MessageResponse:
    message = await employee_service.delete_employee(employee_id)
    return MessageResponse(message=message)
