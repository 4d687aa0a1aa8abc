"""
Employee API - Employee Service (CRUD Logic)
=============================================

What:  The five CRUD operations (plus lookup by generated ID) on employees.
Why:   Keeps route handlers thin and the CRUD rules testable without HTTP.
How:   Each method is the same short sequence:
         1. check that required input is present
         2. make ONE Beanie call
         3. turn "nothing matched" into NotFoundError, driver errors into
            DuplicateEmployeeError / DatabaseError
Who:   Called by the handlers in routes/employees.py.

Beanie call per operation (MongoDB command underneath):
    create_employee            Employee(...).insert()            insertOne
    list_employees             Employee.find_all().to_list()     find {}
    get_employee               Employee.find_one(employee_id=x)  findOne
    get_employee_by_object_id  Employee.get(ObjectId)            findOne by _id
    update_employee            find_one(...).update($set, NEW)   findOneAndUpdate
    delete_employee            find_one(...).delete()            deleteOne

Design Decision:
    EmployeeService is stateless - Beanie binds Employee to its collection at
    startup, so there is no session to pass around. One module-level instance
    serves every request.
"""

import logging
from typing import List

from beanie import PydanticObjectId
from beanie.odm.queries.update import UpdateResponse
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError

from employee_api.exceptions import (
    DatabaseError,
    DuplicateEmployeeError,
    NotFoundError,
    ValidationError,
)
from employee_api.models.employee import Employee
from employee_api.schemas.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
)

logger = logging.getLogger(__name__)

ALL_FIELDS_REQUIRED = "All fields are required."


def _require_fields(payload: EmployeeUpdate) -> None:
    """Raise ValidationError listing every required field that is missing."""
    missing = payload.missing_fields()
    if missing:
        raise ValidationError(message=ALL_FIELDS_REQUIRED, context={"missing": missing})


def _duplicate_error(e: DuplicateKeyError) -> DuplicateEmployeeError:
    """
    Translate pymongo's DuplicateKeyError into our 400-level error.

    `details["keyValue"]` names the offending field and value,
    e.g. {"employee_id": "emp123"}.
    """
    key = (e.details or {}).get("keyValue") or {}
    return DuplicateEmployeeError(key=key)


class EmployeeService:
    """
    CRUD operations for the `employees` collection.

    Error Handling Strategy:
        NotFoundError and ValidationError are raised by us and propagate as-is.
        DuplicateKeyError from MongoDB becomes DuplicateEmployeeError (400).
        Any other driver error becomes DatabaseError (500); the original error
        is logged server-side, never returned to the client.
    """

    async def create_employee(self, payload: EmployeeCreate) -> EmployeeResponse:
        """
        Insert a new employee.

        Raises:
            ValidationError: A required field is missing (→ 400)
            DuplicateEmployeeError: employee_id or email already used (→ 400)
            DatabaseError: Insert failed for any other reason (→ 500)
        """
        _require_fields(payload)

        employee = Employee(**payload.document_fields())
        try:
            await employee.insert()
        except DuplicateKeyError as e:
            logger.warning("Duplicate employee rejected: %s", e.details)
            raise _duplicate_error(e)
        except PyMongoError as e:
            logger.error("Database error creating employee %s: %s", payload.employee_id, str(e))
            raise DatabaseError(
                message="Could not create the employee. Please try again.",
                context={"employee_id": payload.employee_id},
            )

        logger.info("Employee created: %s (_id=%s)", employee.employee_id, employee.id)
        return EmployeeResponse.from_document(employee)

    async def list_employees(self) -> List[EmployeeResponse]:
        """
        Return every employee.

        Raises:
            NotFoundError: The collection is empty (→ 404)
        """
        try:
            employees = await Employee.find_all().to_list()
        except PyMongoError as e:
            logger.error("Database error listing employees: %s", str(e))
            raise DatabaseError(message="Could not retrieve employees. Please try again.")

        if not employees:
            raise NotFoundError(message="No employees found")

        logger.debug("Listed %d employees", len(employees))
        return [EmployeeResponse.from_document(e) for e in employees]

    async def get_employee(self, employee_id: str) -> EmployeeResponse:
        """
        Fetch one employee by the custom `employee_id` field.

        Raises:
            NotFoundError: No document has this employee_id (→ 404)
        """
        try:
            employee = await Employee.find_one(Employee.employee_id == employee_id)
        except PyMongoError as e:
            logger.error("Database error fetching employee %s: %s", employee_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the employee. Please try again.",
                context={"employee_id": employee_id},
            )

        if employee is None:
            raise NotFoundError(
                message=f"Employee with ID {employee_id} not found",
                resource_id=employee_id,
            )

        logger.debug("Fetched employee %s", employee_id)
        return EmployeeResponse.from_document(employee)

    async def get_employee_by_object_id(self, object_id: str) -> EmployeeResponse:
        """
        Fetch one employee by the MongoDB-generated `_id`.

        Same outcome as get_employee, different key: useful when a client only
        holds the `id` returned by a previous response.

        Raises:
            ValidationError: object_id is not a 24-character hex ObjectId (→ 400)
            NotFoundError: No document has this _id (→ 404)
        """
        if not ObjectId.is_valid(object_id):
            raise ValidationError(
                message=f"'{object_id}' is not a valid ObjectId",
                field="object_id",
            )

        try:
            employee = await Employee.get(PydanticObjectId(object_id))
        except PyMongoError as e:
            logger.error("Database error fetching employee _id=%s: %s", object_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the employee. Please try again.",
                context={"object_id": object_id},
            )

        if employee is None:
            raise NotFoundError(
                message=f"Employee with _id {object_id} not found",
                resource_id=object_id,
            )

        return EmployeeResponse.from_document(employee)

    async def update_employee(
        self, employee_id: str, payload: EmployeeUpdate
    ) -> EmployeeResponse:
        """
        Replace the mutable fields of an employee and return the updated document.

        How:  A single findOneAndUpdate with returnDocument=AFTER, so the
              response shows the stored state after the write.

        Raises:
            ValidationError: A required field is missing (→ 400)
            DuplicateEmployeeError: The new email belongs to someone else (→ 400)
            NotFoundError: No document has this employee_id (→ 404)
        """
        _require_fields(payload)

        try:
            updated = await Employee.find_one(Employee.employee_id == employee_id).update(
                {"$set": payload.document_fields()},
                response_type=UpdateResponse.NEW_DOCUMENT,
            )
        except DuplicateKeyError as e:
            logger.warning("Duplicate value rejected updating %s: %s", employee_id, e.details)
            raise _duplicate_error(e)
        except PyMongoError as e:
            logger.error("Database error updating employee %s: %s", employee_id, str(e))
            raise DatabaseError(
                message="Could not update the employee. Please try again.",
                context={"employee_id": employee_id},
            )

        if updated is None:
            raise NotFoundError(
                message=f"Employee with employee_id {employee_id} not found",
                resource_id=employee_id,
            )

        logger.info("Employee updated: %s", employee_id)
        return EmployeeResponse.from_document(updated)

    async def delete_employee(self, employee_id: str) -> str:
        """
        Delete an employee by `employee_id`.

        Returns:
            The confirmation message for the response body.

        Raises:
            NotFoundError: No document has this employee_id (→ 404)
        """
        try:
            result = await Employee.find_one(Employee.employee_id == employee_id).delete()
        except PyMongoError as e:
            logger.error("Database error deleting employee %s: %s", employee_id, str(e))
            raise DatabaseError(
                message="Could not delete the employee. Please try again.",
                context={"employee_id": employee_id},
            )

        if result is None or result.deleted_count == 0:
            raise NotFoundError(
                message=f"Employee with employee_id {employee_id} not found",
                resource_id=employee_id,
            )

        logger.info("Employee deleted: %s", employee_id)
        return f"Employee with employee_id {employee_id} deleted successfully"


# ── Singleton Instance ────────────────────────────────────────────────────
employee_service = EmployeeService()
