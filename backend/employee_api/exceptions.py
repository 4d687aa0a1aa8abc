"""
Employee API - Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the outcomes a CRUD call can have.
Why:   Services raise these instead of returning status codes, so they stay
       free of HTTP concerns. Global handlers in main.py turn each type into
       the matching status code and a consistent JSON error body.
How:   Each exception carries a user-facing message and an optional context
       dict (logged, and for client errors returned as `details`).
Who:   Raised by the service layer; caught by the handlers in main.py.

Exception Hierarchy:
    EmployeeAPIError (base)
    ├── ValidationError              → 400 Bad Request (client can fix)
    │   └── DuplicateEmployeeError   → 400 Bad Request (unique index hit)
    ├── NotFoundError                → 404 Not Found
    └── DatabaseError                → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class EmployeeAPIError(Exception):
    """
    Base exception for all Employee API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(EmployeeAPIError):
    """
    Raised when client input fails validation.

    When:    A required field is missing or empty, a value breaks a schema
             rule, or a path parameter cannot be interpreted.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "All fields are required.",
            "details": {"missing": ["email", "age"]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DuplicateEmployeeError(ValidationError):
    """
    Raised when MongoDB rejects a write because of a unique index.

    What:    Another document already holds this employee_id or email.
    HTTP:    400 Bad Request (same status as the other input problems)

    Why a subclass:
        The database enforces uniqueness; we only translate its
        DuplicateKeyError. Keeping it a ValidationError means the 400 handler
        covers it without a separate registration.
    """

    def __init__(
        self,
        key: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        key = key or {}
        if key:
            fields = ", ".join(f"{k}={v!r}" for k, v in key.items())
            message = f"An employee with {fields} already exists"
        else:
            message = "An employee with the same unique value already exists"
        ctx = context or {}
        ctx["duplicate_key"] = key
        super().__init__(message=message, context=ctx)
        self.key = key


class NotFoundError(EmployeeAPIError):
    """
    Raised when a requested employee (or any employee at all) does not exist.

    HTTP:    404 Not Found

    Why a custom exception:
        Beanie returns None for a missing document, not an exception.
        The service converts None → NotFoundError so the handler can answer 404.
        The caller supplies the exact message because the wording differs per
        route (lookup by ID, update, delete, empty list).
    """

    def __init__(
        self,
        message: str = "The requested resource was not found",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = "employee"
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(EmployeeAPIError):
    """
    Raised when a database operation fails unexpectedly.

    When:    Server selection timeout, network error, authentication failure.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The driver's
        error text (hosts, database names) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
