"""
Employee API - Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract for the employee routes.
Why:   Input validation, response serialization and OpenAPI docs from one place.
How:   FastAPI validates request bodies against these models and serializes
       return values through the response models.

Design Decision - why every request field is Optional:
    The API answers a request with missing fields with a single, friendly
    message ("All fields are required.") instead of one Pydantic error per
    field. So the request models accept absent values, and the service calls
    `missing_fields()` before touching the database. Any value that IS present
    is still checked against the document rules (length, email shape, allowed
    job titles, age range) while the body is parsed.

    Schemas stay separate from the Beanie Document because:
    1. Request bodies must tolerate absent fields; documents must not
    2. Responses expose `id` as a plain string instead of an ObjectId
    3. The update body deliberately has no `employee_id`
"""

import re
from datetime import datetime, timezone
from typing import Any, ClassVar, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from employee_api.models.employee import (
    AGE_MAX,
    AGE_MIN,
    EMAIL_PATTERN,
    JOB_TITLES,
    NAME_MIN_LENGTH,
)

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to timezone-aware UTC.

    Naive values are taken to be UTC already: that is how BSON stores dates,
    and how a date-only input such as "2024-07-03" is read.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Request Models - What the client sends in the body
# ══════════════════════════════════════════════════════════════════════════


class EmployeeUpdate(BaseModel):
    """
    What:  Body of PUT /api/employees/{employee_id}.
    Why no employee_id: The path already identifies the document, and the
           custom identifier is not something an update changes.
    """

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = (
        "name",
        "email",
        "job_title",
        "age",
        "date_hired",
    )

    name: Optional[str] = Field(default=None, description="Full name (min 3 characters)")
    email: Optional[str] = Field(default=None, description="Work email address")
    job_title: Optional[str] = Field(
        default=None,
        description=f"One of: {', '.join(JOB_TITLES)}",
    )
    age: Optional[int] = Field(default=None, description=f"Age ({AGE_MIN}-{AGE_MAX})")
    date_hired: Optional[datetime] = Field(
        default=None,
        description="Hiring date (ISO 8601, e.g. 2024-07-03)",
    )

    @field_validator("name", "email", "job_title", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """An empty or whitespace-only string counts as 'not provided'."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) < NAME_MIN_LENGTH:
            raise ValueError(
                f"Employee Name must be at least {NAME_MIN_LENGTH} characters long"
            )
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not _EMAIL_RE.search(v):
            raise ValueError("Please use a valid email address")
        return v

    @field_validator("job_title")
    @classmethod
    def validate_job_title(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in JOB_TITLES:
            raise ValueError(
                f"'{v}' is not a valid job title. Must be one of: {', '.join(JOB_TITLES)}"
            )
        return v

    @field_validator("age")
    @classmethod
    def validate_age(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            return v
        if v < AGE_MIN:
            raise ValueError(f"Employee age must be at least {AGE_MIN}")
        if v > AGE_MAX:
            raise ValueError(f"Employee age must not exceed {AGE_MAX}")
        return v

    @field_validator("date_hired")
    @classmethod
    def date_hired_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Stored and echoed as aware UTC, whatever offset the client sent."""
        return as_utc(v)

    def missing_fields(self) -> List[str]:
        """Names of required fields that were absent, null or blank."""
        return [name for name in self.REQUIRED_FIELDS if getattr(self, name) is None]

    def document_fields(self) -> dict:
        """Field values to write to MongoDB (only the declared fields)."""
        return {name: getattr(self, name) for name in self.REQUIRED_FIELDS}


class EmployeeCreate(EmployeeUpdate):
    """
    What:  Body of POST /api/employees.
    Adds:  employee_id, the custom identifier every other route uses.
    """

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("employee_id",) + EmployeeUpdate.REQUIRED_FIELDS

    employee_id: Optional[str] = Field(default=None, description="Custom employee identifier")

    @field_validator("employee_id", mode="before")
    @classmethod
    def blank_employee_id_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models - What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class EmployeeResponse(BaseModel):
    """
    What:  Full representation of one employee.
    Who:   Returned by create, read, update routes (and as list items).

    `id` is the MongoDB-generated ObjectId as a 24-character hex string.
    """

    id: str = Field(description="MongoDB-generated identifier (_id)")
    employee_id: str = Field(description="Custom employee identifier")
    name: str = Field(description="Full name")
    email: Optional[str] = Field(default=None, description="Work email address")
    job_title: str = Field(description="Job title")
    age: int = Field(description="Age in years")
    date_hired: datetime = Field(description="Hiring date (UTC)")

    @field_validator("date_hired")
    @classmethod
    def date_hired_to_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @classmethod
    def from_document(cls, doc: Any) -> "EmployeeResponse":
        """Build the response from a Beanie Employee (or any object with the same attributes)."""
        return cls(
            id=str(doc.id),
            employee_id=doc.employee_id,
            name=doc.name,
            email=doc.email,
            job_title=doc.job_title,
            age=doc.age,
            date_hired=doc.date_hired,
        )


class MessageResponse(BaseModel):
    """Plain confirmation message, e.g. after a delete."""

    message: str = Field(description="Human-readable result")


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Employee with ID emp999 not found",
            "details": null,
            "request_id": "3f2a9c1e"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response.
    Who:   Returned by GET /health for monitoring and container health checks.
    """

    status: str = Field(description="Healthy or Unhealthy")
    timestamp: datetime = Field(description="Server time of the check (UTC)")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
