"""
Employee API - Employee Beanie Document
========================================

What:  ODM model representing one document in the `employees` collection.
Why:   Maps Python objects to MongoDB documents with Pydantic validation.
How:   Inherits from Beanie's Document; init_beanie() binds it to the
       collection and creates the indexes declared in Settings.
Who:   Used by EmployeeService for every CRUD operation and by the seed CLI.

Document Design:
    - _id: ObjectId generated by MongoDB (exposed by Beanie as `id`)
    - employee_id: Our own identifier, the one the API routes use.
      Two identifiers exist on purpose: `_id` is what the database hands out,
      `employee_id` is what an HR system already has. Both can be looked up.
    - email: Optional at document level, but the API requires it on create
      and update. Unique when present.
    - job_title: Restricted to a fixed list of titles.
    - age: Bounded to 19..120.

Uniqueness:
    Enforced by MongoDB through unique indexes, not by a read-before-write
    check (which would race between two concurrent requests). A violation
    surfaces as pymongo's DuplicateKeyError, which the service translates.
"""

from datetime import datetime
from typing import Literal, Optional, get_args

from beanie import Document
from pydantic import Field
from pymongo import ASCENDING, IndexModel


# ── Field Rules ───────────────────────────────────────────────────────────
# Shared with schemas/employee.py so request validation and document
# validation can never disagree.
JobTitle = Literal["Software Developer", "Product Manager", "Graphic Designer", "HR"]
JOB_TITLES = get_args(JobTitle)

# Loose check: something@something.something
EMAIL_PATTERN = r"\S+@\S+\.\S+"

NAME_MIN_LENGTH = 3
AGE_MIN = 19
AGE_MAX = 120


class Employee(Document):
    """
    Represents an employee record in MongoDB.

    Query Patterns:
        - List all:            find({})                     → collection scan
        - By custom ID:        find_one({"employee_id": x}) → unique index
        - By generated ID:     find_one({"_id": ObjectId})  → _id index
        - Update / delete:     same filter as "by custom ID"
    """

    # ── Custom Identifier ─────────────────────────────────────────────────
    # What: Business identifier like "emp123"
    # Why unique index: Routes address employees by this value
    employee_id: str = Field(description="Custom employee identifier (unique)")

    # ── Personal Data ─────────────────────────────────────────────────────
    name: str = Field(min_length=NAME_MIN_LENGTH, description="Full name")

    # Why Optional: Older documents (and the seed example) may lack an email
    email: Optional[str] = Field(
        default=None,
        pattern=EMAIL_PATTERN,
        description="Work email address (unique when present)",
    )

    # ── Employment Data ───────────────────────────────────────────────────
    job_title: JobTitle = Field(description="One of the allowed job titles")
    age: int = Field(ge=AGE_MIN, le=AGE_MAX, description="Age in years")
    date_hired: datetime = Field(description="Hiring date")

    class Settings:
        name = "employees"
        indexes = [
            IndexModel([("employee_id", ASCENDING)], unique=True, name="uniq_employee_id"),
            # Partial (not sparse): Beanie writes a missing email as null, and a
            # sparse index would still index every null and reject the second one
            IndexModel(
                [("email", ASCENDING)],
                unique=True,
                partialFilterExpression={"email": {"$type": "string"}},
                name="uniq_email",
            ),
        ]

    def introduction(self) -> str:
        """Return the one-line self introduction used by the seed CLI."""
        if self.name:
            return f"Hello, my name is {self.name} and I am an {self.job_title}"
        return "I don't have a name"

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return (
            f"<Employee(id={self.id}, employee_id='{self.employee_id}', "
            f"job_title='{self.job_title}')>"
        )
