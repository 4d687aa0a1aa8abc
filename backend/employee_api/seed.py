"""
Employee API - Seed Command
============================

What:  Inserts one sample employee into the configured database.
Why:   Gives a fresh database something to read, update and delete, and shows
       the Document workflow (build → introduce → insert) outside of HTTP.
How:   Validates the options with the same schema the POST route uses,
       connects through database.init_db(), inserts, disconnects.

Usage:
    employee-api-seed
    employee-api-seed --employee-id emp124 --name "Sam Lee" --email sam@college.com \\
        --job-title HR --age 41 --date-hired 2023-01-09
    python -m employee_api.seed --help

Exit status:
    0  employee inserted
    1  invalid input, MONGO_URI missing, MongoDB unreachable or duplicate
"""

import asyncio
import logging

import click
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import DuplicateKeyError, PyMongoError

from employee_api.config import settings
from employee_api.database import close_db, init_db
from employee_api.models.employee import JOB_TITLES, Employee
from employee_api.schemas.employee import EmployeeCreate


async def _insert(payload: EmployeeCreate) -> Employee:
    """Connect, insert the employee, and always disconnect."""
    await init_db()
    try:
        employee = Employee(**payload.document_fields())
        click.echo(employee.introduction())
        await employee.insert()
        return employee
    finally:
        await close_db()


@click.command()
@click.option("--employee-id", default="emp123", show_default=True)
@click.option("--name", default="Alex Chow", show_default=True)
@click.option("--email", default="alex@college.com", show_default=True)
@click.option(
    "--job-title",
    type=click.Choice(JOB_TITLES),
    default="Software Developer",
    show_default=True,
)
@click.option("--age", type=int, default=58, show_default=True)
@click.option("--date-hired", default="2024-07-03", show_default=True, help="ISO 8601 date")
def main(**cli_inputs):
    """Insert a sample employee into MongoDB"""
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    try:
        settings.validate_required()
    except ValueError as err:
        click.secho(str(err), fg="red", err=True)
        raise SystemExit(1)

    try:
        payload = EmployeeCreate(**cli_inputs)
    except PydanticValidationError as err:
        for error in err.errors():
            click.secho(f"{error['loc'][-1]}: {error['msg']}", fg="red", err=True)
        raise SystemExit(1)

    missing = payload.missing_fields()
    if missing:
        click.secho(f"All fields are required. Missing: {', '.join(missing)}", fg="red", err=True)
        raise SystemExit(1)

    try:
        employee = asyncio.run(_insert(payload))
    except DuplicateKeyError as err:
        click.secho(f"Save failed, duplicate key: {(err.details or {}).get('keyValue')}", fg="red", err=True)
        raise SystemExit(1)
    except PyMongoError as err:
        click.secho(f"MongoDB error: {err}", fg="red", err=True)
        raise SystemExit(1)

    click.secho(
        f"Employee saved: {employee.employee_id} (_id={employee.id})",
        bold=True,
        fg="green",
    )


if __name__ == "__main__":
    main()
