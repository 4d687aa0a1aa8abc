"""
Employee API - Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (fake documents, fake Beanie
       queries, API client) so no test needs a running MongoDB.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Overview:
    ├── employee_doc:   Factory for objects shaped like a stored Employee
    ├── employee_data:  Valid request body for POST /api/employees
    ├── fake_query:     Awaitable stand-in for Beanie's FindOne query
    └── test_client:    HTTPX AsyncClient talking to the FastAPI app in-process
"""

import os
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock

# Override settings for testing BEFORE any app imports
# Why: Settings() is instantiated at import time of employee_api.config
os.environ["MONGO_URI"] = "mongodb://localhost:27017"
os.environ["MONGO_DATABASE"] = "employees_test"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from bson import ObjectId  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402


class FakeQuery:
    """
    Stand-in for the object Employee.find_one(...) returns.

    Beanie's FindOne can be awaited directly (returns the document or None)
    or chained with .update(...) / .delete(). Both chains are AsyncMocks so
    tests can set return values and assert on the call arguments.
    """

    def __init__(self, result=None):
        self.result = result
        self.update = AsyncMock(return_value=None)
        self.delete = AsyncMock(return_value=None)

    def __await__(self):
        async def _result():
            return self.result

        return _result().__await__()


@pytest.fixture
def fake_query():
    """Returns the FakeQuery class so tests can build one per call."""
    return FakeQuery


@pytest.fixture
def employee_doc():
    """
    Factory for stored-employee look-alikes.

    What:    SimpleNamespace objects with the Employee Document attributes.
    Why:     Real Beanie Documents cannot be instantiated before init_beanie().

    Usage:
        doc = employee_doc(employee_id="emp200", name="Sam Lee")
    """

    def _make(**overrides):
        data = {
            "id": ObjectId(),
            "employee_id": "emp123",
            "name": "Alex Chow",
            "email": "alex@college.com",
            "job_title": "Software Developer",
            "age": 58,
            "date_hired": datetime(2024, 7, 3),
        }
        data.update(overrides)
        doc = SimpleNamespace(**data)
        doc.insert = AsyncMock(return_value=doc)
        return doc

    return _make


@pytest.fixture
def employee_data():
    """A complete, valid POST /api/employees body."""
    return {
        "employee_id": "emp123",
        "name": "Alex Chow",
        "email": "alex@college.com",
        "job_title": "Software Developer",
        "age": 58,
        "date_hired": "2024-07-03",
    }


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    How:     ASGITransport routes requests straight into the app. It does not
             run the lifespan, so no MongoDB connection is attempted; route
             tests patch the service layer instead.
    """
    from employee_api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
