"""
Employee API - HTTP Route Tests
================================

What:  End-to-end tests of the HTTP layer: routing, status codes, error bodies.
How:   The FastAPI app is driven through httpx's ASGITransport. Most tests
       replace the service singleton with AsyncMocks, so they check only what
       the HTTP layer adds; TestRoutesWithRealService patches just the
       Employee Document and runs the real service underneath.

What we test:
    ✅ Each /api/employees route calls the right service method
    ✅ Success codes: 201 for create, 200 otherwise
    ✅ Error mapping: ValidationError/RequestValidationError → 400,
       NotFoundError → 404, DatabaseError → 500
    ✅ X-Request-ID is echoed and included in error bodies
    ✅ GET / and GET /health
    ✅ Trailing-slash collection paths and the access log line
"""

import logging
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from employee_api.exceptions import (
    DatabaseError,
    DuplicateEmployeeError,
    NotFoundError,
    ValidationError,
)
from employee_api.middleware.logging import level_for_status
from employee_api.schemas.employee import EmployeeResponse

SERVICE_PATH = "employee_api.routes.employees.employee_service"
EMPLOYEE_PATH = "employee_api.services.employee_service.Employee"


def _response(**overrides) -> EmployeeResponse:
    data = {
        "id": str(ObjectId()),
        "employee_id": "emp123",
        "name": "Alex Chow",
        "email": "alex@college.com",
        "job_title": "Software Developer",
        "age": 58,
        "date_hired": datetime(2024, 7, 3),
    }
    data.update(overrides)
    return EmployeeResponse(**data)


@pytest.fixture
def mock_service():
    """Replace the service the routes call with one made of AsyncMocks."""
    service = MagicMock()
    for name in (
        "create_employee",
        "list_employees",
        "get_employee",
        "get_employee_by_object_id",
        "update_employee",
        "delete_employee",
    ):
        setattr(service, name, AsyncMock())
    with patch(SERVICE_PATH, service):
        yield service


class TestCreateRoute:

    @pytest.mark.asyncio
    async def test_create_returns_201(self, test_client, mock_service, employee_data):
        created = _response()
        mock_service.create_employee.return_value = created

        response = await test_client.post("/api/employees", json=employee_data)

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == created.id
        assert body["employee_id"] == "emp123"
        payload = mock_service.create_employee.await_args.args[0]
        assert payload.name == "Alex Chow"

    @pytest.mark.asyncio
    async def test_missing_fields_is_400(self, test_client, mock_service, employee_data):
        mock_service.create_employee.side_effect = ValidationError(
            message="All fields are required.", context={"missing": ["email"]}
        )
        employee_data.pop("email")

        response = await test_client.post(
            "/api/employees", json=employee_data, headers={"X-Request-ID": "req-42"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "All fields are required."
        assert body["details"] == {"missing": ["email"]}
        assert body["request_id"] == "req-42"
        assert response.headers["X-Request-ID"] == "req-42"

    @pytest.mark.asyncio
    async def test_rule_violation_is_400_without_service_call(
        self, test_client, mock_service, employee_data
    ):
        employee_data["name"] = "Al"

        response = await test_client.post("/api/employees", json=employee_data)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Employee Name must be at least 3 characters long"
        assert body["details"]["errors"][0]["field"] == "name"
        mock_service.create_employee.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_type_is_400(self, test_client, mock_service, employee_data):
        employee_data["age"] = "fifty"

        response = await test_client.post("/api/employees", json=employee_data)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_no_body_is_all_fields_required(self, test_client, mock_service):
        response = await test_client.post("/api/employees")

        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required."

    @pytest.mark.asyncio
    async def test_duplicate_is_400(self, test_client, mock_service, employee_data):
        mock_service.create_employee.side_effect = DuplicateEmployeeError(
            key={"employee_id": "emp123"}
        )

        response = await test_client.post("/api/employees", json=employee_data)

        assert response.status_code == 400
        assert "emp123" in response.json()["message"]


class TestReadRoutes:

    @pytest.mark.asyncio
    async def test_list(self, test_client, mock_service):
        mock_service.list_employees.return_value = [
            _response(),
            _response(employee_id="emp124", email="sam@college.com"),
        ]

        response = await test_client.get("/api/employees")

        assert response.status_code == 200
        assert [e["employee_id"] for e in response.json()] == ["emp123", "emp124"]

    @pytest.mark.asyncio
    async def test_list_empty_is_404(self, test_client, mock_service):
        mock_service.list_employees.side_effect = NotFoundError(message="No employees found")

        response = await test_client.get("/api/employees")

        assert response.status_code == 404
        assert response.json()["message"] == "No employees found"

    @pytest.mark.asyncio
    async def test_get_by_employee_id(self, test_client, mock_service):
        mock_service.get_employee.return_value = _response()

        response = await test_client.get("/api/employees/emp123")

        assert response.status_code == 200
        mock_service.get_employee.assert_awaited_once_with("emp123")

    @pytest.mark.asyncio
    async def test_get_unknown_is_404(self, test_client, mock_service):
        mock_service.get_employee.side_effect = NotFoundError(
            message="Employee with ID emp999 not found"
        )

        response = await test_client.get("/api/employees/emp999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_get_by_object_id(self, test_client, mock_service):
        object_id = str(ObjectId())
        mock_service.get_employee_by_object_id.return_value = _response(id=object_id)

        response = await test_client.get(f"/api/employees/_id/{object_id}")

        assert response.status_code == 200
        assert response.json()["id"] == object_id
        mock_service.get_employee_by_object_id.assert_awaited_once_with(object_id)
        mock_service.get_employee.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_error_is_500_with_generic_message(self, test_client, mock_service):
        mock_service.get_employee.side_effect = DatabaseError(
            message="Could not retrieve the employee. Please try again.",
            context={"employee_id": "emp123"},
        )

        response = await test_client.get("/api/employees/emp123")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "details" not in body


class TestUpdateAndDeleteRoutes:

    @pytest.mark.asyncio
    async def test_update(self, test_client, mock_service, employee_data):
        mock_service.update_employee.return_value = _response(job_title="HR")
        employee_data["job_title"] = "HR"

        response = await test_client.put("/api/employees/emp123", json=employee_data)

        assert response.status_code == 200
        assert response.json()["job_title"] == "HR"
        employee_id, payload = mock_service.update_employee.await_args.args
        assert employee_id == "emp123"
        assert payload.job_title == "HR"

    @pytest.mark.asyncio
    async def test_update_unknown_is_404(self, test_client, mock_service, employee_data):
        mock_service.update_employee.side_effect = NotFoundError(
            message="Employee with employee_id emp999 not found"
        )

        response = await test_client.put("/api/employees/emp999", json=employee_data)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete(self, test_client, mock_service):
        mock_service.delete_employee.return_value = (
            "Employee with employee_id emp123 deleted successfully"
        )

        response = await test_client.delete("/api/employees/emp123")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Employee with employee_id emp123 deleted successfully"
        }

    @pytest.mark.asyncio
    async def test_delete_unknown_is_404(self, test_client, mock_service):
        mock_service.delete_employee.side_effect = NotFoundError(
            message="Employee with employee_id emp999 not found"
        )

        response = await test_client.delete("/api/employees/emp999")

        assert response.status_code == 404
        assert response.json()["message"] == "Employee with employee_id emp999 not found"


class TestRootAndHealth:

    @pytest.mark.asyncio
    async def test_root(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.text == "MongoDB, FastAPI, and Python are working!"

    @pytest.mark.asyncio
    async def test_health_when_database_reachable(self, test_client):
        with patch(
            "employee_api.routes.health.check_db_connection",
            AsyncMock(return_value=True),
        ):
            response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "Healthy"
        assert body["database"] == "connected"
        assert "timestamp" in body

    @pytest.mark.asyncio
    async def test_health_when_database_down(self, test_client):
        with patch(
            "employee_api.routes.health.check_db_connection",
            AsyncMock(return_value=False),
        ):
            response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "Unhealthy"

    @pytest.mark.asyncio
    async def test_generated_request_id(self, test_client):
        response = await test_client.get("/")

        assert len(response.headers["X-Request-ID"]) == 8


class TestRoutesWithRealService:
    """
    Routes driven through the real EmployeeService.

    Only the Employee Document is patched, so request parsing, the service
    and the response model all run together.
    """

    @pytest.mark.asyncio
    async def test_create_returns_201(self, test_client, employee_data, employee_doc):
        doc = employee_doc()
        with patch(EMPLOYEE_PATH) as mock_employee:
            mock_employee.return_value = doc

            response = await test_client.post("/api/employees", json=employee_data)

        assert response.status_code == 201, response.text
        body = response.json()
        assert body["id"] == str(doc.id)
        assert body["employee_id"] == "emp123"
        assert mock_employee.call_args.kwargs["employee_id"] == "emp123"
        doc.insert.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_with_trailing_slash(self, test_client, employee_data, employee_doc):
        with patch(EMPLOYEE_PATH) as mock_employee:
            mock_employee.return_value = employee_doc()

            response = await test_client.post("/api/employees/", json=employee_data)

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_create_duplicate_is_400(self, test_client, employee_data, employee_doc):
        doc = employee_doc()
        doc.insert = AsyncMock(
            side_effect=DuplicateKeyError("E11000", 11000, {"keyValue": {"employee_id": "emp123"}})
        )
        with patch(EMPLOYEE_PATH) as mock_employee:
            mock_employee.return_value = doc

            response = await test_client.post("/api/employees", json=employee_data)

        assert response.status_code == 400
        assert response.json()["message"] == "An employee with employee_id='emp123' already exists"

    @pytest.mark.asyncio
    async def test_missing_field_never_builds_document(self, test_client, employee_data):
        employee_data["email"] = ""
        with patch(EMPLOYEE_PATH) as mock_employee:
            response = await test_client.post("/api/employees", json=employee_data)

        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required."
        mock_employee.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_update_delete(self, test_client, employee_data, employee_doc, fake_query):
        employee_data.pop("employee_id")
        employee_data["job_title"] = "HR"
        updated = employee_doc(job_title="HR")
        update_query = fake_query()
        update_query.update = AsyncMock(return_value=updated)
        delete_query = fake_query()
        delete_query.delete = AsyncMock(return_value=SimpleNamespace(deleted_count=1))
        with patch(EMPLOYEE_PATH) as mock_employee:
            mock_employee.find_one.side_effect = [
                fake_query(employee_doc()),
                update_query,
                delete_query,
            ]

            fetched = await test_client.get("/api/employees/emp123")
            changed = await test_client.put("/api/employees/emp123", json=employee_data)
            deleted = await test_client.delete("/api/employees/emp123")

        assert fetched.status_code == 200
        assert fetched.json()["name"] == "Alex Chow"
        assert changed.status_code == 200
        assert changed.json()["job_title"] == "HR"
        assert deleted.json() == {"message": "Employee with employee_id emp123 deleted successfully"}

    @pytest.mark.asyncio
    async def test_get_unknown_is_404(self, test_client, fake_query):
        with patch(EMPLOYEE_PATH) as mock_employee:
            mock_employee.find_one.return_value = fake_query(None)

            response = await test_client.get("/api/employees/emp999")

        assert response.status_code == 404
        assert response.json()["message"] == "Employee with ID emp999 not found"

    @pytest.mark.asyncio
    async def test_date_hired_is_returned_in_utc(self, test_client, employee_doc, fake_query):
        with patch(EMPLOYEE_PATH) as mock_employee:
            mock_employee.find_one.return_value = fake_query(
                employee_doc(date_hired=datetime(2024, 7, 3, 5, tzinfo=timezone.utc))
            )

            response = await test_client.get("/api/employees/emp123")

        returned = response.json()["date_hired"]
        assert returned.startswith("2024-07-03T05:00:00")
        assert returned[len("2024-07-03T05:00:00"):] in ("Z", "+00:00")


class TestTrailingSlash:

    @pytest.mark.asyncio
    async def test_list_with_trailing_slash(self, test_client, mock_service):
        mock_service.list_employees.return_value = [_response()]

        response = await test_client.get("/api/employees/")

        assert response.status_code == 200
        assert response.json()[0]["employee_id"] == "emp123"

    def test_trailing_slash_routes_hidden_from_docs(self):
        from employee_api.main import app

        assert "/api/employees/" not in app.openapi()["paths"]
        assert "/api/employees" in app.openapi()["paths"]


class TestAccessLog:

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (201, logging.INFO), (404, logging.WARNING), (503, logging.ERROR)],
    )
    def test_level_for_status(self, status, level):
        assert level_for_status(status) == level

    @pytest.mark.asyncio
    async def test_not_found_is_logged_as_warning(self, test_client, mock_service, caplog):
        mock_service.get_employee.side_effect = NotFoundError(message="Employee with ID emp999 not found")

        with caplog.at_level(logging.INFO, logger="employee_api.access"):
            await test_client.get("/api/employees/emp999", headers={"X-Request-ID": "req-7"})

        record = next(r for r in caplog.records if r.name == "employee_api.access")
        assert record.levelno == logging.WARNING
        assert record.status == 404
        assert record.request_id == "req-7"
        assert "GET /api/employees/emp999 404" in record.getMessage()

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, test_client, caplog):
        with patch(
            "employee_api.routes.health.check_db_connection",
            AsyncMock(return_value=True),
        ), caplog.at_level(logging.INFO, logger="employee_api.access"):
            await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "employee_api.access"]
