"""
Tests for error handling and error response formatting.
"""

import json
import uuid

from fastapi import status
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from nyumba.services.error_handler import ErrorHandlerService
from nyumba.utils.exceptions import (
    ExternalServiceError,
    MoverNotFoundError,
    ServiceNotConfiguredError,
    ValidationError
)


class TestErrorHandlerService:
    """Test error handler service functionality."""

    def test_format_error_response(self):
        response = ErrorHandlerService.format_error_response(
            error_code="TEST_ERROR",
            message="Test error message",
            details=[{"field": "test", "message": "Test field error"}],
            request_id="test123"
        )

        assert response["error"]["code"] == "TEST_ERROR"
        assert response["error"]["message"] == "Test error message"
        assert response["error"]["request_id"] == "test123"
        assert response["error"]["details"][0]["field"] == "test"
        assert "timestamp" in response["error"]

    def test_handle_api_exception(self):
        response = ErrorHandlerService.handle_api_exception(ValidationError("Test validation error"))

        assert response.status_code == 422
        data = json.loads(response.body)
        assert data["error"]["code"] == "VALIDATION_ERROR"
        assert data["error"]["message"] == "Test validation error"

    def test_external_service_errors_keep_their_message(self):
        response = ErrorHandlerService.handle_api_exception(
            ExternalServiceError("AI service error. Please check your API key.")
        )

        data = json.loads(response.body)
        assert response.status_code == 500
        assert data["error"]["code"] == "EXTERNAL_SERVICE_ERROR"
        assert data["error"]["message"] == "AI service error. Please check your API key."

    def test_not_configured_code(self):
        response = ErrorHandlerService.handle_api_exception(ServiceNotConfiguredError("Groq API key not configured"))

        assert json.loads(response.body)["error"]["code"] == "SERVICE_NOT_CONFIGURED"

    def test_validation_error_masks_sensitive_input(self):
        errors = [
            {"loc": ("body", "password"), "msg": "too short", "type": "string_too_short", "input": "abc"},
            {"loc": ("body", "full_name"), "msg": "too short", "type": "string_too_short", "input": "A"},
        ]

        response = ErrorHandlerService.handle_validation_error(errors)

        details = json.loads(response.body)["error"]["details"]
        assert details[0]["field"] == "body -> password"
        assert "input" not in details[0]
        assert details[1]["input"] == "A"

    def test_integrity_error_is_conflict(self):
        error = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: saved_properties.user_id"))

        response = ErrorHandlerService.handle_database_error(error)

        assert response.status_code == 409
        assert json.loads(response.body)["error"]["code"] == "INTEGRITY_ERROR"

    def test_other_database_errors_are_hidden(self):
        error = OperationalError("SELECT", {}, Exception("connection refused"))

        response = ErrorHandlerService.handle_database_error(error)

        assert response.status_code == 500
        assert "connection refused" not in response.body.decode()

    def test_http_exception(self):
        response = ErrorHandlerService.handle_http_exception(StarletteHTTPException(status_code=405, detail="Method Not Allowed"))

        assert json.loads(response.body)["error"]["code"] == "HTTP_405"

    def test_unexpected_error_is_generic(self):
        response = ErrorHandlerService.handle_unexpected_error(RuntimeError("secret stack detail"))

        data = json.loads(response.body)
        assert response.status_code == 500
        assert "secret" not in data["error"]["message"]


class TestErrorResponsesOverHTTP:
    """Error payloads produced by the running application."""

    async def test_unknown_route(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/nothing-here")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"]["code"] == "HTTP_404"

    async def test_request_id_is_echoed(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/movers/areas", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"
        assert "X-Processing-Time" in response.headers

    async def test_error_carries_request_id(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/auth/me", headers={"X-Request-ID": "req-43"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error"]["request_id"] == "req-43"

    async def test_validation_error_hides_password(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/auth/register", json={
            "email": "someone@example.com",
            "password": "short",
            "full_name": "Someone"
        })

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        password_detail = next(d for d in error["details"] if d["field"].endswith("password"))
        assert "input" not in password_detail

    async def test_domain_not_found(self, async_client: AsyncClient):
        response = await async_client.get(f"/api/v1/movers/{uuid.uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"]["code"] == "NOT_FOUND"

    async def test_oversized_request_rejected(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/auth/login",
            content=b"{}",
            headers={"Content-Length": str(60 * 1024 * 1024), "Content-Type": "application/json"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "exceeds maximum" in response.json()["error"]["message"]

    def test_mover_not_found_message(self):
        assert "Mover" in MoverNotFoundError("abc").detail
