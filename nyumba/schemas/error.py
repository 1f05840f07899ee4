"""
Error response schemas for API documentation and consistent error formatting.
Provides standardized error response models for OpenAPI documentation.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["email"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Invalid email format"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["value_error"]
    )

    input: Optional[Any] = Field(
        None,
        description="Input value that caused the error"
    )


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["VALIDATION_ERROR"])

    message: str = Field(..., description="Human-readable error message", examples=["Request validation failed"])

    timestamp: str = Field(..., description="Error timestamp in ISO format", examples=["2025-01-01T00:00:00Z"])

    request_id: Optional[str] = Field(None, description="Unique request identifier for tracking", examples=["abc12345"])

    details: Optional[List[ErrorDetail]] = Field(
        None,
        description="Detailed error information for validation errors"
    )


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse = Field(..., description="Error information")


def _example(code: str, message: str) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "timestamp": "2025-01-01T00:00:00Z",
            "request_id": "abc12345"
        }
    }


COMMON_ERROR_RESPONSES = {
    400: {
        "description": "Bad Request - Invalid request parameters",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("BAD_REQUEST", "Please fill in all required fields")}}
    },
    401: {
        "description": "Unauthorized - Authentication required",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("UNAUTHORIZED", "Authentication required")}}
    },
    403: {
        "description": "Forbidden - Access denied",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("FORBIDDEN", "You don't own this property")}}
    },
    404: {
        "description": "Not Found - Resource not found",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "NOT_FOUND", "Property not found with ID: 123e4567-e89b-12d3-a456-426614174000"
        )}}
    },
    409: {
        "description": "Conflict - Resource conflict",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "INTEGRITY_ERROR", "Constraint violation: Duplicate value for unique field"
        )}}
    },
    422: {
        "description": "Unprocessable Entity - Validation error",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("VALIDATION_ERROR", "Request validation failed")}}
    },
    500: {
        "description": "Internal Server Error - Unexpected error",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "EXTERNAL_SERVICE_ERROR", "AI service error. Please check your API key."
        )}}
    },
}


def get_error_responses(*status_codes: int) -> dict:
    """Get error responses for specific status codes."""
    return {code: COMMON_ERROR_RESPONSES[code] for code in status_codes if code in COMMON_ERROR_RESPONSES}


def get_common_error_responses() -> dict:
    """Errors every authenticated endpoint can return."""
    return get_error_responses(400, 401, 403, 422, 500)


def get_crud_error_responses() -> dict:
    """Errors for create/update/delete endpoints on a single resource."""
    return get_error_responses(400, 401, 403, 404, 409, 422, 500)
