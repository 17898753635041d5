"""
Error response schemas for API endpoints.

Provides structured error responses for OpenAPI documentation and consistent
error handling across the API.
"""
from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Body of a structured error."""

    message: str = Field(description="Human-readable error message")


class ErrorResponse(BaseModel):
    """Standard error envelope: `{"error": {"message": ...}}`."""

    error: ErrorDetail

    @classmethod
    def build(cls, message: str) -> dict:
        """Build a JSON-ready error body for the given message."""
        return cls(error=ErrorDetail(message=message)).model_dump()


class UnauthorizedResponse(BaseModel):
    """
    Error envelope returned by the bearer token check.

    Unlike other errors, `error` is a plain string. Existing clients depend on
    this shape.
    """

    error: str = Field(default="Unauthorized request")
