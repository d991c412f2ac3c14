"""
Unified error envelope models.

The error envelope follows a common shape:
- code: Machine-readable error code (string)
- msg: Human-readable error description
- details: Optional additional context (offending identifiers, field errors)

Example HTTP error response:
    {
        "error": {
            "code": "reference_missing",
            "msg": "Author with ID 999 was not found.",
            "details": {"author_id": 999}
        }
    }
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorEnvelope(BaseModel):
    """
    Unified error envelope structure.

    Attributes:
        code: Machine-readable error code for client-side error handling.
        msg: Human-readable error description for display.
        details: Optional additional context (offending identifiers, etc.).
    """

    code: str = Field(
        ...,
        description="Machine-readable error code (e.g., 'invalid_data', 'not_found')",
    )
    msg: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional additional error context and metadata",
    )


class HTTPErrorResponse(BaseModel):
    """
    HTTP error response envelope.

    Used as the JSON body for HTTP error responses instead of FastAPI's
    default ``{"detail": ...}`` structure.
    """

    error: ErrorEnvelope = Field(..., description="Error details envelope")


class ErrorCode:
    """
    Standard error codes for consistent error reporting.

    Categories:
    - Validation errors: INVALID_DATA
    - Resource errors: NOT_FOUND, CONFLICT
    - Referential errors: REFERENCE_MISSING, HAS_DEPENDENTS
    - System errors: DATABASE_ERROR, INTERNAL_ERROR
    """

    # Validation errors
    INVALID_DATA = "invalid_data"

    # Resource errors
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"

    # Referential errors
    REFERENCE_MISSING = "reference_missing"
    HAS_DEPENDENTS = "has_dependents"

    # System errors
    DATABASE_ERROR = "database_error"
    INTERNAL_ERROR = "internal_error"
