"""
Custom exception classes for the catalog.

Every failure the catalog can report is an AppException subclass. Each
exception carries a machine-readable code and an HTTP status so the
transport layer can render it without knowing the business rule behind it.
"""

from typing import Any

from library_catalog.schemas.errors import (
    ErrorCode,
    ErrorEnvelope,
    HTTPErrorResponse,
)


class AppException(Exception):
    """
    Base exception class for all catalog exceptions.

    Attributes:
        message: Human-readable error message.
        details: Optional context identifying the offending identifiers.
        code: ErrorCode value for clients.
        http_status: HTTP status code for REST API responses.
    """

    code: str = ErrorCode.INTERNAL_ERROR
    http_status: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize the exception with a message.

        Args:
            message: Human-readable error description.
            details: Optional additional context.
        """
        self.message = message
        self.details = details
        super().__init__(message)

    def to_http_response(self) -> HTTPErrorResponse:
        """
        Convert the exception to the HTTP error envelope.

        Returns:
            HTTPErrorResponse carrying code, message and details.
        """
        return HTTPErrorResponse(
            error=ErrorEnvelope(
                code=self.code, msg=self.message, details=self.details
            )
        )


class ValidationError(AppException):
    """
    Payload is absent or fails field validation.

    HTTP Status: 400 Bad Request
    """

    code = ErrorCode.INVALID_DATA
    http_status = 400


class NotFoundError(AppException):
    """
    Primary entity addressed by the operation does not exist.

    HTTP Status: 404 Not Found
    """

    code = ErrorCode.NOT_FOUND
    http_status = 404


class ConflictError(AppException):
    """
    Identity collision on create, or path/body identity mismatch on update.

    HTTP Status: 409 Conflict
    """

    code = ErrorCode.CONFLICT
    http_status = 409


class ReferenceMissingError(AppException):
    """
    A Book refers to an Author that does not exist.

    HTTP Status: 422 Unprocessable Entity
    """

    code = ErrorCode.REFERENCE_MISSING
    http_status = 422


class HasDependentsError(AppException):
    """
    Author deletion is blocked because it still owns Books.

    HTTP Status: 409 Conflict
    """

    code = ErrorCode.HAS_DEPENDENTS
    http_status = 409


class DatabaseError(AppException):
    """
    Store operation failed (connectivity, constraint violation at commit).

    Raised with the original SQLAlchemy error chained as ``__cause__``.
    There is no local recovery; the transaction has been rolled back.

    HTTP Status: 500 Internal Server Error
    """

    code = ErrorCode.DATABASE_ERROR
    http_status = 500
