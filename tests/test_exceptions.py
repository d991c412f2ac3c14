"""Tests for catalog exceptions and their HTTP rendering."""

import json

import pytest

from library_catalog.exceptions import (
    AppException,
    ConflictError,
    DatabaseError,
    HasDependentsError,
    NotFoundError,
    ReferenceMissingError,
    ValidationError,
)
from library_catalog.schemas.errors import ErrorCode, HTTPErrorResponse
from library_catalog.utils.error_handler import error_response


class TestHTTPConversion:
    """Test exception to_http_response() method."""

    @pytest.mark.parametrize(
        "exc_class, code, status",
        [
            (ValidationError, ErrorCode.INVALID_DATA, 400),
            (NotFoundError, ErrorCode.NOT_FOUND, 404),
            (ConflictError, ErrorCode.CONFLICT, 409),
            (ReferenceMissingError, ErrorCode.REFERENCE_MISSING, 422),
            (HasDependentsError, ErrorCode.HAS_DEPENDENTS, 409),
            (DatabaseError, ErrorCode.DATABASE_ERROR, 500),
        ],
    )
    def test_exception_codes(self, exc_class, code, status):
        ex = exc_class("Something happened")
        response = ex.to_http_response()

        assert isinstance(ex, AppException)
        assert isinstance(response, HTTPErrorResponse)
        assert response.error.code == code
        assert response.error.msg == "Something happened"
        assert response.error.details is None
        assert ex.http_status == status

    def test_details_are_carried(self):
        ex = ReferenceMissingError(
            "Author with ID 999 was not found.", details={"author_id": 999}
        )

        assert ex.to_http_response().error.details == {"author_id": 999}
        assert str(ex) == "Author with ID 999 was not found."


class TestErrorResponse:
    """Test the JSON response built by the exception handler."""

    def test_error_response_body(self):
        response = error_response(
            HasDependentsError(
                "Author has books and cannot be deleted.",
                details={"author_id": 1, "book_count": 2},
            )
        )

        assert response.status_code == 409
        assert json.loads(response.body) == {
            "error": {
                "code": "has_dependents",
                "msg": "Author has books and cannot be deleted.",
                "details": {"author_id": 1, "book_count": 2},
            }
        }
