"""
Exception handlers that render catalog failures as HTTP responses.

Every AppException becomes the ``{"error": {...}}`` envelope with the
exception's own status code, so endpoints never need try/except blocks.
"""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from library_catalog.exceptions import AppException, ValidationError
from library_catalog.logging import logger


def error_response(ex: AppException) -> JSONResponse:
    """
    Build the JSON response for a catalog exception.

    Args:
        ex: The exception to render.

    Returns:
        JSONResponse with the error envelope and ``ex.http_status``.
    """
    return JSONResponse(
        status_code=ex.http_status,
        content=jsonable_encoder(ex.to_http_response()),
    )


async def app_exception_handler(request: Request, ex: AppException) -> JSONResponse:
    """Render an AppException raised anywhere below the router."""
    if ex.http_status >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            f"{type(ex).__name__} on {request.method} {request.url.path}: {ex.message}",
            extra={"exception_type": type(ex).__name__},
        )
    else:
        logger.warning(
            f"{type(ex).__name__} on {request.method} {request.url.path}: {ex.message}",
            extra={"exception_type": type(ex).__name__},
        )
    return error_response(ex)


async def request_validation_handler(
    request: Request, ex: RequestValidationError
) -> JSONResponse:
    """Render FastAPI's path and query validation failures as invalid_data."""
    logger.warning(
        f"Request validation failed on {request.method} {request.url.path}"
    )
    return error_response(
        ValidationError(
            "Request is invalid.",
            details={"errors": jsonable_encoder(ex.errors())},
        )
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the catalog exception handlers on an application.

    Args:
        app: FastAPI application.
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
