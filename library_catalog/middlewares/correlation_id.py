"""
Middleware for request correlation ID tracking.

Every log line written while a catalog request is handled carries the
same short ID, which is also echoed back to the client.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from library_catalog.constants import CORRELATION_ID_HEADER, CORRELATION_ID_LENGTH

# Context variable for storing correlation ID per request
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Attach a correlation ID to each request and its response.

    The ID is taken from the X-Correlation-ID header when the client sends
    one, otherwise a new one is generated. It is truncated to 8 characters,
    stored in request.state.request_id and in a context variable for the
    log formatters.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        cid = request.headers.get(
            CORRELATION_ID_HEADER, str(uuid.uuid4())[:CORRELATION_ID_LENGTH]
        )
        cid = cid[:CORRELATION_ID_LENGTH]

        request.state.request_id = cid
        token = correlation_id.set(cid)
        try:
            response = await call_next(request)
        finally:
            correlation_id.reset(token)

        response.headers[CORRELATION_ID_HEADER] = cid
        return response


def get_correlation_id() -> str:
    """
    Get the correlation ID for the current request context.

    Returns:
        The correlation ID string, or empty string if not set.
    """
    return correlation_id.get()
