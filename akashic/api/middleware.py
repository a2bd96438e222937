"""API middleware: request logging and error handling.

Converts ``AkashicError`` subclasses raised inside route handlers into JSON
:class:`ErrorResponse` bodies and logs every request with its duration.

Starlette middleware is a stack: the last one added runs first.  ``main``
adds ErrorHandling first and RequestLogging second, so request logging
sees the final status code.
"""

from __future__ import annotations

import time

import structlog
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from akashic.api.schemas import ErrorResponse
from akashic.utils.errors import AkashicError, JobNotFoundError
from akashic.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

_STATUS_BY_ERROR: dict[type[AkashicError], int] = {
    JobNotFoundError: 404,
}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Catch ``AkashicError`` subclasses and return structured JSON errors.

    Stack traces are logged server-side only, never sent to the client.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except AkashicError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            body = ErrorResponse(error=type(exc).__name__, detail=exc.message)
            return JSONResponse(
                status_code=_STATUS_BY_ERROR.get(type(exc), 500),
                content=body.model_dump(),
            )
