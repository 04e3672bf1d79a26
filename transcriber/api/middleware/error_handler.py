"""
Global error handling middleware for the FastAPI application.

Catches TranscriberError subclasses, Pydantic validation errors, and
unhandled exceptions, converting them into a consistent JSON envelope
whose ``error`` field is what the client shows.
"""

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from transcriber.core.exceptions import TranscriberError

logger = logging.getLogger(__name__)


def error_body(exc: TranscriberError) -> dict:
    """Build the JSON envelope for a domain error."""
    content = {
        "error": exc.error,
        "code": exc.code,
        "timestamp": exc.timestamp,
    }
    if exc.details is not None:
        content["details"] = exc.details
    return content


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application.

    Registers three handlers in priority order:
    1. ``TranscriberError`` — maps domain errors to structured JSON responses.
    2. ``RequestValidationError`` — Pydantic validation failures (422).
    3. ``Exception`` — catch-all for unexpected server errors (500).

    Args:
        app: The FastAPI application instance to register handlers on.
    """

    @app.exception_handler(TranscriberError)
    async def transcriber_error_handler(_request: Request, exc: TranscriberError) -> JSONResponse:
        """Convert domain-specific errors into a JSON error envelope."""
        return JSONResponse(status_code=exc.status_code, content=error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic request validation errors (malformed body/params)."""
        return JSONResponse(
            status_code=422,
            content={
                "error": "Invalid request",
                "details": str(exc),
                "code": "VALIDATION_ERROR",
                "timestamp": datetime.now(UTC).isoformat(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler — prevents stack traces from leaking to clients."""
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "code": "INTERNAL_ERROR",
                "timestamp": datetime.now(UTC).isoformat(),
            },
        )
