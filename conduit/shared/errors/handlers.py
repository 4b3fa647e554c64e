"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse envelope: {"errors": {"body": [...]}}.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from conduit.domain.content.errors import (
    AlreadyTakenError,
    ConduitDomainError,
    FieldRequiredError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

HTTP_401 = 401
HTTP_403 = 403
HTTP_404 = 404
HTTP_422 = 422
HTTP_500 = 500


def error_response(status_code: int, *messages: str) -> JSONResponse:
    """Build a consistent JSON error response."""
    return JSONResponse(
        status_code=status_code, content={"errors": {"body": list(messages)}}
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(
        _request: Request, exc: UnauthorizedError
    ) -> JSONResponse:
        """Handle requests that need a caller and have none."""
        logger.warning("Unauthorized: %s", exc.message)
        return error_response(HTTP_401, exc.message)

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(_request: Request, exc: ForbiddenError) -> JSONResponse:
        """Handle callers acting on resources they do not own."""
        logger.warning("Forbidden: %s", exc.message)
        return error_response(HTTP_403, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
        """Handle missing resources."""
        logger.warning("Not found: %s", exc.message)
        return error_response(HTTP_404, exc.message)

    @app.exception_handler(FieldRequiredError)
    async def handle_field_required(
        _request: Request, exc: FieldRequiredError
    ) -> JSONResponse:
        """Handle missing mandatory payload fields."""
        logger.warning("Field required: %s", exc.field)
        return error_response(HTTP_422, exc.message)

    @app.exception_handler(AlreadyTakenError)
    async def handle_already_taken(
        _request: Request, exc: AlreadyTakenError
    ) -> JSONResponse:
        """Handle uniqueness violations."""
        logger.warning("Already taken: %s", exc.field)
        return error_response(HTTP_422, exc.message)

    @app.exception_handler(ValidationError)
    async def handle_validation(
        _request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Handle values that fail a semantic check."""
        logger.warning("Validation failed: %s", exc.message)
        return error_response(HTTP_422, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle malformed query parameters and request bodies."""
        messages = [
            "%s %s" % (".".join(str(part) for part in err["loc"]), err["msg"])
            for err in exc.errors()
        ]
        logger.warning("Request validation failed: %s", messages)
        return error_response(HTTP_422, *messages)

    @app.exception_handler(ConduitDomainError)
    async def handle_domain(_request: Request, exc: ConduitDomainError) -> JSONResponse:
        """Catch-all for domain errors without a dedicated handler."""
        logger.error("Unhandled domain error: %s", exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return error_response(HTTP_500, "Internal server error")
