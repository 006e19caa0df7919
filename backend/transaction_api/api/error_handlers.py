"""Error Handlers - global exception handlers for the Transaction API.

Invariants:
    - TransactionAPIError -> its http_status with the structured error envelope
    - RequestValidationError (unbindable body) -> 400 Result=0 "Access Denied!",
      binding details logged only
    - Exception (catch-all) -> 500, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from transaction_api.core.domain_types import ACCESS_DENIED_MESSAGE, RejectionReason, ResultCode
from transaction_api.core.errors import TransactionAPIError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register Transaction API error handler."""

    @app.exception_handler(TransactionAPIError)
    async def transaction_api_error_handler(request: Request, exc: TransactionAPIError):
        """Handle all typed domain/infrastructure errors."""
        logger.error(
            f"TransactionAPIError: {exc.message}",
            exc_info=exc,
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register request binding error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Unbindable request: same uniform denial as any other rejection."""
        logger.warning(
            f"Request binding failed on {request.url.path}: {_summarize_errors(exc)}",
            extra={
                "path": request.url.path,
                "reason_code": RejectionReason.MALFORMED_REQUEST.value,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "Result": int(ResultCode.REJECTED),
                "ResultMessage": ACCESS_DENIED_MESSAGE,
            },
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _summarize_errors(exc: RequestValidationError) -> list[dict]:
    """Field path + message per binding error. Input values are dropped (may hold secrets)."""
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
