"""Error Handlers — map every failure to the JSON error envelope.

Invariants:
    - VaultError -> its own http_status and to_response() body (code, details, context)
    - RequestValidationError -> 400 VALIDATION_ERROR with one entry per bad field
    - Anything else -> 500 INTERNAL_ERROR, message never leaks internals
    - Client-side VaultErrors (< 500) log at INFO; server-side ones at ERROR

Design Decisions:
    - Plain coroutine handlers registered in one call: main.py only wires
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vault.core.errors import ErrorCategory, ErrorSeverity, VaultError
from vault.infrastructure.observability import error_extra

logger = logging.getLogger(__name__)


async def vault_error_handler(request: Request, exc: VaultError) -> JSONResponse:
    level = logging.ERROR if exc.http_status >= 500 else logging.INFO
    logger.log(
        level, f"{exc.code}: {exc.message}",
        extra=error_extra(exc, path=request.url.path),
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    fields = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.info(
        f"Rejected request body: {[f['field'] for f in fields]}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": fields,
            },
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(VaultError, vault_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
