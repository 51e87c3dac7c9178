"""
Exception handlers for the employee API.

Maps the employee component's error types onto HTTP status codes:
- ValidationError and malformed request bodies -> 400
- NotFound -> 404
- Every other EmployeeServiceError -> 500
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from employee_api.components.employees import (
    EmployeeServiceError,
    NotFound,
    ValidationError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers for the FastAPI app.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed request bodies are a 400, matching component validation."""
        details = []
        for error in exc.errors():
            loc = [str(part) for part in error.get("loc", []) if part != "body"]
            details.append(
                {
                    "code": error.get("type", "invalid"),
                    "message": error.get("msg", ""),
                    "field": ".".join(loc) or None,
                }
            )
        logger.warning("Rejected malformed request to %s: %s", request.url.path, details)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": details})

    @app.exception_handler(EmployeeServiceError)
    async def employee_error_handler(request: Request, exc: EmployeeServiceError) -> JSONResponse:
        if isinstance(exc, ValidationError):
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={
                    "detail": [
                        {"code": e.code, "message": e.message, "field": e.field}
                        for e in exc.errors
                    ]
                },
            )

        if isinstance(exc, NotFound):
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

        logger.error(
            "Error handling %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
        )
