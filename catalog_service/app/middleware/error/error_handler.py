"""
Error handling for Catalog Service.

Every failure leaves the service as one JSON envelope:

    {"error": {"type", "message", "correlation_id", "timestamp", "path", "method"}}

with an optional ``details`` object.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...utils.logging import setup_catalog_logging

logger = setup_catalog_logging("catalog_service_error_handler")

STORE_UNAVAILABLE_MESSAGE = "The catalog store is currently unavailable."

ERROR_TYPES_BY_STATUS = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "infrastructure_error",
}


def correlation_id_for(request: Request) -> str:
    for header in ("X-Correlation-ID", "x-request-id"):
        value = request.headers.get(header)
        if value:
            return value
    return "unknown"


class CatalogServiceErrorHandler:
    """Centralized exception handlers for Catalog Service."""

    @classmethod
    def setup_error_handlers(cls, app: FastAPI) -> None:
        app.add_exception_handler(StarletteHTTPException, cls.handle_http_exception)
        app.add_exception_handler(RequestValidationError, cls.handle_request_validation)
        app.add_exception_handler(SQLAlchemyError, cls.handle_database_error)
        app.add_exception_handler(Exception, cls.handle_unexpected_error)

    @classmethod
    async def handle_http_exception(
        cls, request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Errors raised deliberately by the routers, mostly mapped service outcomes."""
        return cls.error_response(
            request,
            exc.status_code,
            ERROR_TYPES_BY_STATUS.get(exc.status_code, "http_error"),
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @classmethod
    async def handle_request_validation(
        cls, request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        violations = [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        return cls.error_response(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "validation_error",
            "Request validation failed",
            details={"validation_errors": violations},
        )

    @classmethod
    async def handle_database_error(
        cls, request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        """Store failures that escaped the service layer; driver text is not exposed."""
        cls._log_server_error(request, exc, "database_error")
        return cls.error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "infrastructure_error",
            STORE_UNAVAILABLE_MESSAGE,
        )

    @classmethod
    async def handle_unexpected_error(
        cls, request: Request, exc: Exception
    ) -> JSONResponse:
        cls._log_server_error(request, exc, "unhandled_exception")
        return cls.error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_server_error",
            "An internal server error occurred",
            details={"exception_type": type(exc).__name__},
        )

    @staticmethod
    def _log_server_error(request: Request, exc: Exception, event_type: str) -> None:
        logger.error(
            f"Request failed with {type(exc).__name__}",
            extra={
                "correlation_id": correlation_id_for(request),
                "path": request.url.path,
                "method": request.method,
                "exception_type": type(exc).__name__,
                "event_type": event_type,
            },
            exc_info=exc,
        )

    @staticmethod
    def error_response(
        request: Request,
        status_code: int,
        error_type: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> JSONResponse:
        """Build the error envelope; client errors are logged here as warnings."""
        body: Dict[str, Any] = {
            "type": error_type,
            "message": message,
            "correlation_id": correlation_id_for(request),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
            "method": request.method,
        }
        if details:
            body["details"] = details

        if status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning(
                f"Client error: {error_type}",
                extra={
                    "correlation_id": body["correlation_id"],
                    "status_code": status_code,
                    "path": body["path"],
                    "method": body["method"],
                    "event_type": "client_error",
                },
            )

        return JSONResponse(
            status_code=status_code, content={"error": body}, headers=headers
        )


def setup_catalog_error_handling(app: FastAPI) -> None:
    """Register the Catalog Service exception handlers on ``app``."""
    CatalogServiceErrorHandler.setup_error_handlers(app)
    logger.info(
        "Catalog Service error handling configured",
        extra={"event_type": "error_handler_setup"},
    )
