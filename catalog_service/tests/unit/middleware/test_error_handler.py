"""
Unit tests for Catalog Service Error Handler.
"""

import json
from unittest.mock import Mock

import pytest
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_service.app.middleware.error.error_handler import (
    CatalogServiceErrorHandler,
    setup_catalog_error_handling,
)


class TestCatalogServiceErrorHandler:
    """Test cases for error handler."""

    @pytest.fixture
    def app(self):
        """Create FastAPI app with error handlers registered."""
        app = FastAPI()
        CatalogServiceErrorHandler.setup_error_handlers(app)
        return app

    @pytest.fixture
    def mock_request(self):
        request = Mock(spec=Request)
        request.url.path = "/api/v1/categories/5"
        request.method = "GET"
        request.headers = {"X-Correlation-ID": "test-correlation-id"}
        return request

    def test_setup_error_handlers(self, app):
        """Test that error handlers are properly set up."""
        assert StarletteHTTPException in app.exception_handlers
        assert RequestValidationError in app.exception_handlers
        assert SQLAlchemyError in app.exception_handlers
        assert Exception in app.exception_handlers

    async def test_http_exception_handler(self, app, mock_request):
        handler = app.exception_handlers[StarletteHTTPException]
        exc = StarletteHTTPException(status_code=409, detail="Category exists")

        response = await handler(mock_request, exc)

        assert response.status_code == 409
        body = json.loads(response.body)
        assert body["error"]["type"] == "conflict"
        assert body["error"]["message"] == "Category exists"
        assert body["error"]["correlation_id"] == "test-correlation-id"
        assert body["error"]["path"] == "/api/v1/categories/5"

    async def test_request_validation_error_handler(self, app, mock_request):
        handler = app.exception_handlers[RequestValidationError]
        exc = RequestValidationError(
            [
                {
                    "loc": ["body", "name"],
                    "msg": "field required",
                    "type": "missing",
                }
            ]
        )

        response = await handler(mock_request, exc)

        assert response.status_code == 422
        body = json.loads(response.body)
        assert body["error"]["type"] == "validation_error"
        errors = body["error"]["details"]["validation_errors"]
        assert errors[0]["field"] == "body.name"

    async def test_database_error_hides_driver_message(self, app, mock_request):
        handler = app.exception_handlers[SQLAlchemyError]
        exc = OperationalError("SELECT 1", {}, Exception("disk I/O error"))

        response = await handler(mock_request, exc)

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error"]["type"] == "infrastructure_error"
        assert "disk" not in body["error"]["message"]

    async def test_unhandled_exception_handler(self, app, mock_request):
        handler = app.exception_handlers[Exception]

        response = await handler(mock_request, RuntimeError("boom"))

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error"]["type"] == "internal_server_error"
        assert body["error"]["details"]["exception_type"] == "RuntimeError"

    async def test_missing_correlation_id_defaults_to_unknown(self, app, mock_request):
        mock_request.headers = {}
        handler = app.exception_handlers[StarletteHTTPException]

        response = await handler(
            mock_request, StarletteHTTPException(status_code=404, detail="Not found")
        )

        assert json.loads(response.body)["error"]["correlation_id"] == "unknown"

    def test_setup_catalog_error_handling(self):
        app = FastAPI()

        setup_catalog_error_handling(app)

        assert StarletteHTTPException in app.exception_handlers
