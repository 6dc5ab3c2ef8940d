"""
Unit tests for ProductService with mocked repositories.
"""

from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.app.schemas.product import ProductCreate
from catalog_service.app.services import product_service as product_service_module
from catalog_service.app.services.product_service import ProductService
from catalog_service.app.services.results import ResultStatus


def locked_error() -> OperationalError:
    return OperationalError("SELECT", {}, Exception("database is locked"))


class TestProductService:
    """Test cases for ProductService"""

    @pytest.fixture
    def service(self):
        """ProductService with mocked repositories"""
        service = ProductService(Mock(spec=AsyncSession))
        service.uow.categories = Mock()
        service.uow.products = Mock()
        service.uow.save_changes = AsyncMock()
        service.uow.rollback = AsyncMock()
        return service

    @pytest.fixture
    def service_logger(self, monkeypatch):
        logger = Mock()
        monkeypatch.setattr(product_service_module, "logger", logger)
        return logger

    async def test_read_failure_becomes_infrastructure_outcome(self, service):
        service.uow.products.get_by_id_with_category = AsyncMock(
            side_effect=locked_error()
        )

        result = await service.get_product(1)

        assert result.status is ResultStatus.INFRASTRUCTURE_FAILURE
        assert "locked" not in result.message
        service.uow.rollback.assert_awaited_once()

    async def test_commit_failure_becomes_infrastructure_outcome(self, service):
        service.uow.categories.exists = AsyncMock(return_value=True)
        service.uow.products.add = AsyncMock()
        service.uow.save_changes = AsyncMock(side_effect=locked_error())

        result = await service.create_product(
            ProductCreate(
                title="Dune",
                description="Desert planet",
                author="Frank Herbert",
                price=Decimal("20.00"),
                category_id=1,
            )
        )

        assert result.status is ResultStatus.INFRASTRUCTURE_FAILURE
        service.uow.rollback.assert_awaited_once()

    async def test_delete_missing_product_is_logged_as_rejected(
        self, service, service_logger
    ):
        service.uow.products.delete = AsyncMock(return_value=False)

        result = await service.delete_product(42)

        assert result.status is ResultStatus.NOT_FOUND
        service.uow.save_changes.assert_not_awaited()
        service_logger.info.assert_called_once()
        assert service_logger.info.call_args.args[0] == "Product deletion rejected"
        assert service_logger.info.call_args.kwargs["extra"]["product_id"] == 42
