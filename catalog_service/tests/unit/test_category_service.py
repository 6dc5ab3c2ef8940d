"""
Unit tests for CategoryService with mocked repositories.
"""

from datetime import datetime
from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.app.models.category import Category
from catalog_service.app.schemas.category import CategoryCreate, CategoryResponse
from catalog_service.app.services.cache import CacheError
from catalog_service.app.services.cache.invalidation import (
    category_item_key,
    category_page_key,
)
from catalog_service.app.services.category_service import CategoryService
from catalog_service.app.services.results import ResultStatus


def make_category(category_id: int, name: str, display_order: int = 0) -> Category:
    category = Category(name=name, display_order=display_order)
    category.id = category_id
    category.created_at = datetime(2024, 1, 1, 12, 0, 0)
    return category


class TestCategoryService:
    """Test cases for CategoryService"""

    @pytest.fixture
    def mock_session(self):
        """Mock database session"""
        return Mock(spec=AsyncSession)

    @pytest.fixture
    def service(self, mock_session, cache):
        """CategoryService with mocked repositories"""
        service = CategoryService(mock_session, cache)
        service.uow.categories = Mock()
        service.uow.products = Mock()
        service.uow.save_changes = AsyncMock()
        service.uow.rollback = AsyncMock()
        return service

    async def test_list_reads_repository_then_serves_from_cache(self, service, cache):
        # Arrange
        service.uow.categories.get_paged_sorted = AsyncMock(
            return_value=([make_category(1, "Fiction")], 1)
        )
        service.uow.categories.count = AsyncMock(return_value=1)

        # Act
        first = await service.list_categories(page=1, page_size=5)
        second = await service.list_categories(page=1, page_size=5)

        # Assert
        assert first.is_ok and second.is_ok
        assert [c.name for c in second.value] == ["Fiction"]
        service.uow.categories.get_paged_sorted.assert_awaited_once_with(1, 5)
        assert await cache.get(category_page_key(1, 5)) is not None
        # Total count is always fetched, even on a cache hit
        assert service.uow.categories.count.await_count == 2

    @pytest.mark.parametrize(
        "page, page_size, expected",
        [(0, 5, (1, 5)), (-3, 5, (1, 5)), (1, -1, (1, 5)), (1, 0, (1, 5)), (2, 3, (2, 3))],
    )
    async def test_list_normalizes_paging(self, service, page, page_size, expected):
        service.uow.categories.get_paged_sorted = AsyncMock(return_value=([], 0))
        service.uow.categories.count = AsyncMock(return_value=0)

        await service.list_categories(page=page, page_size=page_size)

        service.uow.categories.get_paged_sorted.assert_awaited_once_with(*expected)

    async def test_total_count_is_independent_of_page(self, service):
        service.uow.categories.get_paged_sorted = AsyncMock(
            return_value=([make_category(6, "History")], 6)
        )
        service.uow.categories.count = AsyncMock(return_value=6)

        result = await service.list_categories(page=2, page_size=5)

        assert len(result.value) == 1
        assert result.total_count == 6

    async def test_get_category_cache_hit_skips_repository(self, service, cache):
        cached = CategoryResponse(
            id=3, name="Cached", display_order=0, created_at=datetime(2024, 1, 1)
        )
        await cache.set(category_item_key(3), cached)
        service.uow.categories.get_by_id = AsyncMock()

        result = await service.get_category(3)

        assert result.value == cached
        service.uow.categories.get_by_id.assert_not_awaited()

    async def test_get_category_not_found(self, service):
        service.uow.categories.get_by_id = AsyncMock(return_value=None)

        result = await service.get_category(42)

        assert result.status is ResultStatus.NOT_FOUND

    async def test_create_duplicate_name_conflicts_without_commit(self, service):
        service.uow.categories.name_exists = AsyncMock(return_value=True)
        service.uow.categories.add = AsyncMock()

        result = await service.create_category(CategoryCreate(name="Fiction"))

        assert result.status is ResultStatus.CONFLICT
        service.uow.categories.add.assert_not_awaited()
        service.uow.save_changes.assert_not_awaited()

    async def test_create_invalidates_cached_listings(self, service, cache):
        await cache.set(category_page_key(1, 5), ())
        service.uow.categories.name_exists = AsyncMock(return_value=False)

        async def assign_identity(category):
            category.id = 10
            category.created_at = datetime(2024, 1, 1)
            return category

        service.uow.categories.add = AsyncMock(side_effect=assign_identity)

        result = await service.create_category(
            CategoryCreate(name="Poetry", display_order=9)
        )

        assert result.is_ok
        assert result.value.id == 10
        assert result.value.display_order == 9
        service.uow.save_changes.assert_awaited_once()
        assert await cache.get(category_page_key(1, 5)) is None

    async def test_delete_with_products_conflicts(self, service):
        service.uow.categories.exists = AsyncMock(return_value=True)
        service.uow.products.find = AsyncMock(return_value=[Mock()])
        service.uow.categories.delete = AsyncMock()

        result = await service.delete_category(1)

        assert result.status is ResultStatus.CONFLICT
        assert not result.is_referential_conflict
        service.uow.categories.delete.assert_not_awaited()

    async def test_store_failure_becomes_infrastructure_outcome(self, service):
        service.uow.categories.get_by_id = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("database is locked"))
        )

        result = await service.get_category(1)

        assert result.status is ResultStatus.INFRASTRUCTURE_FAILURE
        assert "locked" not in result.message
        service.uow.rollback.assert_awaited_once()

    async def test_cache_failure_becomes_infrastructure_outcome(self, service):
        service.cache = Mock()
        service.cache.get = AsyncMock(side_effect=CacheError("cache unavailable"))

        result = await service.list_categories()

        assert result.status is ResultStatus.INFRASTRUCTURE_FAILURE
