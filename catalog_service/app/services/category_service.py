"""Category service for business logic"""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.setting import get_settings
from ..models.category import Category
from ..models.product import Product
from ..repository.unit_of_work import UnitOfWork
from ..schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from ..utils.logging import setup_catalog_logging as setup_logging
from .cache import CacheError, InMemoryCache, get_category_cache
from .cache.invalidation import (
    CacheInvalidationService,
    category_item_key,
    category_page_key,
)
from .exceptions import CatalogDomainError, ConflictError, NotFoundError
from .results import ServiceResult

logger = setup_logging("category_service")

INFRASTRUCTURE_ERROR_MESSAGE = "The catalog store is currently unavailable."


def normalize_paging(page: int, page_size: int) -> tuple[int, int]:
    """Clamp caller supplied paging values to usable ones"""
    if page < 1:
        page = 1
    if page_size < 1:
        page_size = get_settings().DEFAULT_PAGE_SIZE
    return page, page_size


class CategoryService:
    """Service class for category business logic"""

    def __init__(self, db: AsyncSession, cache: Optional[InMemoryCache] = None):
        self.db = db
        self.uow = UnitOfWork(db)
        self.cache = cache if cache is not None else get_category_cache()
        self.cache_invalidation = CacheInvalidationService(self.cache)

    @staticmethod
    def _to_response(category: Category) -> CategoryResponse:
        return CategoryResponse.model_validate(category)

    async def _infrastructure_failure(
        self, operation: str, error: Exception, **context: object
    ) -> ServiceResult:
        logger.error(
            f"Failed to {operation}: {str(error)}",
            extra={**context, "error": str(error), "error_type": type(error).__name__},
            exc_info=True,
        )
        await self.uow.rollback()
        return ServiceResult.infrastructure_failure(INFRASTRUCTURE_ERROR_MESSAGE)

    async def list_categories(
        self, page: int = 1, page_size: int = 5
    ) -> ServiceResult[List[CategoryResponse]]:
        """Get one page of categories plus the total number of live categories"""
        page, page_size = normalize_paging(page, page_size)
        cache_key = category_page_key(page, page_size)
        try:
            cached = await self.cache.get(cache_key)
            if cached is not None:
                categories = list(cached)
            else:
                items, _ = await self.uow.categories.get_paged_sorted(page, page_size)
                categories = [self._to_response(item) for item in items]
                await self.cache.set(cache_key, tuple(categories))

            # Always fetched separately so it describes the whole collection
            total_count = await self.uow.categories.count()
        except (SQLAlchemyError, CacheError) as e:
            return await self._infrastructure_failure(
                "list categories", e, page=page, page_size=page_size
            )

        return ServiceResult.ok(categories, total_count=total_count)

    async def get_category(self, category_id: int) -> ServiceResult[CategoryResponse]:
        """Get category by ID"""
        cache_key = category_item_key(category_id)
        try:
            cached = await self.cache.get(cache_key)
            if cached is not None:
                return ServiceResult.ok(cached)

            category = await self.uow.categories.get_by_id(category_id)
            if category is None:
                return ServiceResult.not_found(f"Category with ID {category_id} not found")

            response = self._to_response(category)
            await self.cache.set(cache_key, response)
        except (SQLAlchemyError, CacheError) as e:
            return await self._infrastructure_failure(
                "get category", e, category_id=category_id
            )

        return ServiceResult.ok(response)

    async def create_category(
        self, category_data: CategoryCreate
    ) -> ServiceResult[CategoryResponse]:
        """Create a new category with a unique name"""
        try:
            if await self.uow.categories.name_exists(category_data.name):
                raise ConflictError(
                    f"Category with name '{category_data.name}' already exists."
                )

            category = Category(
                name=category_data.name,
                display_order=category_data.display_order,
            )
            await self.uow.categories.add(category)
            await self.uow.save_changes()
            await self.cache_invalidation.invalidate_category_caches(category.id)
        except CatalogDomainError as e:
            logger.info(
                "Category creation rejected",
                extra={"category_name": category_data.name, "reason": e.message},
            )
            return ServiceResult.from_error(e)
        except (SQLAlchemyError, CacheError) as e:
            return await self._infrastructure_failure(
                "create category", e, category_name=category_data.name
            )

        logger.info(
            "Category created successfully",
            extra={"category_id": category.id, "category_name": category.name},
        )
        return ServiceResult.ok(self._to_response(category))

    async def update_category(
        self, category_id: int, category_data: CategoryUpdate
    ) -> ServiceResult[CategoryResponse]:
        """Update name and display order; identity and creation time are kept"""
        try:
            category = await self.uow.categories.get_by_id(category_id)
            if category is None:
                raise NotFoundError(f"Category with ID {category_id} not found")

            if await self.uow.categories.name_exists(
                category_data.name, exclude_id=category_id
            ):
                raise ConflictError(
                    f"Category with name '{category_data.name}' already exists."
                )

            category.name = category_data.name
            category.display_order = category_data.display_order
            await self.uow.categories.update(category)
            await self.uow.save_changes()
            await self.cache_invalidation.invalidate_category_caches(category_id)
        except CatalogDomainError as e:
            logger.info(
                "Category update rejected",
                extra={"category_id": category_id, "reason": e.message},
            )
            return ServiceResult.from_error(e)
        except (SQLAlchemyError, CacheError) as e:
            return await self._infrastructure_failure(
                "update category", e, category_id=category_id
            )

        logger.info("Category updated successfully", extra={"category_id": category_id})
        return ServiceResult.ok(self._to_response(category))

    async def delete_category(self, category_id: int) -> ServiceResult[None]:
        """Delete category (soft delete) unless live products still use it"""
        try:
            if not await self.uow.categories.exists(category_id):
                raise NotFoundError(f"Category with ID {category_id} not found")

            products = await self.uow.products.find(Product.category_id == category_id)
            if products:
                raise ConflictError("Cannot delete category that contains products.")

            await self.uow.categories.delete(category_id)
            await self.uow.save_changes()
            await self.cache_invalidation.invalidate_category_caches(category_id)
        except CatalogDomainError as e:
            logger.info(
                "Category deletion rejected",
                extra={"category_id": category_id, "reason": e.message},
            )
            return ServiceResult.from_error(e)
        except (SQLAlchemyError, CacheError) as e:
            return await self._infrastructure_failure(
                "delete category", e, category_id=category_id
            )

        logger.info("Category deleted successfully", extra={"category_id": category_id})
        return ServiceResult.ok()

    async def get_total_count(self) -> ServiceResult[int]:
        try:
            total = await self.uow.categories.count()
        except SQLAlchemyError as e:
            return await self._infrastructure_failure("count categories", e)
        return ServiceResult.ok(total)
