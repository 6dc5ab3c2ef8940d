"""
Cache invalidation service for Catalog Service
"""

from typing import Optional

from ...utils.logging import setup_catalog_logging
from . import InMemoryCache

logger = setup_catalog_logging("catalog_service_cache_invalidation")

CATEGORY_PAGE_PREFIX = "categories_page_"
CATEGORY_ITEM_PREFIX = "category_"


def category_page_key(page: int, page_size: int) -> str:
    return f"{CATEGORY_PAGE_PREFIX}{page}_size_{page_size}"


def category_item_key(category_id: int) -> str:
    return f"{CATEGORY_ITEM_PREFIX}{category_id}"


class CacheInvalidationService:
    """Service for cache invalidation.

    Category keys are derived from the query shape, not tracked per id, so
    any category write clears the whole category namespace: every page
    listing and every single-category entry.
    """

    def __init__(self, cache: InMemoryCache):
        self.cache = cache

    async def invalidate_category_caches(
        self, category_id: Optional[int] = None
    ) -> int:
        """Invalidate category-related caches"""
        total_invalidated = 0
        for prefix in (CATEGORY_PAGE_PREFIX, CATEGORY_ITEM_PREFIX):
            total_invalidated += await self.cache.invalidate_prefix(prefix)

        logger.info(
            f"Invalidated {total_invalidated} category cache entries",
            extra={"category_id": category_id},
        )
        return total_invalidated
