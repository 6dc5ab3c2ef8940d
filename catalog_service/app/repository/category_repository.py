"""Category repository for database operations"""

from typing import List, Optional, Tuple

from sqlalchemy import func, select

from ..models.category import Category
from .base_repository import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for category database operations"""

    model = Category

    async def get_paged_sorted(
        self, page: int, page_size: int
    ) -> Tuple[List[Category], int]:
        """Get one page ordered by display order, then name"""
        query = select(Category).order_by(
            Category.display_order.asc(), Category.name.asc(), Category.id.asc()
        )
        return await self._paged(query, page, page_size)

    async def name_exists(self, name: str, exclude_id: Optional[int] = None) -> bool:
        """Check whether a live category already uses ``name`` (case-insensitive)"""
        query = select(Category.id).where(
            func.lower(Category.name) == func.lower(name.strip())
        )
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.first() is not None
