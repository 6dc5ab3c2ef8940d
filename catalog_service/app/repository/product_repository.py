"""Product repository for database operations"""

from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from ..models.product import Product
from .base_repository import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """Repository for product database operations.

    The ``*_with_category`` reads resolve the owning category in the same
    query. A deleted category resolves to ``None``.
    """

    model = Product

    def _with_category(self):
        return select(Product).options(joinedload(Product.category))

    async def get_all_with_category(self) -> List[Product]:
        result = await self.session.execute(
            self._with_category().order_by(Product.id)
        )
        return list(result.scalars().all())

    async def get_by_id_with_category(self, product_id: int) -> Optional[Product]:
        # populate_existing refreshes instances already held by the session,
        # e.g. right after a commit that changed category_id
        result = await self.session.execute(
            self._with_category()
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_paged_with_category(
        self, page: int, page_size: int
    ) -> Tuple[List[Product], int]:
        return await self._paged(
            self._with_category().order_by(Product.id), page, page_size
        )

    async def get_by_category_id(self, category_id: int) -> List[Product]:
        result = await self.session.execute(
            self._with_category()
            .where(Product.category_id == category_id)
            .order_by(Product.id)
        )
        return list(result.scalars().all())
