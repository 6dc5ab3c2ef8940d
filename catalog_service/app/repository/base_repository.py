"""Generic repository shared by the catalog entities"""

from typing import Any, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import CatalogServiceBaseModel

ModelT = TypeVar("ModelT", bound=CatalogServiceBaseModel)


class BaseRepository(Generic[ModelT]):
    """CRUD operations for an entity with an integer identity.

    Reads never raise for a missing row; they return ``None`` or an empty
    list. Writes are only staged on the session and become visible once the
    owning unit of work commits.
    """

    model: Type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session
        # Delete intents, turned into flag updates by UnitOfWork.save_changes
        self.pending_deletes: List[ModelT] = []

    async def get_all(self) -> List[ModelT]:
        result = await self.session.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def get_by_id(self, entity_id: int) -> Optional[ModelT]:
        result = await self.session.execute(
            select(self.model).where(self.model.id == entity_id)
        )
        return result.scalar_one_or_none()

    async def find(self, *criteria: Any) -> List[ModelT]:
        """Get all rows matching the given SQLAlchemy criteria"""
        result = await self.session.execute(
            select(self.model).where(*criteria).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def add(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        return entity

    async def update(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        return entity

    async def delete(self, entity_id: int) -> bool:
        """Stage a delete. Returns False and stages nothing if the id is absent."""
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        if entity not in self.pending_deletes:
            self.pending_deletes.append(entity)
        return True

    async def exists(self, entity_id: int) -> bool:
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == entity_id)
        )
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        result = await self.session.execute(
            select(func.count(self.model.id))
        )
        return int(result.scalar_one())

    async def get_paged(self, page: int, page_size: int) -> Tuple[List[ModelT], int]:
        """Get one page ordered by id. ``page`` and ``page_size`` must be >= 1."""
        return await self._paged(select(self.model).order_by(self.model.id), page, page_size)

    async def _paged(
        self, query: Any, page: int, page_size: int
    ) -> Tuple[List[ModelT], int]:
        total_count = await self.count()
        result = await self.session.execute(
            query.offset((page - 1) * page_size).limit(page_size)
        )
        items: Sequence[ModelT] = result.scalars().all()
        return list(items), total_count
