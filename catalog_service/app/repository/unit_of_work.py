"""Unit of work grouping catalog repository changes into one commit"""

from types import TracebackType
from typing import List, Optional, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import SoftDeleteMixin
from ..utils.logging import setup_catalog_logging as setup_logging
from .base_repository import BaseRepository
from .category_repository import CategoryRepository
from .product_repository import ProductRepository

logger = setup_logging("catalog_service.unit_of_work")


class UnitOfWork:
    """One session, one transaction, one repository per entity type.

    Create one per service operation and discard it afterwards. Staged
    deletes are converted into ``is_deleted = True`` updates when
    ``save_changes`` runs, so rows are never physically removed.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.categories = CategoryRepository(session)
        self.products = ProductRepository(session)

    @property
    def repositories(self) -> List[BaseRepository]:
        return [self.categories, self.products]

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if exc_type is not None:
            await self.rollback()

    def _apply_soft_deletes(self) -> int:
        converted = 0
        for repository in self.repositories:
            for entity in repository.pending_deletes:
                if not isinstance(entity, SoftDeleteMixin):
                    raise TypeError(
                        f"{type(entity).__name__} does not support logical deletion"
                    )
                entity.is_deleted = True
                self.session.add(entity)
                converted += 1
            repository.pending_deletes.clear()
        return converted

    async def save_changes(self) -> None:
        """Commit every staged add, update and delete atomically"""
        soft_deleted = self._apply_soft_deletes()
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.error(
                "Unit of work commit failed, changes rolled back",
                extra={"soft_deleted": soft_deleted},
                exc_info=True,
            )
            raise

        logger.debug("Unit of work committed", extra={"soft_deleted": soft_deleted})

    async def rollback(self) -> None:
        for repository in self.repositories:
            repository.pending_deletes.clear()
        await self.session.rollback()
