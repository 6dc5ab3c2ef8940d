from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import CatalogServiceBaseModel, SoftDeleteMixin, TimestampMixin

CATEGORY_NAME_MAX_LENGTH = 50


class Category(SoftDeleteMixin, TimestampMixin, CatalogServiceBaseModel):
    __tablename__ = "categories"

    # Not unique at the database level: a deleted category keeps its name
    name: Mapped[str] = mapped_column(String(CATEGORY_NAME_MAX_LENGTH), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    __table_args__ = (Index("ix_categories_name", "name"),)

    def __repr__(self) -> str:
        return f"Category(id={self.id!r}, name={self.name!r}, is_deleted={self.is_deleted!r})"
