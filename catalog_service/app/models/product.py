from decimal import Decimal
from typing import Optional

from sqlalchemy import DECIMAL, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import CatalogServiceBaseModel, SoftDeleteMixin
from .category import Category

PRODUCT_TITLE_MAX_LENGTH = 50
PRODUCT_DESCRIPTION_MAX_LENGTH = 250
PRODUCT_AUTHOR_MAX_LENGTH = 50


class Product(SoftDeleteMixin, CatalogServiceBaseModel):
    __tablename__ = "products"

    title: Mapped[str] = mapped_column(String(PRODUCT_TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(
        String(PRODUCT_DESCRIPTION_MAX_LENGTH), nullable=True
    )
    author: Mapped[str] = mapped_column(String(PRODUCT_AUTHOR_MAX_LENGTH), nullable=False)
    price: Mapped[Decimal] = mapped_column(DECIMAL(18, 2), nullable=False)
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    # One-directional: products look up their category, categories hold no
    # collection of products. Must be loaded eagerly by the repository.
    category: Mapped[Optional[Category]] = relationship(lazy="raise")

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, title={self.title!r}, is_deleted={self.is_deleted!r})"
