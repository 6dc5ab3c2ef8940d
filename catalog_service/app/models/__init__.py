"""Catalog Service Models"""

from .base import (
    CatalogServiceBase,
    CatalogServiceBaseModel,
    SoftDeleteMixin,
    TimestampMixin,
)
from .category import Category
from .product import Product

__all__ = [
    "CatalogServiceBase",
    "CatalogServiceBaseModel",
    "SoftDeleteMixin",
    "TimestampMixin",
    "Category",
    "Product",
]
