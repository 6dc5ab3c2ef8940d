"""Repository layer for Catalog Service"""

from . import soft_delete  # noqa: F401  registers the global read filter
from .base_repository import BaseRepository
from .category_repository import CategoryRepository
from .product_repository import ProductRepository
from .soft_delete import INCLUDE_DELETED
from .unit_of_work import UnitOfWork

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "INCLUDE_DELETED",
    "ProductRepository",
    "UnitOfWork",
]
