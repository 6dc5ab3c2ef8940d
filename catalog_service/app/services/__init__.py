"""Service layer for Catalog Service"""

from .category_service import CategoryService
from .product_service import ProductService
from .results import ConflictReason, ResultStatus, ServiceResult

__all__ = [
    "CategoryService",
    "ConflictReason",
    "ProductService",
    "ResultStatus",
    "ServiceResult",
]
