from .category import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
)
from .product import (
    PatchOperation,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)

__all__ = [
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
    "PatchOperation",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
]
