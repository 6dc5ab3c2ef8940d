"""Product API endpoints, version 2.

Same operations as v1, wrapped in a response envelope:
``{"data": ..., "pagination": {...}, "version": "2.0", "timestamp": ...}``.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Query, status
from fastapi.encoders import jsonable_encoder

from ...schemas.product import PatchOperation, ProductCreate, ProductUpdate
from ...services.category_service import normalize_paging
from ...services.product_service import ProductService
from ..dependencies import ProductServiceDep
from ..responses import ensure_positive_id, pagination_meta, raise_for_result

API_VERSION = "2.0"

router = APIRouter(prefix="/products")


def envelope(
    data: Any = None,
    pagination: Optional[Dict[str, Any]] = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {}
    if data is not None:
        body["data"] = jsonable_encoder(data)
    if pagination is not None:
        body["pagination"] = pagination
    if message is not None:
        body["message"] = message
    body["version"] = API_VERSION
    body["timestamp"] = datetime.now(timezone.utc).isoformat()
    return body


@router.get("/")
async def list_products(
    page: int = Query(1, description="1-based page number"),
    page_size: int = Query(5, description="Products per page"),
    service: ProductService = ProductServiceDep,
):
    result = await service.list_products(page=page, page_size=page_size)
    raise_for_result(result)

    page, page_size = normalize_paging(page, page_size)
    return envelope(
        result.value,
        pagination=pagination_meta(result.total_count or 0, page, page_size),
    )


@router.get("/category/{category_id}")
async def get_products_by_category(
    category_id: int,
    service: ProductService = ProductServiceDep,
):
    ensure_positive_id(category_id, "category id")
    result = await service.get_products_by_category(category_id)
    raise_for_result(result)
    return envelope(result.value)


@router.get("/{product_id}")
async def get_product(
    product_id: int,
    service: ProductService = ProductServiceDep,
):
    ensure_positive_id(product_id, "product id")
    result = await service.get_product(product_id)
    raise_for_result(result)
    return envelope(result.value)


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreate,
    service: ProductService = ProductServiceDep,
):
    result = await service.create_product(product_data)
    raise_for_result(result)
    return envelope(result.value, message="Product created successfully")


@router.put("/{product_id}")
async def update_product(
    product_id: int,
    product_data: ProductUpdate,
    service: ProductService = ProductServiceDep,
):
    ensure_positive_id(product_id, "product id")
    result = await service.update_product(product_id, product_data)
    raise_for_result(result)
    return envelope(result.value, message="Product updated successfully")


@router.patch("/{product_id}")
async def patch_product(
    product_id: int,
    operations: List[PatchOperation] = Body(...),
    service: ProductService = ProductServiceDep,
):
    ensure_positive_id(product_id, "product id")
    result = await service.patch_product(product_id, operations)
    raise_for_result(result)
    return envelope(result.value, message="Product patched successfully")


@router.delete("/{product_id}")
async def delete_product(
    product_id: int,
    service: ProductService = ProductServiceDep,
):
    """Delete product (soft delete); v2 answers 200 with a confirmation body"""
    ensure_positive_id(product_id, "product id")
    result = await service.delete_product(product_id)
    raise_for_result(result)
    return envelope(message=f"Product {product_id} deleted successfully")
