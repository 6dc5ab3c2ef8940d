"""Product API endpoints"""

from typing import List

from fastapi import APIRouter, Body, Query, Response, status

from ...schemas.product import (
    PatchOperation,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from ...services.category_service import normalize_paging
from ...services.product_service import ProductService
from ..dependencies import ProductServiceDep
from ..responses import ensure_positive_id, raise_for_result, set_pagination_headers

router = APIRouter(prefix="/products")


@router.get("/", response_model=List[ProductResponse])
async def list_products(
    response: Response,
    page: int = Query(1, description="1-based page number"),
    page_size: int = Query(5, description="Products per page"),
    service: ProductService = ProductServiceDep,
):
    """List products with their category names"""
    result = await service.list_products(page=page, page_size=page_size)
    raise_for_result(result)

    page, page_size = normalize_paging(page, page_size)
    set_pagination_headers(response, result.total_count or 0, page, page_size)
    return result.value


@router.get("/category/{category_id}", response_model=List[ProductResponse])
async def get_products_by_category(
    category_id: int,
    service: ProductService = ProductServiceDep,
):
    """List every live product in a category"""
    ensure_positive_id(category_id, "category id")
    result = await service.get_products_by_category(category_id)
    raise_for_result(result)
    return result.value


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    service: ProductService = ProductServiceDep,
):
    """Get product details by ID"""
    ensure_positive_id(product_id, "product id")
    result = await service.get_product(product_id)
    raise_for_result(result)
    return result.value


@router.post("/", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreate,
    service: ProductService = ProductServiceDep,
):
    """Create a new product in an existing category"""
    result = await service.create_product(product_data)
    raise_for_result(result)
    return result.value


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    product_data: ProductUpdate,
    service: ProductService = ProductServiceDep,
):
    """Replace every mutable field of a product"""
    ensure_positive_id(product_id, "product id")
    result = await service.update_product(product_id, product_data)
    raise_for_result(result)
    return result.value


@router.patch("/{product_id}", response_model=ProductResponse)
async def patch_product(
    product_id: int,
    operations: List[PatchOperation] = Body(...),
    service: ProductService = ProductServiceDep,
):
    """Apply a JSON Patch document to a product"""
    ensure_positive_id(product_id, "product id")
    result = await service.patch_product(product_id, operations)
    raise_for_result(result)
    return result.value


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    service: ProductService = ProductServiceDep,
):
    """Delete product (soft delete)"""
    ensure_positive_id(product_id, "product id")
    result = await service.delete_product(product_id)
    raise_for_result(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
