"""Category API endpoints"""

from typing import List

from fastapi import APIRouter, Query, Response, status

from ...schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from ...services.category_service import CategoryService, normalize_paging
from ..dependencies import CategoryServiceDep
from ..responses import ensure_positive_id, raise_for_result, set_pagination_headers

router = APIRouter(prefix="/categories")


@router.get("/", response_model=List[CategoryResponse])
async def list_categories(
    response: Response,
    page: int = Query(1, description="1-based page number"),
    page_size: int = Query(5, description="Categories per page"),
    service: CategoryService = CategoryServiceDep,
):
    """List categories ordered by display order, then name"""
    result = await service.list_categories(page=page, page_size=page_size)
    raise_for_result(result)

    page, page_size = normalize_paging(page, page_size)
    set_pagination_headers(response, result.total_count or 0, page, page_size)
    return result.value


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    service: CategoryService = CategoryServiceDep,
):
    """Get category details by ID"""
    ensure_positive_id(category_id, "category id")
    result = await service.get_category(category_id)
    raise_for_result(result)
    return result.value


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    service: CategoryService = CategoryServiceDep,
):
    """Create a new category"""
    result = await service.create_category(category_data)
    raise_for_result(result)
    return result.value


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    service: CategoryService = CategoryServiceDep,
):
    """Update category name and display order"""
    ensure_positive_id(category_id, "category id")
    result = await service.update_category(category_id, category_data)
    raise_for_result(result)
    return result.value


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    service: CategoryService = CategoryServiceDep,
):
    """Delete category (soft delete); refused while products reference it"""
    ensure_positive_id(category_id, "category id")
    result = await service.delete_category(category_id)
    raise_for_result(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
