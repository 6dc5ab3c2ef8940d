"""
FastAPI dependency injection for Catalog Service

Provides database sessions and request-scoped services.
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db_session
from ..services.cache import get_category_cache
from ..services.category_service import CategoryService
from ..services.product_service import ProductService

# =====================================================
# DATABASE DEPENDENCIES
# =====================================================


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide async database session"""
    async for session in get_db_session():
        yield session


# =====================================================
# SERVICE DEPENDENCIES
# =====================================================


def get_category_service(
    session: AsyncSession = Depends(get_async_session),
) -> CategoryService:
    """Provide CategoryService bound to the request session and the shared cache"""
    return CategoryService(session, get_category_cache())


def get_product_service(
    session: AsyncSession = Depends(get_async_session),
) -> ProductService:
    """Provide ProductService bound to the request session"""
    return ProductService(session)


# =====================================================
# COMMON DEPENDENCY ALIASES
# =====================================================

CategoryServiceDep = Depends(get_category_service)
ProductServiceDep = Depends(get_product_service)
