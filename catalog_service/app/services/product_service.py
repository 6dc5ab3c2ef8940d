"""Product service for business logic"""

from decimal import Decimal
from typing import Any, Dict, List, Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.product import Product
from ..repository.unit_of_work import UnitOfWork
from ..schemas.product import (
    PatchOperation,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from ..utils.logging import setup_catalog_logging as setup_logging
from .category_service import INFRASTRUCTURE_ERROR_MESSAGE, normalize_paging
from .exceptions import (
    CatalogDomainError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationFailedError,
)
from .patching import apply_patch
from .results import ServiceResult

logger = setup_logging("product_service")

MIN_PRICE = Decimal("1")
MAX_PRICE = Decimal("1000")


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"]) or "value"
        parts.append(f"{field}: {item['msg']}")
    return "; ".join(parts)


class ProductService:
    """Service class for product business logic.

    Product reads are never cached: each one carries the category name,
    which can change independently of the product.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.uow = UnitOfWork(db)

    @staticmethod
    def _convert_to_product_response(product: Product) -> ProductResponse:
        return ProductResponse(
            id=product.id,
            title=product.title,
            description=product.description,
            author=product.author,
            price=Decimal(str(product.price)),
            category_id=product.category_id,
            category_name=product.category.name if product.category is not None else "",
        )

    async def _infrastructure_failure(
        self, operation: str, error: Exception, **context: object
    ) -> ServiceResult:
        logger.error(
            f"Failed to {operation}: {str(error)}",
            extra={**context, "error": str(error), "error_type": type(error).__name__},
            exc_info=True,
        )
        await self.uow.rollback()
        return ServiceResult.infrastructure_failure(INFRASTRUCTURE_ERROR_MESSAGE)

    async def _validate_product(self, product_data: ProductCreate | ProductUpdate) -> None:
        """Check the referential and price rules shared by create, update and patch"""
        if not await self.uow.categories.exists(product_data.category_id):
            raise ReferentialIntegrityError(
                f"Category with ID {product_data.category_id} does not exist."
            )
        if not MIN_PRICE <= product_data.price <= MAX_PRICE:
            raise ValidationFailedError("Book price must be between 1 and 1000.")

    @staticmethod
    def _merge(product: Product, product_data: ProductUpdate) -> None:
        for field, value in product_data.model_dump().items():
            setattr(product, field, value)

    async def _reload(self, product_id: int) -> ProductResponse:
        product = await self.uow.products.get_by_id_with_category(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return self._convert_to_product_response(product)

    async def list_products(
        self, page: int = 1, page_size: int = 5
    ) -> ServiceResult[List[ProductResponse]]:
        page, page_size = normalize_paging(page, page_size)
        try:
            items, _ = await self.uow.products.get_paged_with_category(page, page_size)
            total_count = await self.uow.products.count()
        except SQLAlchemyError as e:
            return await self._infrastructure_failure(
                "list products", e, page=page, page_size=page_size
            )

        return ServiceResult.ok(
            [self._convert_to_product_response(item) for item in items],
            total_count=total_count,
        )

    async def get_product(self, product_id: int) -> ServiceResult[ProductResponse]:
        """Get product by ID"""
        try:
            product = await self.uow.products.get_by_id_with_category(product_id)
        except SQLAlchemyError as e:
            return await self._infrastructure_failure(
                "get product", e, product_id=product_id
            )

        if product is None:
            return ServiceResult.not_found(f"Product with ID {product_id} not found")
        return ServiceResult.ok(self._convert_to_product_response(product))

    async def get_products_by_category(
        self, category_id: int
    ) -> ServiceResult[List[ProductResponse]]:
        try:
            products = await self.uow.products.get_by_category_id(category_id)
        except SQLAlchemyError as e:
            return await self._infrastructure_failure(
                "get products by category", e, category_id=category_id
            )

        return ServiceResult.ok(
            [self._convert_to_product_response(product) for product in products],
            total_count=len(products),
        )

    async def create_product(
        self, product_data: ProductCreate
    ) -> ServiceResult[ProductResponse]:
        """Create a new product"""
        try:
            await self._validate_product(product_data)

            product = Product(**product_data.model_dump())
            await self.uow.products.add(product)
            await self.uow.save_changes()
            response = await self._reload(product.id)
        except CatalogDomainError as e:
            logger.info(
                "Product creation rejected",
                extra={"title": product_data.title, "reason": e.message},
            )
            return ServiceResult.from_error(e)
        except SQLAlchemyError as e:
            return await self._infrastructure_failure(
                "create product", e, title=product_data.title
            )

        logger.info(
            "Product created successfully",
            extra={"product_id": response.id, "category_id": response.category_id},
        )
        return ServiceResult.ok(response)

    async def update_product(
        self, product_id: int, product_data: ProductUpdate
    ) -> ServiceResult[ProductResponse]:
        """Replace every mutable field of a product"""
        try:
            product = await self.uow.products.get_by_id(product_id)
            if product is None:
                raise NotFoundError(f"Product with ID {product_id} not found")

            await self._validate_product(product_data)

            self._merge(product, product_data)
            await self.uow.products.update(product)
            await self.uow.save_changes()
            response = await self._reload(product_id)
        except CatalogDomainError as e:
            logger.info(
                "Product update rejected",
                extra={"product_id": product_id, "reason": e.message},
            )
            return ServiceResult.from_error(e)
        except SQLAlchemyError as e:
            return await self._infrastructure_failure(
                "update product", e, product_id=product_id
            )

        logger.info("Product updated successfully", extra={"product_id": product_id})
        return ServiceResult.ok(response)

    async def patch_product(
        self, product_id: int, operations: Sequence[PatchOperation]
    ) -> ServiceResult[ProductResponse]:
        """Apply a JSON Patch document to a product.

        The patch runs against a detached projection of the product. The
        patched projection goes through the same checks as a full update,
        and the stored product is only touched once all of them pass.
        """
        try:
            product = await self.uow.products.get_by_id(product_id)
            if product is None:
                raise NotFoundError(f"Product with ID {product_id} not found")

            projection: Dict[str, Any] = ProductUpdate(
                title=product.title,
                description=product.description,
                author=product.author,
                price=product.price,
                category_id=product.category_id,
            ).model_dump()
            patched = apply_patch(projection, operations)

            try:
                product_data = ProductUpdate.model_validate(patched)
            except ValidationError as e:
                raise ValidationFailedError(_describe_validation_error(e)) from e

            await self._validate_product(product_data)

            self._merge(product, product_data)
            await self.uow.products.update(product)
            await self.uow.save_changes()
            response = await self._reload(product_id)
        except CatalogDomainError as e:
            logger.info(
                "Product patch rejected",
                extra={
                    "product_id": product_id,
                    "operations": len(operations),
                    "reason": e.message,
                },
            )
            return ServiceResult.from_error(e)
        except SQLAlchemyError as e:
            return await self._infrastructure_failure(
                "patch product", e, product_id=product_id
            )

        logger.info(
            "Product patched successfully",
            extra={"product_id": product_id, "operations": len(operations)},
        )
        return ServiceResult.ok(response)

    async def delete_product(self, product_id: int) -> ServiceResult[None]:
        """Delete product (soft delete)"""
        try:
            if not await self.uow.products.delete(product_id):
                raise NotFoundError(f"Product with ID {product_id} not found")
            await self.uow.save_changes()
        except CatalogDomainError as e:
            logger.info(
                "Product deletion rejected",
                extra={"product_id": product_id, "reason": e.message},
            )
            return ServiceResult.from_error(e)
        except SQLAlchemyError as e:
            return await self._infrastructure_failure(
                "delete product", e, product_id=product_id
            )

        logger.info("Product deleted successfully", extra={"product_id": product_id})
        return ServiceResult.ok()

    async def get_total_count(self) -> ServiceResult[int]:
        try:
            total = await self.uow.products.count()
        except SQLAlchemyError as e:
            return await self._infrastructure_failure("count products", e)
        return ServiceResult.ok(total)
