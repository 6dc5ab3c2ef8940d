from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.product import (
    PRODUCT_AUTHOR_MAX_LENGTH,
    PRODUCT_DESCRIPTION_MAX_LENGTH,
    PRODUCT_TITLE_MAX_LENGTH,
)


class ProductBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=PRODUCT_TITLE_MAX_LENGTH)
    description: Optional[str] = Field(
        None, max_length=PRODUCT_DESCRIPTION_MAX_LENGTH
    )
    author: str = Field(..., min_length=1, max_length=PRODUCT_AUTHOR_MAX_LENGTH)
    # Range [1, 1000] is a business rule checked by ProductService
    price: Decimal = Field(..., description="Book price, 1 to 1000 inclusive")
    category_id: int = Field(..., description="Owning category id")

    @field_validator("title", "author")
    @classmethod
    def validate_required_text(cls, v: str, info: Any) -> str:
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty or whitespace only")
        return v.strip()


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    """Full replacement payload; also the projection patch documents apply to."""

    pass


class ProductResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    description: Optional[str] = None
    author: str
    price: Decimal
    category_id: int
    category_name: str


class PatchOperation(BaseModel):
    """A single JSON Patch (RFC 6902) operation"""

    model_config = ConfigDict(populate_by_name=True)

    op: Literal["add", "remove", "replace", "copy", "move", "test"]
    path: str
    value: Any = None
    from_: Optional[str] = Field(default=None, alias="from")
