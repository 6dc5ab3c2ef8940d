from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.category import CATEGORY_NAME_MAX_LENGTH


class CategoryBase(BaseModel):
    name: str = Field(
        ...,
        min_length=1,
        max_length=CATEGORY_NAME_MAX_LENGTH,
        description="Category name (unique among live categories)",
    )
    display_order: int = Field(default=0, description="Ascending sort key for listings")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name cannot be empty or whitespace only")
        return v.strip()


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(CategoryBase):
    pass


class CategoryResponse(BaseModel):
    # Frozen so cached instances cannot be mutated by callers
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    display_order: int
    created_at: datetime

