"""Pydantic schemas for categories."""

from datetime import datetime
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

CategoryName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)
]


class CategoryCreate(BaseModel):
    name: CategoryName

    field_messages: ClassVar[dict[str, str]] = {
        "name": "Category name is required",
        "name.string_too_long": "Category name cannot be more than 50 characters",
    }


class CategoryRead(BaseModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )
