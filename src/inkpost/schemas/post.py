"""Pydantic schemas for posts and comments.

The wire format is camelCase (featuredImage, isPublished, createdAt);
the alias generator maps it onto the snake_case model attributes.
Input schemas ignore unknown keys, so an `author` in a request body
never reaches the database.
"""

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── Input ──────────────────────────────────────────────

class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    tags: Optional[list[str]] = None
    is_published: Optional[bool] = None

    model_config = _camel

    field_messages: ClassVar[dict[str, str]] = {
        "title": "Title is required",
        "title.string_too_long": "Title cannot be more than 100 characters",
        "content": "Content is required",
        "category": "Category is required",
    }


class PostUpdate(BaseModel):
    """Partial update — every field optional, same constraints when present."""
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    content: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    tags: Optional[list[str]] = None
    is_published: Optional[bool] = None

    model_config = _camel

    field_messages: ClassVar[dict[str, str]] = {
        "title": "Title cannot be empty or more than 100 characters",
        "content": "Content cannot be empty",
        "category": "Category cannot be empty",
    }

    def changes(self) -> dict:
        """Only the fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)

    field_messages: ClassVar[dict[str, str]] = {
        "content": "Comment content is required",
    }


# ─── Output ─────────────────────────────────────────────

class AuthorRef(BaseModel):
    id: str
    username: str

    model_config = {"from_attributes": True}


class CategoryRef(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class CommentRead(BaseModel):
    id: str
    user_id: str = Field(alias="user")
    content: str
    created_at: datetime

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )


class PostRead(BaseModel):
    id: str
    title: str
    slug: str
    content: str
    excerpt: str
    featured_image: str
    tags: list[str]
    is_published: bool
    category: Optional[CategoryRef] = None
    author: AuthorRef
    comments: list[CommentRead] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )