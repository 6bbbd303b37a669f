"""Response envelope shared by every endpoint.

Successful responses carry `success: true` plus `data` (and `pagination`
for list endpoints); failures carry `success: false` plus either a single
`error` message or a list of field `errors`. The `success` literal is the
tag that tells the two apart.
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Ok(BaseModel, Generic[T]):
    success: Literal[True] = True
    data: T


class Pagination(BaseModel):
    total: int
    page: int
    pages: int


class Page(BaseModel, Generic[T]):
    success: Literal[True] = True
    data: list[T]
    pagination: Pagination


class Message(BaseModel):
    success: Literal[True] = True
    message: str


class Violation(BaseModel):
    """One failed field constraint."""
    field: str
    msg: str
    location: str = "body"


class Err(BaseModel):
    success: Literal[False] = False
    error: str


class Invalid(BaseModel):
    success: Literal[False] = False
    errors: list[Violation]
