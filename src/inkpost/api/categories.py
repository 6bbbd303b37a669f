"""Category API routes."""

from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.dependencies import get_current_user
from inkpost.db.engine import get_db
from inkpost.errors import Conflict
from inkpost.schemas.auth import CurrentUser
from inkpost.schemas.category import CategoryCreate, CategoryRead
from inkpost.schemas.envelope import Ok
from inkpost.services.category_service import CategoryService
from inkpost.validation import check

logger = structlog.get_logger()

router = APIRouter(prefix="/categories")


def _svc(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


@router.get("", response_model=Ok[list[CategoryRead]])
async def list_categories(svc: CategoryService = Depends(_svc)):
    """All categories, alphabetically."""
    categories = await svc.list_categories()
    return Ok(data=[CategoryRead.model_validate(c) for c in categories])


@router.post("", response_model=Ok[CategoryRead], status_code=201)
async def create_category(
    payload: Any = Body(None),
    user: CurrentUser = Depends(get_current_user),
    svc: CategoryService = Depends(_svc),
):
    body = check(CategoryCreate, payload)

    if await svc.get_by_name(body.name):
        raise Conflict("Category already exists")

    category = await svc.create(body.name)
    logger.info("category.created", category_id=category.id, user_id=user.id)
    return Ok(data=CategoryRead.model_validate(category))
