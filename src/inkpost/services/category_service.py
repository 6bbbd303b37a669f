"""Category service."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.db.models import Category


class CategoryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_categories(self) -> list[Category]:
        result = await self.db.execute(select(Category).order_by(Category.name))
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> Optional[Category]:
        result = await self.db.execute(select(Category).where(Category.name == name))
        return result.scalars().first()

    async def get(self, category_id: str) -> Optional[Category]:
        return await self.db.get(Category, category_id)

    async def create(self, name: str) -> Category:
        category = Category(name=name)
        self.db.add(category)
        await self.db.commit()
        return category
