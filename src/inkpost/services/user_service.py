"""User service — the credential store.

Lookups by email return the full row (login needs the hash); lookups for
the auth gate go through get_public(), which selects only the public
columns so the password hash never leaves the database.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.password import hash_password, verify_password
from inkpost.db.models import User
from inkpost.schemas.auth import CurrentUser


class UserService:
    """Business logic for user accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def get_public(self, user_id: str) -> Optional[CurrentUser]:
        result = await self.db.execute(
            select(User.id, User.username, User.email, User.created_at).where(
                User.id == user_id
            )
        )
        row = result.first()
        if row is None:
            return None
        return CurrentUser.model_validate(dict(row._mapping))

    async def create(self, username: str, email: str, password: str) -> User:
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
        )
        self.db.add(user)
        await self.db.commit()
        return user

    @staticmethod
    def password_matches(user: User, password: str) -> bool:
        return verify_password(password, user.password_hash)
