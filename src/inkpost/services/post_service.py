"""Post service — queries and writes for posts and their comments.

Every read that leaves this module has author, category and comments
loaded eagerly (selectinload). Async sessions can't lazy-load, and the
routes serialize all three.
"""

import math
import re
import secrets
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from inkpost.db.models import Comment, Post

OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")

_WITH_REFS = (
    selectinload(Post.author),
    selectinload(Post.category),
    selectinload(Post.comments),
)


def slugify(text: str) -> str:
    return _NON_SLUG_CHARS.sub("-", text.lower()).strip("-")


def looks_like_id(value: str) -> bool:
    return bool(OBJECT_ID_RE.match(value))


@dataclass
class PostPage:
    posts: list[Post]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit)


class PostService:
    """Business logic for posts and comments."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Reads ──────────────────────────────────────────

    async def list_posts(
        self, page: int, limit: int, category_id: Optional[str] = None
    ) -> PostPage:
        q = select(Post)
        count_q = select(func.count()).select_from(Post)
        if category_id:
            q = q.where(Post.category_id == category_id)
            count_q = count_q.where(Post.category_id == category_id)

        result = await self.db.execute(
            q.options(*_WITH_REFS)
            .order_by(Post.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        total = await self.db.scalar(count_q)
        return PostPage(
            posts=list(result.scalars().all()), total=total or 0, page=page, limit=limit
        )

    async def get(self, post_id: str) -> Optional[Post]:
        result = await self.db.execute(
            select(Post)
            .where(Post.id == post_id)
            .options(*_WITH_REFS)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def get_by_slug(self, slug: str) -> Optional[Post]:
        result = await self.db.execute(
            select(Post).where(Post.slug == slug).options(*_WITH_REFS)
        )
        return result.scalars().first()

    async def get_by_id_or_slug(self, id_or_slug: str) -> Optional[Post]:
        if looks_like_id(id_or_slug):
            return await self.get(id_or_slug.lower())
        return await self.get_by_slug(id_or_slug)

    # ─── Writes ─────────────────────────────────────────

    async def create(
        self,
        author_id: str,
        title: str,
        content: str,
        category_id: str,
        excerpt: str,
        featured_image: str,
        tags: list[str],
        is_published: bool,
    ) -> Post:
        post = Post(
            author_id=author_id,
            title=title,
            slug=await self._unique_slug(title),
            content=content,
            category_id=category_id,
            excerpt=excerpt,
            featured_image=featured_image,
            tags=tags,
            is_published=is_published,
        )
        self.db.add(post)
        await self.db.commit()
        return await self.get(post.id)

    async def update(self, post: Post, changes: dict) -> Post:
        """Merge changes (attribute name → value) into an existing post.

        `category` is accepted as the wire name for category_id. The
        author is not editable and is never read from changes.
        """
        changes = dict(changes)
        changes.pop("author_id", None)
        if "category" in changes:
            changes["category_id"] = changes.pop("category")
        if "title" in changes and changes["title"] != post.title:
            post.slug = await self._unique_slug(changes["title"], exclude_id=post.id)
        for field, value in changes.items():
            setattr(post, field, value)
        await self.db.commit()
        return await self.get(post.id)

    async def delete(self, post: Post) -> None:
        await self.db.delete(post)
        await self.db.commit()

    async def add_comment(self, post: Post, user_id: str, content: str) -> Post:
        post.comments.append(Comment(user_id=user_id, content=content))
        await self.db.commit()
        return await self.get(post.id)

    # ─── Helpers ────────────────────────────────────────

    async def _unique_slug(self, title: str, exclude_id: Optional[str] = None) -> str:
        base = slugify(title) or "post"
        slug = base
        while await self._slug_taken(slug, exclude_id):
            slug = f"{base}-{secrets.token_hex(3)}"
        return slug

    async def _slug_taken(self, slug: str, exclude_id: Optional[str]) -> bool:
        q = select(Post.id).where(Post.slug == slug)
        if exclude_id:
            q = q.where(Post.id != exclude_id)
        return (await self.db.scalar(q)) is not None
