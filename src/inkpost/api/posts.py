"""Post and comment API routes.

Reads are public. Writes need a bearer token; updates and deletes also
need the caller to be the post's author. On those routes the order of
checks is fixed: the post must exist (404), then belong to the caller
(403), and only then is the body validated (400).
"""

from typing import Any, Optional

import structlog
from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.dependencies import get_current_user
from inkpost.auth.ownership import ensure_owner
from inkpost.config import settings
from inkpost.db.engine import get_db
from inkpost.db.models import Post
from inkpost.errors import NotFound, ValidationFailed
from inkpost.schemas.auth import CurrentUser
from inkpost.schemas.envelope import Message, Ok, Page, Pagination, Violation
from inkpost.schemas.post import CommentCreate, PostCreate, PostRead, PostUpdate
from inkpost.services.category_service import CategoryService
from inkpost.services.post_service import PostService
from inkpost.validation import check

logger = structlog.get_logger()

router = APIRouter(prefix="/posts")


def _svc(db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(db)


def _positive_int(raw: Optional[str], default: int) -> int:
    """Parse a paging parameter; missing, junk, zero or negative → default."""
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value >= 1 else default


async def _require_post(svc: PostService, post_id: str) -> Post:
    post = await svc.get(post_id)
    if not post:
        raise NotFound("Post not found")
    return post


async def _require_category(db: AsyncSession, category_id: str) -> None:
    if not await CategoryService(db).get(category_id):
        raise ValidationFailed(
            [Violation(field="category", msg="Category not found")]
        )


# ─── Reads ──────────────────────────────────────────────

@router.get("", response_model=Page[PostRead])
async def list_posts(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    svc: PostService = Depends(_svc),
):
    """Newest posts first, paginated, optionally filtered by category id."""
    result = await svc.list_posts(
        page=_positive_int(page, 1),
        limit=_positive_int(limit, settings.default_page_size),
        category_id=category or None,
    )
    return Page(
        data=[PostRead.model_validate(p) for p in result.posts],
        pagination=Pagination(
            total=result.total, page=result.page, pages=result.pages
        ),
    )


@router.get("/{id_or_slug}", response_model=Ok[PostRead])
async def get_post(id_or_slug: str, svc: PostService = Depends(_svc)):
    """Look a post up by id (24 hex chars) or else by slug."""
    post = await svc.get_by_id_or_slug(id_or_slug)
    if not post:
        raise NotFound("Post not found")
    return Ok(data=PostRead.model_validate(post))


# ─── Writes ─────────────────────────────────────────────

@router.post("", response_model=Ok[PostRead], status_code=201)
async def create_post(
    payload: Any = Body(None),
    user: CurrentUser = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    """Create a post. The author is always the caller."""
    body = check(PostCreate, payload)
    await _require_category(svc.db, body.category)

    post = await svc.create(
        author_id=user.id,
        title=body.title,
        content=body.content,
        category_id=body.category,
        excerpt=body.excerpt or "",
        featured_image=body.featured_image or settings.default_featured_image,
        tags=body.tags or [],
        is_published=body.is_published or False,
    )
    logger.info("post.created", post_id=post.id, slug=post.slug)
    return Ok(data=PostRead.model_validate(post))


@router.put("/{post_id}", response_model=Ok[PostRead])
async def update_post(
    post_id: str,
    payload: Any = Body(None),
    user: CurrentUser = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    post = await _require_post(svc, post_id)
    ensure_owner(post, user)

    changes = check(PostUpdate, payload if payload is not None else {}).changes()
    if "category" in changes:
        await _require_category(svc.db, changes["category"])

    post = await svc.update(post, changes)
    logger.info("post.updated", post_id=post.id, fields=sorted(changes))
    return Ok(data=PostRead.model_validate(post))


@router.delete("/{post_id}", response_model=Message)
async def delete_post(
    post_id: str,
    user: CurrentUser = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    post = await _require_post(svc, post_id)
    ensure_owner(post, user)

    await svc.delete(post)
    logger.info("post.deleted", post_id=post_id)
    return Message(message="Post deleted")


@router.post("/{post_id}/comments", response_model=Ok[PostRead], status_code=201)
async def add_comment(
    post_id: str,
    payload: Any = Body(None),
    user: CurrentUser = Depends(get_current_user),
    svc: PostService = Depends(_svc),
):
    """Append a comment by the caller to a post."""
    post = await _require_post(svc, post_id)
    body = check(CommentCreate, payload)

    post = await svc.add_comment(post, user_id=user.id, content=body.content)
    logger.info("comment.added", post_id=post.id)
    return Ok(data=PostRead.model_validate(post))
