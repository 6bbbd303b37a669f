"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Unlike routers that are protected as a whole, every router here mixes
public reads with authenticated writes, so the auth dependency is
declared on the individual write routes.
"""

from fastapi import APIRouter

from inkpost.api.auth import router as auth_router
from inkpost.api.categories import router as categories_router
from inkpost.api.health import router as health_router
from inkpost.api.posts import router as posts_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(posts_router, tags=["posts", "comments"])
api_router.include_router(categories_router, tags=["categories"])
