"""Auth API — registration, login, current user.

- POST /auth/register → create an account, returns user + token
- POST /auth/login → email/password → user + token
- GET /auth/me → the identity behind the presented token

Login answers "Invalid credentials" for both an unknown email and a
wrong password. Registration does report "Email already in use".
"""

from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.dependencies import get_current_user
from inkpost.auth.jwt import TokenService, get_token_service
from inkpost.db.engine import get_db
from inkpost.errors import Conflict, Unauthenticated
from inkpost.schemas.auth import (
    AuthPayload,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    UserSummary,
)
from inkpost.schemas.envelope import Ok
from inkpost.services.user_service import UserService
from inkpost.validation import check

logger = structlog.get_logger()

router = APIRouter(prefix="/auth")


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.post("/register", response_model=Ok[AuthPayload], status_code=201)
async def register(
    payload: Any = Body(None),
    svc: UserService = Depends(_svc),
    tokens: TokenService = Depends(get_token_service),
):
    """Create a new user account and sign them in."""
    body = check(RegisterRequest, payload)

    if await svc.get_by_email(body.email):
        raise Conflict("Email already in use")

    user = await svc.create(
        username=body.username, email=body.email, password=body.password
    )
    logger.info("auth.registered", user_id=user.id)
    return Ok(
        data=AuthPayload(
            user=UserSummary.model_validate(user), token=tokens.issue(user.id)
        )
    )


@router.post("/login", response_model=Ok[AuthPayload])
async def login(
    payload: Any = Body(None),
    svc: UserService = Depends(_svc),
    tokens: TokenService = Depends(get_token_service),
):
    """Login with email and password → token."""
    body = check(LoginRequest, payload)

    user = await svc.get_by_email(body.email)
    if not user or not svc.password_matches(user, body.password):
        logger.info("auth.login_failed", known_email=user is not None)
        raise Unauthenticated("Invalid credentials")

    logger.info("auth.login", user_id=user.id)
    return Ok(
        data=AuthPayload(
            user=UserSummary.model_validate(user), token=tokens.issue(user.id)
        )
    )


@router.get("/me", response_model=Ok[CurrentUser])
async def get_me(user: CurrentUser = Depends(get_current_user)):
    """Get the current authenticated user's info."""
    return Ok(data=user)
