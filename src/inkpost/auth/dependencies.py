"""FastAPI auth dependencies.

Learn: get_current_user is the gate for protected routes. It reads the
Authorization header, verifies the bearer token, and loads the user the
token was issued for, without the password hash. The resolved identity
is returned to the route and also left on request.state.user.

Failure messages are fixed strings that clients match on:
- "No token provided" — header missing or not a Bearer header
- "Not authorized" — token failed verification
- "User not found" — token is fine but the user no longer exists
"""

from typing import Optional

import structlog
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.auth.jwt import InvalidToken, TokenService, get_token_service
from inkpost.db.engine import get_db
from inkpost.errors import Unauthenticated
from inkpost.schemas.auth import CurrentUser
from inkpost.services.user_service import UserService

logger = structlog.get_logger()

BEARER = "Bearer"


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token segment of a Bearer header, "" if it has none.

    Returns None when the header is absent or uses another scheme.
    """
    if not authorization or not authorization.startswith(BEARER):
        return None
    parts = authorization.split(" ")
    return parts[1] if len(parts) > 1 else ""


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> CurrentUser:
    """Resolve the authenticated user or reject the request with 401."""
    token = extract_bearer_token(authorization)
    if token is None:
        raise Unauthenticated("No token provided")

    try:
        user_id = tokens.verify(token)
    except InvalidToken as e:
        logger.info("auth.token_rejected", reason=str(e))
        raise Unauthenticated("Not authorized")

    user = await UserService(db).get_public(user_id)
    if user is None:
        logger.info("auth.user_missing", user_id=user_id)
        raise Unauthenticated("User not found")

    request.state.user = user
    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user
