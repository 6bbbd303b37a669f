"""JWT token creation and verification.

Tokens are stateless: the claims are {sub, iat, exp} and validity is
decided purely by signature and expiry at verification time. There is
no server-side revocation.

The secret is not read from a global here. create_app() builds one
TokenService from settings and stores it on app.state; routes reach it
through the get_token_service dependency.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Request

from inkpost.config import Settings


class InvalidToken(Exception):
    """Raised when a token fails verification for any reason."""


class TokenService:
    """Issues and verifies identity tokens with one process-wide secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=7),
    ):
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=timedelta(days=settings.token_expire_days),
        )

    def issue(self, user_id: str, issued_at: Optional[datetime] = None) -> str:
        """Create a token for user_id that expires `expires_in` after issue."""
        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Verify a token and return the user id it was issued for.

        Raises InvalidToken on a bad signature, malformed input, missing
        claims, or an expired token.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidToken("Token has expired")
        except jwt.InvalidTokenError as e:
            raise InvalidToken(f"Invalid token: {e}")
        return payload["sub"]


def get_token_service(request: Request) -> TokenService:
    """FastAPI dependency — the TokenService installed at startup."""
    return request.app.state.tokens
