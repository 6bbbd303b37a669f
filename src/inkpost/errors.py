"""Error taxonomy and the handlers that turn it into the JSON envelope.

Route handlers and dependencies raise ApiError subclasses; nothing below
the handler boundary builds responses by hand. Anything that is not an
ApiError is logged and reported as a bare 500 so internals never leak.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inkpost.schemas.envelope import Err, Invalid, Violation

logger = structlog.get_logger()


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 400

    def __init__(self, message: str, headers: dict[str, str] | None = None):
        super().__init__(message)
        self.message = message
        self.headers = headers

    def body(self) -> dict:
        return Err(error=self.message).model_dump()


class Unauthenticated(ApiError):
    """Missing, invalid or expired token, or the identity is gone."""

    status_code = 401

    def __init__(self, message: str):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(ApiError):
    """Authenticated, but not allowed to touch this resource."""

    status_code = 403


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    """Uniqueness violation (email, category name)."""

    status_code = 400


class ValidationFailed(ApiError):
    """One or more field constraints failed."""

    status_code = 400

    def __init__(self, violations: list[Violation]):
        super().__init__("Validation failed")
        self.violations = violations

    def body(self) -> dict:
        return Invalid(errors=self.violations).model_dump()


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.body(),
        headers=exc.headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and bad path/query params → 400 with field errors."""
    violations = []
    for error in exc.errors():
        loc = [str(part) for part in error["loc"]]
        location = loc[0] if loc else "body"
        field = ".".join(loc[1:]) or location
        violations.append(Violation(field=field, msg=error["msg"], location=location))
    return JSONResponse(
        status_code=400,
        content=Invalid(errors=violations).model_dump(),
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=Err(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "request.unhandled_error",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content=Err(error="Server Error").model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
