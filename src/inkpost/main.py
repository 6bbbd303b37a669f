"""FastAPI application factory.

create_app() returns a configured FastAPI instance: middleware, exception
handlers, routers, and the token service built from settings. The
lifespan only logs and disposes of the database engine on shutdown.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inkpost import __version__
from inkpost.api import api_router
from inkpost.auth.jwt import TokenService
from inkpost.config import Settings, settings
from inkpost.errors import register_exception_handlers
from inkpost.log import configure_logging
from inkpost.middleware.request_id import RequestIdMiddleware
from inkpost.middleware.security import SecurityHeadersMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(
        "inkpost.starting",
        version=__version__,
        environment=app.state.settings.environment,
        port=app.state.settings.port,
    )

    yield

    logger.info("inkpost.shutdown")

    from inkpost.db.engine import engine
    await engine.dispose()


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    app_settings = app_settings or settings
    configure_logging(app_settings.log_level, json_logs=app_settings.log_json)

    app = FastAPI(
        title="inkpost",
        description="Blog content API — posts, categories, comments",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    # The signing secret is fixed from here on.
    app.state.tokens = TokenService.from_settings(app_settings)

    # Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: inkpost.main:app)
app = create_app()
