"""User API — FastAPI application factory and lifespan.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Authentication Gate wraps every route; CORS wraps the gate so preflight is answered
    - Database connected (with retries) before the app accepts traffic;
      exhausted retries abort startup
    - Settings passed in explicitly; the session manager lives on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app factory over module-level app: tests build apps with their own Settings
      (run with `uvicorn --factory user_api.main:create_app` or `python -m user_api`)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_api.api.auth_gate import BearerTokenMiddleware
from user_api.api.error_handlers import register_error_handlers
from user_api.api.routes import health, users
from user_api.config import Settings, get_settings
from user_api.infrastructure.database import (
    DatabaseSessionManager, connect_with_retry,
)
from user_api.infrastructure.observability import setup_logging

import user_api.models  # noqa: F401  (populate Base.metadata)

logger = logging.getLogger(__name__)


def _build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        db_manager = DatabaseSessionManager.from_url(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        try:
            await connect_with_retry(
                db_manager,
                attempts=settings.database_connect_attempts,
                base_delay_ms=settings.database_connect_base_delay_ms,
                max_delay_ms=settings.database_connect_max_delay_ms,
            )
        except Exception:
            await db_manager.dispose()
            raise
        app.state.db_manager = db_manager
        logger.info(f"User API started on port {settings.port}")
        yield
        logger.info("User API shutting down")
        await db_manager.dispose()

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application: gate, CORS, routes, error handlers."""
    settings = settings or get_settings()
    app = FastAPI(
        title="User API", version=health.SERVICE_VERSION,
        lifespan=_build_lifespan(settings),
    )

    # Last added runs first: CORS → gate → routes
    app.add_middleware(BearerTokenMiddleware, secret=settings.api_token)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(users.router)

    register_error_handlers(app)
    return app
