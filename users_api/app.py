from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from users_api import __version__
from users_api.core.config import Settings, get_settings
from users_api.core.error_handlers import register_error_handlers
from users_api.core.logging import configure_logging
from users_api.db.create_tables import create_all
from users_api.routers import users as users_router
from users_api.services.user_service import DefaultUserService, UserService


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers on every JSON response."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def create_app(
    settings: Settings | None = None,
    user_service: UserService | None = None,
) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn and with the test suite."""
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_tables_on_startup:
            create_all()
        logger.info("Users API started (env={})", settings.app_env)
        yield
        logger.info("Users API stopped")

    app = FastAPI(title="Users API", version=__version__, lifespan=lifespan)

    origins = list(settings.cors_origins) or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # wildcard origins cannot be combined with credentials
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    register_error_handlers(app)
    app.state.user_service = user_service or DefaultUserService()
    app.include_router(users_router.router)
    return app

