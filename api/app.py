"""Taskboard API: FastAPI application entry point."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from api.core.config import get_settings
from api.core.errors import register_error_handlers
from api.core.observability import setup_logging
from api.db.create_tables import create_all
from api.repositories import CardRepository, UserRepository
from api.routers import cards as cards_router
from api.routers import health as health_router
from api.routers import users as users_router
from api.services import CardService, UserService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers on every JSON response."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Cache-Control", "no-store")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if settings.create_tables:
        create_all()
    logger.info("Taskboard API iniciada (%s)", settings.app_env)
    yield
    logger.info("Taskboard API encerrando")


def create_app() -> FastAPI:
    """Factory compatível com uvicorn/gunicorn (``uvicorn api.app:create_app --factory``)."""
    settings = get_settings()
    app = FastAPI(title="Taskboard API", version="1.0.0", lifespan=lifespan)

    # stateless services, built once and shared by every request
    app.state.card_service = CardService(CardRepository())
    app.state.user_service = UserService(UserRepository())

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    register_error_handlers(app)

    app.include_router(health_router.router, prefix=settings.api_prefix)
    app.include_router(cards_router.router, prefix=settings.api_prefix)
    app.include_router(users_router.router, prefix=settings.api_prefix)
    return app


app = create_app()
