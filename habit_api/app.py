from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from habit_api.core.config import Settings, get_settings
from habit_api.core.logging_config import configure_logging
from habit_api.core.rate_limiter import RateLimiter
from habit_api.db.create_tables import create_all
from habit_api.repositories.sql_repository import SQLRepository
from habit_api.routers import accounts as accounts_router
from habit_api.routers import habits as habits_router
from habit_api.services.account_service import AccountService
from habit_api.services.habit_service import HabitService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("Content-Security-Policy", "default-src 'none'; frame-ancestors 'none'")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse({"message": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse({"message": "Invalid request body", "errors": errors}, status_code=400)


def create_app(settings: Optional[Settings] = None, repository: Optional[SQLRepository] = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    repository = repository or SQLRepository()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.auto_create_tables:
            create_all()
        logger.info("Habit Tracker API started (env=%s)", settings.app_env)
        yield
        logger.info("Habit Tracker API stopped")

    app = FastAPI(title="Habit Tracker API", lifespan=lifespan)
    app.state.settings = settings
    app.state.rate_limiter = RateLimiter()
    app.state.account_service = AccountService(repository=repository, default_habits=settings.default_habits)
    app.state.habit_service = HabitService(repository=repository)

    allowed_cors = sorted(set(settings.cors_origins))
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_cors,
            allow_credentials="*" not in allowed_cors,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _invalid_body)

    @app.get("/")
    def root():
        return {"message": "Welcome to Habit Tracker API"}

    app.include_router(accounts_router.router)
    app.include_router(habits_router.router)
    return app
