"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (create_app) with routers for auth,
    leave, attendance and settings
  - Configure middleware (CORS, body limit, request context)
  - Own process-scoped state: login rate limiter, verification code sweeper,
    connection pool
  - Expose health check and metrics endpoints

Collaborators:
  - api: routers
  - rate_limit.LoginRateLimiter: per-IP failed-login tracking
  - jobs.MaintenanceSweeper: hourly expired-code cleanup and limiter pruning
  - infrastructure.db.pool: psycopg connection pool

Constraints:
  - Settings are validated in the lifespan (startup), not at import time
  - The pool is not opened when APP_ENV selects in-memory repositories

Notes:
  - Middleware order (last added runs first): RequestContext -> CORS ->
    BodyLimit -> routes
  - /healthz follows Kubernetes health check convention
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from .api import attendance_router, auth_router, leave_router, settings_router
from .config import get_settings
from .container import get_email_verification_service
from .exception_handlers import register_exception_handlers
from .infrastructure.db import check_database, close_pool, init_pool
from .jobs import MaintenanceSweeper
from .logger import logger
from .metrics import get_metrics_response
from .middleware import BodyLimitMiddleware, RequestContextMiddleware
from .rate_limit import LoginRateLimiter


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and initializes pool."""
    settings = get_settings()

    if not settings.is_test():
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )

    app.state.sweeper.start()

    logger.info(
        "Intern API starting up",
        extra={
            "app_env": settings.app_env,
            "login_max_attempts": settings.login_max_attempts,
            "login_lockout_minutes": settings.login_lockout_minutes,
            "db_pool_min": settings.db_pool_min_size,
            "db_pool_max": settings.db_pool_max_size,
        },
    )
    yield

    app.state.sweeper.stop()
    app.state.login_rate_limiter.reset()
    close_pool()
    logger.info("Intern API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Intern Register API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Login, verification codes, registration"},
            {"name": "leave", "description": "Leave requests and attachments"},
            {"name": "attendance", "description": "Sign in / sign out"},
            {"name": "settings", "description": "Profile settings"},
        ],
    )

    # R: Process-scoped state, created here so TestClient works without a lifespan
    app.state.login_rate_limiter = LoginRateLimiter(
        max_attempts=settings.login_max_attempts,
        lockout_seconds=settings.login_lockout_minutes * 60,
    )
    app.state.sweeper = MaintenanceSweeper(
        get_email_verification_service,
        interval_seconds=settings.verification_cleanup_interval_seconds,
        rate_limiter=app.state.login_rate_limiter,
    )

    app.add_middleware(BodyLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(auth_router)
    app.include_router(leave_router)
    app.include_router(attendance_router)
    app.include_router(settings_router)

    register_exception_handlers(app)

    @app.get("/healthz", tags=["health"])
    def healthz(request: Request):
        """
        R: Health check that verifies database connectivity.

        Returns:
            ok: True if the store is reachable
            db: "connected", "disconnected" or "in-memory"
            request_id: Correlation ID for this request
        """
        if get_settings().is_test():
            db_status = "in-memory"
        else:
            db_status = "connected" if check_database() else "disconnected"
        return {
            "ok": db_status != "disconnected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get("/metrics", tags=["health"])
    def metrics():
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


app = create_app()
