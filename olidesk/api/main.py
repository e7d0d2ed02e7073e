"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (title, version, lifespan)
  - Configure middleware (authentication gate, CORS, request context)
  - Mount the v1 router under /api/v1
  - Expose the health check endpoint

Collaborators:
  - AuthenticationGateMiddleware: Bearer JWT gate for every non-public path
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: clients, forms, users and members endpoints
  - container: repositories and token service

Constraints:
  - JWT_SECRET must be set; an empty secret aborts startup
  - Test environments skip the database pool (in-memory repositories)

Notes:
  - Middleware order (last added = outermost):
    RequestContext -> CORS -> AuthenticationGate -> routes
  - /healthz follows Kubernetes health check convention
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..application.dev_seed_user import ensure_dev_user
from ..container import (
    get_client_repository,
    get_password_hasher,
    get_token_service,
    get_user_repository,
)
from ..crosscutting.config import get_settings
from ..crosscutting.exceptions import DatabaseError
from ..crosscutting.logger import logger
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from ..identity.auth_gate import DEFAULT_PUBLIC_PATHS, AuthenticationGateMiddleware
from ..identity.tokens import TokenService
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and initializes pool."""
    settings = get_settings()

    # R: Fail fast on a missing JWT secret before accepting traffic
    get_token_service()

    use_pool = not settings.is_test()
    if use_pool:
        init_pool(
            database_url=settings.get_database_url(),
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    try:
        try:
            ensure_dev_user(
                settings,
                user_repo=get_user_repository(),
                password_hasher=get_password_hasher(),
            )
        except Exception:
            logger.exception("Dev seed user could not be ensured")
            raise

        logger.info(
            "Olidesk API starting up",
            extra={
                "app_env": settings.app_env,
                "port": settings.port,
                "geocoder": settings.nominatim_url,
            },
        )

        yield

    finally:
        if use_pool:
            close_pool()
        logger.info("Olidesk API shutting down")


def create_app(
    *,
    token_service_provider: Callable[[], TokenService] | None = None,
) -> FastAPI:
    """
    Construye la aplicación.

    Args:
        token_service_provider: Override del TokenService usado por el gate
            (por defecto, el singleton del container).
    """
    settings = get_settings()

    app = FastAPI(
        title="Olidesk API",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "clients", "description": "Client registry"},
            {"name": "forms", "description": "Service forms (tickets)"},
            {"name": "users", "description": "Accounts and authentication (JWT)"},
            {"name": "members", "description": "Technicians available for forms"},
        ],
    )

    # R: Authentication gate (innermost of the three)
    app.add_middleware(
        AuthenticationGateMiddleware,
        token_service_provider=token_service_provider or get_token_service,
        public_paths=DEFAULT_PUBLIC_PATHS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
    )

    # R: Request context runs first so 401s from the gate carry a request_id
    app.add_middleware(RequestContextMiddleware)

    app.include_router(router, prefix=API_PREFIX)

    register_exception_handlers(app)

    @app.get("/healthz")
    def healthz(request: Request):
        """Liveness + DB ping. Public (see DEFAULT_PUBLIC_PATHS)."""
        try:
            db_up = get_client_repository().ping()
        except DatabaseError as exc:
            logger.warning("DB ping failed", extra={"error_id": exc.error_id})
            db_up = False

        return {
            "ok": db_up,
            "db": "connected" if db_up else "disconnected",
            "request_id": getattr(request.state, "request_id", None),
        }

    return app


app = create_app()
