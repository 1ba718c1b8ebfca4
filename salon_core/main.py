"""
Main FastAPI Application

Wires the request pipeline for the salon admin API:

    CORS -> PrincipalMiddleware (401) -> RoleGate (403) -> TenantScope -> handler

Routers and their minimum roles live in salon_core.api.router; this module
only assembles middleware, error translation and lifecycle hooks.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import time
from contextlib import asynccontextmanager

from salon_core import __version__
from salon_core.config import get_settings
from salon_core.database import engine, init_db
from salon_core.middleware.principal import PrincipalMiddleware
from salon_core.utils.logging import setup_logging, get_logger
from salon_core.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    InvalidStateTransitionError,
    RateLimitExceeded,
    TenantIsolationError,
)
from salon_core.api.router import api_router

settings = get_settings()

setup_logging(
    log_level=settings.LOG_LEVEL,
    json_format=(settings.ENVIRONMENT == "production")
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Salon admin API {__version__} starting ({settings.ENVIRONMENT})")

    if settings.ENVIRONMENT in ("development", "test"):
        logger.warning(f"Creating tables directly ({settings.ENVIRONMENT} only)")
        init_db()

    if settings.ENVIRONMENT == "production" and settings.SECRET_KEY.startswith("dev-"):
        logger.error("SECRET_KEY is the development default; sessions are forgeable")

    yield

    engine.dispose()
    logger.info("Database connections released, shutdown complete")


app = FastAPI(
    title="Salon Admin API",
    description="Multi-tenant salon admin API with per-request principal resolution, role gating and tenant isolation",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


# ============================================================================
# MIDDLEWARE
# ============================================================================
# Starlette runs the last added middleware first, so registration order
# below is innermost to outermost.

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Process-Time"] = f"{time.perf_counter() - started:.6f}"
    return response


# CRITICAL: Nothing below this point runs for a protected path without a
# valid session.
app.add_middleware(PrincipalMiddleware)

# Outermost, so the resolver's 401s still carry CORS headers. The session
# cookie needs credentials, which in turn needs explicit origins.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================

# Error classes answered as {"detail", "type"} with their own headers
ERROR_TYPES = {
    AuthenticationError: "authentication_error",
    ForbiddenError: "permission_denied",
    ConflictError: "conflict",
    RateLimitExceeded: "rate_limit_exceeded",
}


def _tagged_error(exc, error_type: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "type": error_type, **extra},
        headers=getattr(exc, "headers", None) or {}
    )


def _register_tagged_handler(exc_class, error_type: str) -> None:
    async def handler(request: Request, exc):
        return _tagged_error(exc, error_type)

    app.add_exception_handler(exc_class, handler)


for _exc_class, _error_type in ERROR_TYPES.items():
    _register_tagged_handler(_exc_class, _error_type)


@app.exception_handler(TenantIsolationError)
async def tenant_isolation_error_handler(request: Request, exc: TenantIsolationError):
    """
    Tenant scope could not be established or would have been crossed.

    CRITICAL: Logged at error level with the caller's identity; these
    should page someone.
    """
    principal = getattr(request.state, "principal", None)
    logger.error(
        f"TENANT ISOLATION VIOLATION: {exc.detail}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "admin_id": getattr(principal, "admin_id", None),
            "tenant_id": getattr(principal, "tenant_id", None),
        }
    )
    return _tagged_error(exc, "tenant_isolation_error")


@app.exception_handler(InvalidStateTransitionError)
async def invalid_transition_error_handler(request: Request, exc: InvalidStateTransitionError):
    return _tagged_error(
        exc,
        "invalid_state_transition",
        action=exc.action,
        current_status=exc.current_status,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Last resort for anything not translated above.

    SECURITY: Only DEBUG builds echo the exception text back.
    """
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={"path": request.url.path, "method": request.method}
    )

    body = {"detail": "Internal server error", "type": "internal_error"}
    if settings.DEBUG:
        body = {"detail": str(exc), "type": type(exc).__name__}
    return JSONResponse(status_code=500, content=body)


# ============================================================================
# ROUTES
# ============================================================================

@app.get("/health", tags=["health"])
async def health_check():
    """Liveness probe. Public, touches nothing but the process."""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "version": __version__
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": "Salon Admin API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


app.include_router(api_router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "salon_core.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
