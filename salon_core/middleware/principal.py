"""
Principal Middleware

Resolves who is calling before any route code runs.

Every request outside the public allowlist must carry a valid session
token (cookie, or Bearer header for API clients). If it does, the
Principal is stored on request.state.principal; if it doesn't, the
request is answered with 401 here and never reaches a handler.

Public routes get no principal at all. They scope themselves by the salon
slug in the URL path (see salon_core.api.endpoints.public).

The decision uses only the token and the process-wide signing key: no
database, no shared session state, nothing another request can affect.
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
import logging

from salon_core.core.security import extract_session_token, validate_session_token

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# Exact paths reachable without a session
PUBLIC_PATHS = frozenset({
    "/",
    "/health",
    "/docs",
    "/docs/oauth2-redirect",
    "/redoc",
    "/openapi.json",
    f"{API_PREFIX}/auth/login",
    f"{API_PREFIX}/auth/logout",
    f"{API_PREFIX}/auth/signup",
})

# Path prefixes reachable without a session
PUBLIC_PREFIXES = (
    f"{API_PREFIX}/public/",
)


def is_public_path(path: str) -> bool:
    if path in PUBLIC_PATHS or path.rstrip("/") in PUBLIC_PATHS:
        return True
    return path.startswith(PUBLIC_PREFIXES)


class PrincipalMiddleware(BaseHTTPMiddleware):
    """
    Attach the caller's Principal or reject with 401.

    SECURITY: Fails closed. Anything that is not explicitly public and
    lacks a valid token is refused, including paths with no route.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.principal = None

        if request.method == "OPTIONS" or is_public_path(request.url.path):
            return await call_next(request)

        principal = validate_session_token(extract_session_token(request))

        if principal is None:
            logger.info(f"Unauthenticated request rejected: {request.method} {request.url.path}")
            return JSONResponse(
                status_code=401,
                content={"detail": "Not authenticated", "type": "authentication_error"},
                headers={"WWW-Authenticate": "Bearer"},
            )

        request.state.principal = principal
        logger.debug(
            f"Request by {principal.role.value} {principal.admin_id}",
            extra={"admin_id": principal.admin_id, "tenant_id": principal.tenant_id}
        )

        return await call_next(request)
