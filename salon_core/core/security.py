"""
Security Module

Password hashing and session tokens.

Sessions are self-contained HS256 JWTs (python-jose) carried in an
HttpOnly cookie. Validation needs nothing but the process-wide signing
key, so there is no shared session table to look up or lock.

Token claims:
- sub: admin account id
- role: tenant_admin | super_admin
- tenant_id: copied from the account at issue time (null for super_admin)
- iat / exp
"""
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional, Dict, Any
from fastapi import Request, Response
from jose import JWTError, jwt
from passlib.context import CryptContext
from salon_core.config import get_settings
from salon_core.core.principal import Principal
from salon_core.models.admin import AdminAccount, AdminRole

settings = get_settings()

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash (constant-time)."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    NOTE: Intentionally slow. Don't call this in hot paths.
    """
    return pwd_context.hash(password)


@lru_cache()
def dummy_password_hash() -> str:
    """Hash checked for unknown emails so a miss costs as much as a real check."""
    return pwd_context.hash("not-a-real-password")


def _encode(admin_id: str, role: AdminRole, tenant_id: Optional[str],
            expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    to_encode: Dict[str, Any] = {
        "sub": admin_id,
        "role": AdminRole(role).value,
        "tenant_id": tenant_id,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def issue_session_token(account: AdminAccount, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issue a session token for a verified account.

    role and tenant_id come from the stored account, never from the request
    that triggered the login.
    """
    return _encode(account.id, account.role, account.tenant_id, expires_delta)


def validate_session_token(token: Optional[str]) -> Optional[Principal]:
    """
    Verify signature and expiry and build the Principal.

    Returns None for anything that is not a fully valid token: bad
    signature, expired, missing claims, unknown role, or a role/tenant
    combination that no account could have produced.
    """
    if not token:
        return None

    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require_exp": True, "require_iat": True, "require_sub": True},
        )
    except JWTError:
        return None

    try:
        return Principal(
            admin_id=payload["sub"],
            role=AdminRole(payload.get("role")),
            tenant_id=payload.get("tenant_id"),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (KeyError, TypeError, ValueError):
        return None


def refresh_session_token(token: Optional[str]) -> Optional[str]:
    """
    Sliding refresh: re-issue a still-valid token with a later expiry.

    role and tenant_id are carried over from the validated principal.
    Expired or invalid tokens are not refreshable.
    """
    principal = validate_session_token(token)
    if principal is None:
        return None
    return _encode(principal.admin_id, principal.role, principal.tenant_id)


def extract_session_token(request: Request) -> Optional[str]:
    """
    Read the session token from the cookie, or from an
    ``Authorization: Bearer`` header for non-browser API clients.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token

    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[len("Bearer "):].strip() or None
    return None


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite=settings.SESSION_COOKIE_SAMESITE,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite=settings.SESSION_COOKIE_SAMESITE,
        path="/",
    )
