"""
Authentication Endpoints

Login, logout, session refresh, current admin, and salon signup.

The session token is only ever written to an HttpOnly cookie; response
bodies describe the admin but never contain the token.
"""
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from salon_core.database import get_db
from salon_core.models.admin import AdminAccount
from salon_core.schemas.auth import LoginRequest, MeResponse, SessionResponse, SignupRequest, AdminResponse
from salon_core.core.security import (
    clear_session_cookie,
    extract_session_token,
    issue_session_token,
    refresh_session_token,
    set_session_cookie,
    validate_session_token,
)
from salon_core.core.exceptions import AuthenticationError, ForbiddenError
from salon_core.core.login_throttle import LoginThrottle, get_login_throttle
from salon_core.core.permissions import get_principal
from salon_core.core.principal import Principal
from salon_core.services import auth_service
from salon_core.config import get_settings
from salon_core.utils.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()

router = APIRouter(prefix="/auth", tags=["authentication"])


def _load_active_account(db: Session, principal: Principal) -> AdminAccount:
    """
    The account behind a principal, if it may still act.

    Fails closed: a deleted or deactivated account is unauthenticated even
    while its token has not expired yet.
    """
    account = db.query(AdminAccount).filter(AdminAccount.id == principal.admin_id).first()
    if not account or not account.is_active:
        raise AuthenticationError("Session is no longer valid")
    return account


@router.post("/login", response_model=SessionResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    throttle: LoginThrottle = Depends(get_login_throttle)
):
    """
    Verify email/password and start a session.

    Every credential failure returns the same 401. Repeated failures for
    one email lock it for a while (429), whether or not the account exists.
    """
    throttle.check(credentials.email)

    try:
        account = auth_service.authenticate(db, credentials.email, credentials.password)
    except AuthenticationError:
        throttle.record_failure(credentials.email)
        raise

    throttle.reset(credentials.email)
    auth_service.record_login(db, account)

    token = issue_session_token(account)
    set_session_cookie(response, token)

    logger.info(
        f"Successful login: admin={account.id}",
        extra={"admin_id": account.id, "tenant_id": account.tenant_id}
    )

    return SessionResponse(
        admin=AdminResponse.model_validate(account),
        expires_at=validate_session_token(token).expires_at,
    )


@router.post("/logout")
async def logout(response: Response):
    """Clear the session cookie. Safe to call without a session."""
    clear_session_cookie(response)
    return {"success": True}


@router.get("/me", response_model=MeResponse)
async def me(
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db)
):
    account = _load_active_account(db, principal)
    return MeResponse(admin=AdminResponse.model_validate(account))


@router.post("/refresh", response_model=SessionResponse)
async def refresh(
    request: Request,
    response: Response,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db)
):
    """
    Sliding session: re-issue the current token with a later expiry.

    Role and tenant are carried over unchanged from the current token.
    """
    account = _load_active_account(db, principal)

    token = refresh_session_token(extract_session_token(request))
    if token is None:
        raise AuthenticationError("Invalid or expired session")

    set_session_cookie(response, token)
    return SessionResponse(
        admin=AdminResponse.model_validate(account),
        expires_at=validate_session_token(token).expires_at,
    )


@router.post("/signup", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    registration: SignupRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Create a salon and its first admin, and sign that admin in.

    The new account is always a tenant_admin of the new salon. Role or
    tenant fields in the body are ignored.
    """
    if not settings.ALLOW_TENANT_SIGNUP:
        raise ForbiddenError("Self-service signup is disabled")

    account = auth_service.create_tenant_with_admin(
        db,
        salon_name=registration.salon_name,
        slug=registration.slug,
        email=registration.email,
        password=registration.password,
        full_name=registration.full_name,
    )

    token = issue_session_token(account)
    set_session_cookie(response, token)

    return SessionResponse(
        admin=AdminResponse.model_validate(account),
        expires_at=validate_session_token(token).expires_at,
    )
