"""
Credential verification and account provisioning.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from salon_core.core.exceptions import AuthenticationError, InvalidInputError
from salon_core.core.security import dummy_password_hash, get_password_hash, verify_password
from salon_core.models.admin import AdminAccount, AdminRole
from salon_core.models.tenant import Tenant
from salon_core.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)

# One message for every failure so callers can't tell which part was wrong
INVALID_CREDENTIALS = "Invalid credentials"


def find_account_by_email(db: Session, email: str) -> Optional[AdminAccount]:
    return db.query(AdminAccount).filter(
        AdminAccount.email == email.strip().lower()
    ).first()


def authenticate(db: Session, email: str, password: str) -> AdminAccount:
    """
    Check an email/password pair.

    Unknown email, inactive account and wrong password all raise the same
    AuthenticationError. The reason only goes to the security log.
    """
    account = find_account_by_email(db, email)

    if account is None:
        # Burn a hash check anyway so timing matches the other paths
        verify_password(password, dummy_password_hash())
        reason = "unknown_email"
    elif not verify_password(password, account.hashed_password):
        reason = "invalid_password"
    elif not account.is_active:
        reason = "account_inactive"
    elif account.tenant is not None and not account.tenant.is_active:
        reason = "tenant_inactive"
    else:
        return account

    log_security_event(
        "failed_login",
        {"reason": reason, "admin_id": account.id if account else None},
        logger
    )
    raise AuthenticationError(INVALID_CREDENTIALS)


def record_login(db: Session, account: AdminAccount) -> None:
    account.last_login_at = datetime.utcnow()
    db.commit()


def create_tenant_with_admin(
    db: Session,
    *,
    salon_name: str,
    slug: str,
    email: str,
    password: str,
    full_name: Optional[str] = None,
) -> AdminAccount:
    """
    Create a salon and its first admin.

    Used by self-service signup and by platform provisioning. The account
    is always a tenant_admin of the new salon; callers cannot choose a role
    or attach it to an existing tenant.
    """
    slug = slug.strip().lower()
    if db.query(Tenant).filter(Tenant.slug == slug).first():
        raise InvalidInputError("Salon slug is already taken")

    if find_account_by_email(db, email):
        raise InvalidInputError("An admin with this email already exists")

    tenant = Tenant(name=salon_name, slug=slug, is_active=True)
    db.add(tenant)
    db.flush()

    account = AdminAccount(
        email=email,
        hashed_password=get_password_hash(password),
        full_name=full_name,
        role=AdminRole.TENANT_ADMIN,
        tenant_id=tenant.id,
        is_active=True,
    )
    db.add(account)
    db.commit()
    db.refresh(account)

    logger.info(f"Salon created: {tenant.slug} ({tenant.id}) with admin {account.id}")
    return account
