"""
API Dependencies

Reusable FastAPI dependencies that hand handlers an already-authorized,
tenant-scoped context.

Admin handlers never receive a raw tenant id. They receive a TenantScope
built from the resolved Principal, and every query they run goes through
it.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from salon_core.database import get_db
from salon_core.core.permissions import get_principal
from salon_core.core.principal import Principal
from salon_core.core.tenant_scope import TenantScope
from salon_core.core.exceptions import TenantNotFoundError
from salon_core.models.tenant import Tenant


def get_tenant_scope(
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db)
) -> TenantScope:
    """Scope for the authenticated admin's own salon."""
    return TenantScope.for_principal(db, principal)


def get_public_tenant(
    tenant_slug: str,
    db: Session = Depends(get_db)
) -> Tenant:
    """
    Salon addressed by the URL path of a public route.

    Inactive and unknown salons look the same to the caller.
    """
    tenant = db.query(Tenant).filter(
        Tenant.slug == tenant_slug.lower(),
        Tenant.is_active == True  # noqa: E712
    ).first()
    if not tenant:
        raise TenantNotFoundError(tenant_slug)
    return tenant


def get_public_scope(
    tenant: Tenant = Depends(get_public_tenant),
    db: Session = Depends(get_db)
) -> TenantScope:
    return TenantScope.for_public_tenant(db, tenant)
