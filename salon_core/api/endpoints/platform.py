"""
Platform Endpoints (super admin)

Salon metadata and provisioning. These never read tenant-owned records;
the router is mounted behind RoleGate(SUPER_ADMIN).
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from salon_core.database import get_db
from salon_core.models.tenant import Tenant
from salon_core.schemas.auth import AdminResponse
from salon_core.schemas.platform import TenantProvisionRequest, TenantProvisionResponse, TenantResponse
from salon_core.services import auth_service
from salon_core.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/platform", tags=["platform"])


@router.get("/tenants", response_model=list[TenantResponse])
async def list_tenants(db: Session = Depends(get_db)):
    return db.query(Tenant).order_by(Tenant.created_at.desc()).all()


@router.post("/tenants", response_model=TenantProvisionResponse, status_code=status.HTTP_201_CREATED)
async def provision_tenant(
    provision: TenantProvisionRequest,
    db: Session = Depends(get_db)
):
    """Create a salon together with its first tenant_admin."""
    account = auth_service.create_tenant_with_admin(
        db,
        salon_name=provision.salon_name,
        slug=provision.slug,
        email=provision.email,
        password=provision.password,
        full_name=provision.full_name,
    )
    return TenantProvisionResponse(
        tenant=TenantResponse.model_validate(account.tenant),
        admin=AdminResponse.model_validate(account),
    )
