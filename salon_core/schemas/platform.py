"""
Platform (super admin) Schemas
"""
from pydantic import BaseModel
from datetime import datetime
from salon_core.schemas.auth import AdminResponse, SignupRequest


class TenantResponse(BaseModel):
    """Salon metadata only. Tenant-owned data is never exposed here."""
    id: str
    name: str
    slug: str
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class TenantProvisionRequest(SignupRequest):
    pass


class TenantProvisionResponse(BaseModel):
    tenant: TenantResponse
    admin: AdminResponse
