"""
Database Models

Every model except Tenant and AdminAccount is tenant-owned and carries
a tenant_id through TenantOwnedMixin.
"""
from salon_core.models.tenant import Tenant
from salon_core.models.admin import AdminAccount, AdminRole
from salon_core.models.service import Service, Specialist
from salon_core.models.waitlist import WaitlistEntry, WaitlistStatus
from salon_core.models.consent import ConsentTemplate, ConsentStatus

__all__ = [
    "Tenant",
    "AdminAccount",
    "AdminRole",
    "Service",
    "Specialist",
    "WaitlistEntry",
    "WaitlistStatus",
    "ConsentTemplate",
    "ConsentStatus",
]
