"""
Principal

The resolved identity of the caller for one request. Built only by
validate_session_token() from a verified token and never from request
fields. Frozen so nothing downstream can re-point it at another tenant.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from salon_core.models.admin import AdminRole, ROLE_HIERARCHY


@dataclass(frozen=True)
class Principal:
    admin_id: str
    role: AdminRole
    tenant_id: Optional[str]
    issued_at: datetime
    expires_at: datetime

    def __post_init__(self):
        if self.role == AdminRole.TENANT_ADMIN and not self.tenant_id:
            raise ValueError("tenant_admin principal requires a tenant_id")
        if self.role == AdminRole.SUPER_ADMIN and self.tenant_id:
            raise ValueError("super_admin principal cannot carry a tenant_id")

    def has_role(self, required_role: AdminRole) -> bool:
        return ROLE_HIERARCHY[self.role] >= ROLE_HIERARCHY[required_role]

    @property
    def is_super_admin(self) -> bool:
        return self.role == AdminRole.SUPER_ADMIN
