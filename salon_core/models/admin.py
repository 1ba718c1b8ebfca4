"""
Admin Account Model

Operators who sign in to the admin panel. A tenant_admin is bound to
exactly one salon for life; a super_admin belongs to the platform and
never carries a tenant_id.
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, CheckConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship, validates
from datetime import datetime
from salon_core.database import Base
import uuid
import enum


class AdminRole(str, enum.Enum):
    """
    Admin roles.

    TENANT_ADMIN: Manages one salon's data
    SUPER_ADMIN: Platform operator, no tenant of its own
    """
    TENANT_ADMIN = "tenant_admin"
    SUPER_ADMIN = "super_admin"


ROLE_HIERARCHY = {
    AdminRole.TENANT_ADMIN: 1,
    AdminRole.SUPER_ADMIN: 2,
}


class AdminAccount(Base):
    __tablename__ = "admin_accounts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Emails are unique platform-wide so login needs no tenant hint.
    # Stored lower-cased; see normalize_email.
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)

    role = Column(
        SQLEnum(AdminRole, values_callable=lambda roles: [r.value for r in roles]),
        default=AdminRole.TENANT_ADMIN,
        nullable=False,
        index=True
    )

    tenant_id = Column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )

    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    last_login_at = Column(DateTime, nullable=True)

    tenant = relationship("Tenant", back_populates="admins")

    __table_args__ = (
        # tenant_admin rows need a tenant, super_admin rows must not have one
        CheckConstraint(
            "(role = 'tenant_admin' AND tenant_id IS NOT NULL) OR "
            "(role = 'super_admin' AND tenant_id IS NULL)",
            name="ck_admin_role_tenant",
        ),
    )

    def __repr__(self):
        return f"<AdminAccount {self.email} role={self.role.value} (tenant={self.tenant_id})>"

    @validates("email")
    def normalize_email(self, key, value):
        return value.strip().lower() if value else value

    @validates("tenant_id")
    def _freeze_tenant(self, key, value):
        # Assigned once; a tenant_admin is never moved to another salon
        if self.tenant_id is not None and value != self.tenant_id:
            raise ValueError("tenant_id of an admin account is immutable")
        return value
