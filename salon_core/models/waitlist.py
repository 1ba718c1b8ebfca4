"""
Waitlist Entry Model

A client waiting for an opening on a service. Entries are never deleted;
removing one is a status transition to REMOVED.
"""
from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey, Index
from datetime import datetime
from salon_core.database import Base
from salon_core.models.tenant_owned import TenantOwnedMixin
import uuid
import enum


class WaitlistStatus(str, enum.Enum):
    ACTIVE = "active"
    CONVERTED = "converted"
    EXPIRED = "expired"
    REMOVED = "removed"


class WaitlistEntry(TenantOwnedMixin, Base):
    __tablename__ = "waitlist_entries"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    client_name = Column(String(255), nullable=False)
    client_email = Column(String(255), nullable=False)
    client_phone = Column(String(50), nullable=True)

    service_id = Column(String(36), ForeignKey("services.id", ondelete="RESTRICT"), nullable=False, index=True)
    specialist_id = Column(String(36), ForeignKey("specialists.id", ondelete="SET NULL"), nullable=True)
    variant_name = Column(String(255), nullable=False, default="")

    desired_date = Column(Date, nullable=True)
    time_preference = Column(String(50), nullable=True)  # morning, afternoon, evening, any

    # Plain string column; WaitlistStatus is validated at the API edge
    status = Column(String(20), default=WaitlistStatus.ACTIVE.value, nullable=False)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('idx_waitlist_tenant_status', 'tenant_id', 'status'),
        Index('idx_waitlist_tenant_created', 'tenant_id', 'created_at'),
    )

    def __repr__(self):
        return f"<WaitlistEntry {self.client_email} status={self.status} (tenant={self.tenant_id})>"
