"""
Service and Specialist Models

The bookable menu of a salon and the people who perform it. Both are
plain tenant-owned records; their admin CRUD runs entirely through
TenantScope.
"""
from sqlalchemy import Column, String, Text, Boolean, DateTime, Integer, Numeric, Index
from datetime import datetime
from salon_core.database import Base
from salon_core.models.tenant_owned import TenantOwnedMixin
import uuid


class Service(TenantOwnedMixin, Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    duration_minutes = Column(Integer, default=60, nullable=False)
    price = Column(Numeric(10, 2), default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('idx_service_tenant_active', 'tenant_id', 'is_active'),
    )

    def __repr__(self):
        return f"<Service {self.name} (tenant={self.tenant_id})>"


class Specialist(TenantOwnedMixin, Base):
    __tablename__ = "specialists"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String(255), nullable=False)
    title = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('idx_specialist_tenant_active', 'tenant_id', 'is_active'),
    )

    def __repr__(self):
        return f"<Specialist {self.name} (tenant={self.tenant_id})>"
