"""
Tenant Model

A tenant is one salon/spa business and the isolation boundary for every
tenant-owned table. All tenants share one schema; rows are separated by
their tenant_id column.
"""
from sqlalchemy import Column, String, Boolean, DateTime, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from salon_core.database import Base
import uuid


class Tenant(Base):
    __tablename__ = "tenants"

    # UUIDs avoid enumeration of other salons by id
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String(255), nullable=False)

    # Public booking pages address a salon by slug (/api/v1/public/{slug}/...)
    slug = Column(String(100), unique=True, nullable=False, index=True)

    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    admins = relationship("AdminAccount", back_populates="tenant", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_tenant_active_slug', 'is_active', 'slug'),
    )

    def __repr__(self):
        return f"<Tenant {self.slug}>"
