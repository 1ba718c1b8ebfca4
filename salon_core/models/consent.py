"""
Consent Template Model

Versioned consent forms clients sign before a treatment. Each version is
its own row; "new version" forks a fresh draft instead of editing a
published record in place.
"""
from sqlalchemy import Column, String, Text, DateTime, Integer, JSON, Index, UniqueConstraint
from datetime import datetime
from salon_core.database import Base
from salon_core.models.tenant_owned import TenantOwnedMixin
import uuid
import enum


class ConsentStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ConsentTemplate(TenantOwnedMixin, Base):
    __tablename__ = "consent_templates"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    version = Column(Integer, default=1, nullable=False)
    status = Column(String(20), default=ConsentStatus.DRAFT.value, nullable=False)

    # Ordered list of {type, content, order, required, options}
    sections = Column(JSON, nullable=False, default=list)
    # {services: [service ids], frequency}
    required_for = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    published_at = Column(DateTime, nullable=True)
    archived_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index('idx_consent_tenant_status', 'tenant_id', 'status'),
        # One row per version of a named template within a salon
        UniqueConstraint('tenant_id', 'name', 'version', name='uq_consent_tenant_name_version'),
    )

    def __repr__(self):
        return f"<ConsentTemplate {self.name} v{self.version} {self.status} (tenant={self.tenant_id})>"
