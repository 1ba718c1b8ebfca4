"""
Tenant-Owned Mixin

Shared shape of every row that belongs to exactly one salon (services,
specialists, waitlist entries, consent templates).

tenant_id is stamped once at creation by TenantScope and may never change
afterwards. The before_update hook below refuses any flush that tries.
"""
from sqlalchemy import Column, String, ForeignKey, event, inspect
from sqlalchemy.orm import declared_attr
import logging

from salon_core.core.exceptions import TenantIsolationError

logger = logging.getLogger(__name__)


class TenantOwnedMixin:
    """Adds the tenant_id column and marks the model as tenant-scoped."""

    @declared_attr
    def tenant_id(cls):
        return Column(
            String(36),
            ForeignKey("tenants.id", ondelete="CASCADE"),
            nullable=False,
            index=True
        )


@event.listens_for(TenantOwnedMixin, "before_update", propagate=True)
def _refuse_tenant_reassignment(mapper, connection, target):
    history = inspect(target).attrs.tenant_id.history
    if history.deleted and history.deleted[0] is not None:
        logger.error(
            f"Refused tenant reassignment on {mapper.class_.__name__} {target.id}",
            extra={"tenant_id": history.deleted[0]}
        )
        raise TenantIsolationError("tenant_id of a tenant-owned record is immutable")
