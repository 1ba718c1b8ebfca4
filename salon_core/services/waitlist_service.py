"""
Waitlist lifecycle.

Statuses: active, converted, expired, removed. Any status may move to any
other; these are manual admin overrides, not an enforced progression.
Moving an entry to the status it already has is a successful no-op.
"""
from datetime import date
from typing import Optional

from sqlalchemy import func, or_

from salon_core.core.exceptions import ServiceNotFoundError, SpecialistNotFoundError, WaitlistEntryNotFoundError
from salon_core.core.tenant_scope import TenantScope
from salon_core.models.service import Service, Specialist
from salon_core.models.waitlist import WaitlistEntry, WaitlistStatus
from salon_core.utils.logging import get_logger

logger = get_logger(__name__)


def get_entry(scope: TenantScope, entry_id: str) -> WaitlistEntry:
    return scope.get(WaitlistEntry, entry_id, WaitlistEntryNotFoundError)


def list_entries(
    scope: TenantScope,
    *,
    status: Optional[WaitlistStatus] = None,
    service_id: Optional[str] = None,
    specialist_id: Optional[str] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 25,
) -> tuple[list[WaitlistEntry], int]:
    query = scope.query(WaitlistEntry)

    if status:
        query = query.filter(WaitlistEntry.status == WaitlistStatus(status).value)
    if service_id:
        query = query.filter(WaitlistEntry.service_id == service_id)
    if specialist_id:
        query = query.filter(WaitlistEntry.specialist_id == specialist_id)
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(
            WaitlistEntry.client_name.ilike(pattern),
            WaitlistEntry.client_email.ilike(pattern),
            WaitlistEntry.client_phone.ilike(pattern),
        ))

    total = query.count()
    entries = (
        query.order_by(WaitlistEntry.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return entries, total


def status_counts(scope: TenantScope) -> dict[str, int]:
    """Entries per status across the whole tenant, computed on every call."""
    counts = {s.value: 0 for s in WaitlistStatus}
    rows = (
        scope.query(WaitlistEntry)
        .with_entities(WaitlistEntry.status, func.count(WaitlistEntry.id))
        .group_by(WaitlistEntry.status)
        .all()
    )
    for status, count in rows:
        counts[status] = count
    return counts


def transition_entry(scope: TenantScope, entry_id: str, target: WaitlistStatus) -> WaitlistEntry:
    """
    Move one entry to ``target``.

    Written as a single UPDATE carrying the tenant filter; concurrent
    transitions on the same entry resolve last-write-wins.
    """
    target = WaitlistStatus(target)
    entry = get_entry(scope, entry_id)

    if entry.status == target.value:
        logger.debug(f"Waitlist entry {entry.id} already {target.value}")
        return entry

    scope.update_where(WaitlistEntry, [entry.id], {"status": target.value})
    scope.db.commit()
    scope.db.refresh(entry)

    logger.info(
        f"Waitlist entry {entry.id} -> {target.value}",
        extra={"tenant_id": scope.tenant_id}
    )
    return entry


def bulk_transition(scope: TenantScope, entry_ids: list[str], target: WaitlistStatus) -> int:
    """
    Move every listed entry owned by the tenant to ``target``.

    Ids from other tenants, unknown ids and entries already in ``target``
    are skipped without error. Returns how many entries actually changed.
    """
    target = WaitlistStatus(target)
    modified = scope.update_where(
        WaitlistEntry,
        entry_ids,
        {"status": target.value},
        WaitlistEntry.status != target.value,
    )
    scope.db.commit()

    logger.info(
        f"Bulk waitlist update -> {target.value}: {modified}/{len(entry_ids)} modified",
        extra={"tenant_id": scope.tenant_id}
    )
    return modified


def join_waitlist(
    scope: TenantScope,
    *,
    client_name: str,
    client_email: str,
    service_id: str,
    variant_name: str = "",
    client_phone: Optional[str] = None,
    specialist_id: Optional[str] = None,
    desired_date: Optional[date] = None,
    time_preference: Optional[str] = None,
    notes: Optional[str] = None,
) -> WaitlistEntry:
    """
    Add a client to the salon's waitlist.

    The service (and specialist, if given) must belong to the same salon.
    New entries always start ACTIVE.
    """
    service = scope.get(Service, service_id, ServiceNotFoundError)
    if not service.is_active:
        raise ServiceNotFoundError(service_id)
    if specialist_id:
        scope.get(Specialist, specialist_id, SpecialistNotFoundError)

    entry = scope.add(WaitlistEntry(
        client_name=client_name,
        client_email=client_email,
        client_phone=client_phone,
        service_id=service.id,
        specialist_id=specialist_id,
        variant_name=variant_name,
        desired_date=desired_date,
        time_preference=time_preference,
        notes=notes,
        status=WaitlistStatus.ACTIVE.value,
    ))
    scope.db.commit()
    scope.db.refresh(entry)

    logger.info(f"Waitlist entry created: {entry.id}", extra={"tenant_id": scope.tenant_id})
    return entry
