"""
Waitlist Endpoints

Listing, single and bulk status changes for the caller's waitlist.
Entries are created by clients through the public join route.
"""
import math
from typing import Optional

from fastapi import APIRouter, Depends, Query

from salon_core.api.deps import get_tenant_scope
from salon_core.core.tenant_scope import TenantScope
from salon_core.models.waitlist import WaitlistStatus
from salon_core.schemas.waitlist import (
    BulkStatusResponse,
    BulkStatusUpdate,
    Pagination,
    StatusUpdate,
    WaitlistCounts,
    WaitlistEntryResponse,
    WaitlistListResponse,
)
from salon_core.services import waitlist_service

router = APIRouter(prefix="/waitlist", tags=["waitlist"])


@router.get("", response_model=WaitlistListResponse)
async def list_waitlist(
    status: Optional[WaitlistStatus] = None,
    service_id: Optional[str] = None,
    specialist_id: Optional[str] = None,
    search: Optional[str] = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    limit: int = Query(25, ge=1, le=200),
    scope: TenantScope = Depends(get_tenant_scope)
):
    """
    Filtered, paginated waitlist plus per-status counts.

    Counts cover the whole salon waitlist and are recomputed per request.
    """
    entries, total = waitlist_service.list_entries(
        scope,
        status=status,
        service_id=service_id,
        specialist_id=specialist_id,
        search=search,
        page=page,
        limit=limit,
    )
    pages = max(1, math.ceil(total / limit))

    return WaitlistListResponse(
        entries=[WaitlistEntryResponse.model_validate(e) for e in entries],
        counts=WaitlistCounts(**waitlist_service.status_counts(scope)),
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=pages,
            has_more=page < pages,
        ),
    )


@router.get("/{entry_id}", response_model=WaitlistEntryResponse)
async def get_waitlist_entry(
    entry_id: str,
    scope: TenantScope = Depends(get_tenant_scope)
):
    return waitlist_service.get_entry(scope, entry_id)


@router.patch("/{entry_id}/status", response_model=WaitlistEntryResponse)
async def update_waitlist_status(
    entry_id: str,
    update: StatusUpdate,
    scope: TenantScope = Depends(get_tenant_scope)
):
    """Set an entry's status. Setting the current status again is a no-op success."""
    return waitlist_service.transition_entry(scope, entry_id, update.status)


@router.post("/bulk-status", response_model=BulkStatusResponse)
async def bulk_update_waitlist_status(
    update: BulkStatusUpdate,
    scope: TenantScope = Depends(get_tenant_scope)
):
    """
    Set the status of many entries.

    Ids outside the caller's salon are skipped silently; modified_count
    reports only entries that were owned and actually changed.
    """
    modified = waitlist_service.bulk_transition(scope, update.ids, update.status)
    return BulkStatusResponse(modified_count=modified)
