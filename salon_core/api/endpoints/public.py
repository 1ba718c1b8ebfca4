"""
Public Booking-Page Endpoints

No session, no principal. The salon comes from the slug in the URL path
and nothing else: no header, cookie or body field can change it.
Responses carry only fields meant for the public booking page.
"""
from fastapi import APIRouter, Depends, status

from salon_core.api.deps import get_public_scope
from salon_core.core.tenant_scope import TenantScope
from salon_core.models.service import Service, Specialist
from salon_core.schemas.service import PublicServiceResponse, PublicSpecialistResponse
from salon_core.schemas.waitlist import WaitlistJoinRequest, WaitlistJoinResponse
from salon_core.services import waitlist_service

router = APIRouter(prefix="/public/{tenant_slug}", tags=["public"])


@router.get("/services", response_model=list[PublicServiceResponse])
async def list_public_services(scope: TenantScope = Depends(get_public_scope)):
    return (
        scope.query(Service)
        .filter(Service.is_active == True)  # noqa: E712
        .order_by(Service.name)
        .all()
    )


@router.get("/specialists", response_model=list[PublicSpecialistResponse])
async def list_public_specialists(scope: TenantScope = Depends(get_public_scope)):
    return (
        scope.query(Specialist)
        .filter(Specialist.is_active == True)  # noqa: E712
        .order_by(Specialist.name)
        .all()
    )


@router.post("/waitlist", response_model=WaitlistJoinResponse, status_code=status.HTTP_201_CREATED)
async def join_waitlist(
    join_request: WaitlistJoinRequest,
    scope: TenantScope = Depends(get_public_scope)
):
    """
    Put a client on this salon's waitlist.

    The service must be one of this salon's active services.
    """
    entry = waitlist_service.join_waitlist(scope, **join_request.model_dump())
    return WaitlistJoinResponse(id=entry.id, status=entry.status)
