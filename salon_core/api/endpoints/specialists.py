"""
Specialist Management Endpoints
"""
from fastapi import APIRouter, Depends, status

from salon_core.api.deps import get_tenant_scope
from salon_core.core.tenant_scope import TenantScope
from salon_core.core.exceptions import SpecialistNotFoundError
from salon_core.models.service import Specialist
from salon_core.schemas.service import SpecialistCreate, SpecialistResponse, SpecialistUpdate
from salon_core.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/specialists", tags=["specialists"])


@router.get("", response_model=list[SpecialistResponse])
async def list_specialists(scope: TenantScope = Depends(get_tenant_scope)):
    return scope.query(Specialist).order_by(Specialist.name).all()


@router.get("/{specialist_id}", response_model=SpecialistResponse)
async def get_specialist(
    specialist_id: str,
    scope: TenantScope = Depends(get_tenant_scope)
):
    return scope.get(Specialist, specialist_id, SpecialistNotFoundError)


@router.post("", response_model=SpecialistResponse, status_code=status.HTTP_201_CREATED)
async def create_specialist(
    specialist_data: SpecialistCreate,
    scope: TenantScope = Depends(get_tenant_scope)
):
    specialist = scope.create(Specialist, specialist_data.model_dump())
    scope.db.commit()
    scope.db.refresh(specialist)

    logger.info(f"Specialist created: {specialist.id}", extra={"tenant_id": scope.tenant_id})
    return specialist


@router.patch("/{specialist_id}", response_model=SpecialistResponse)
async def update_specialist(
    specialist_id: str,
    specialist_data: SpecialistUpdate,
    scope: TenantScope = Depends(get_tenant_scope)
):
    specialist = scope.get(Specialist, specialist_id, SpecialistNotFoundError)
    scope.update(specialist, specialist_data.model_dump(exclude_unset=True))
    scope.db.commit()
    scope.db.refresh(specialist)
    return specialist
