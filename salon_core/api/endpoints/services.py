"""
Service Management Endpoints

Admin CRUD for a salon's service menu. Every query goes through the
caller's TenantScope, so a list is always "my salon's services" no
matter what the request says.
"""
from fastapi import APIRouter, Depends, status

from salon_core.api.deps import get_tenant_scope
from salon_core.core.tenant_scope import TenantScope
from salon_core.core.exceptions import ServiceNotFoundError
from salon_core.models.service import Service
from salon_core.schemas.service import ServiceCreate, ServiceResponse, ServiceUpdate
from salon_core.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=list[ServiceResponse])
async def list_services(
    include_inactive: bool = True,
    scope: TenantScope = Depends(get_tenant_scope)
):
    """
    List the caller's services.

    TENANT_ISOLATION: Query-string or header attempts to name another salon
    are ignored; the list is re-scoped to the caller's own tenant.
    """
    query = scope.query(Service)
    if not include_inactive:
        query = query.filter(Service.is_active == True)  # noqa: E712
    return query.order_by(Service.name).all()


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: str,
    scope: TenantScope = Depends(get_tenant_scope)
):
    return scope.get(Service, service_id, ServiceNotFoundError)


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_service(
    service_data: ServiceCreate,
    scope: TenantScope = Depends(get_tenant_scope)
):
    service = scope.create(Service, service_data.model_dump())
    scope.db.commit()
    scope.db.refresh(service)

    logger.info(f"Service created: {service.id}", extra={"tenant_id": scope.tenant_id})
    return service


@router.patch("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: str,
    service_data: ServiceUpdate,
    scope: TenantScope = Depends(get_tenant_scope)
):
    service = scope.get(Service, service_id, ServiceNotFoundError)
    scope.update(service, service_data.model_dump(exclude_unset=True))
    scope.db.commit()
    scope.db.refresh(service)

    logger.info(f"Service updated: {service.id}", extra={"tenant_id": scope.tenant_id})
    return service


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service(
    service_id: str,
    scope: TenantScope = Depends(get_tenant_scope)
):
    """
    Retire a service.

    Waitlist entries keep pointing at their service, so the row stays and
    is only deactivated. It disappears from the public menu and no longer
    accepts new waitlist entries.
    """
    service = scope.get(Service, service_id, ServiceNotFoundError)
    scope.update(service, {"is_active": False})
    scope.db.commit()

    logger.info(f"Service deactivated: {service_id}", extra={"tenant_id": scope.tenant_id})
    return None
