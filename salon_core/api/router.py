"""
API Router Table

The single place where each router's minimum role is declared. Handlers
do not check roles themselves.

    router              minimum role
    ------------------  -------------------------------
    auth                none (login/logout/signup public,
                        me/refresh need any valid session)
    public              none (scoped by URL slug)
    services            tenant_admin
    specialists         tenant_admin
    waitlist            tenant_admin
    consent-templates   tenant_admin
    platform            super_admin
"""
from fastapi import APIRouter, Depends

from salon_core.api.endpoints import auth, consent_templates, platform, public, services, specialists, waitlist
from salon_core.core.permissions import require_super_admin, require_tenant_admin

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(public.router)

for tenant_router in (services.router, specialists.router, waitlist.router, consent_templates.router):
    api_router.include_router(tenant_router, dependencies=[Depends(require_tenant_admin)])

api_router.include_router(platform.router, dependencies=[Depends(require_super_admin)])
