"""
Consent Template Endpoints

Draft editing and lifecycle actions (publish, archive, new version,
delete). State rules live in consent_service; invalid actions come back
as 409.
"""
from typing import Optional

from fastapi import APIRouter, Depends, status

from salon_core.api.deps import get_tenant_scope
from salon_core.core.tenant_scope import TenantScope
from salon_core.models.consent import ConsentStatus
from salon_core.schemas.consent import (
    ConsentTemplateCreate,
    ConsentTemplateListResponse,
    ConsentTemplateResponse,
    ConsentTemplateUpdate,
)
from salon_core.services import consent_service

router = APIRouter(prefix="/consent-templates", tags=["consent-templates"])


@router.get("", response_model=ConsentTemplateListResponse)
async def list_consent_templates(
    status: Optional[ConsentStatus] = None,
    scope: TenantScope = Depends(get_tenant_scope)
):
    templates = consent_service.list_templates(scope, status)
    return ConsentTemplateListResponse(
        templates=[ConsentTemplateResponse.model_validate(t) for t in templates],
        total=len(templates),
    )


@router.get("/{template_id}", response_model=ConsentTemplateResponse)
async def get_consent_template(
    template_id: str,
    scope: TenantScope = Depends(get_tenant_scope)
):
    return consent_service.get_template(scope, template_id)


@router.post("", response_model=ConsentTemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_consent_template(
    template_data: ConsentTemplateCreate,
    scope: TenantScope = Depends(get_tenant_scope)
):
    """New templates always start as draft, version 1."""
    return consent_service.create_template(scope, template_data.model_dump())


@router.put("/{template_id}", response_model=ConsentTemplateResponse)
async def update_consent_template(
    template_id: str,
    template_data: ConsentTemplateUpdate,
    scope: TenantScope = Depends(get_tenant_scope)
):
    """Edit a draft. Published and archived templates answer 409."""
    return consent_service.update_template(
        scope, template_id, template_data.model_dump(exclude_unset=True)
    )


@router.post("/{template_id}/publish", response_model=ConsentTemplateResponse)
async def publish_consent_template(
    template_id: str,
    scope: TenantScope = Depends(get_tenant_scope)
):
    return consent_service.publish_template(scope, template_id)


@router.post("/{template_id}/archive", response_model=ConsentTemplateResponse)
async def archive_consent_template(
    template_id: str,
    scope: TenantScope = Depends(get_tenant_scope)
):
    return consent_service.archive_template(scope, template_id)


@router.post(
    "/{template_id}/new-version",
    response_model=ConsentTemplateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def new_consent_template_version(
    template_id: str,
    scope: TenantScope = Depends(get_tenant_scope)
):
    """Fork a published template into a new draft at the next version."""
    return consent_service.create_new_version(scope, template_id)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_consent_template(
    template_id: str,
    scope: TenantScope = Depends(get_tenant_scope)
):
    """Drafts only; published templates must be archived instead."""
    consent_service.delete_template(scope, template_id)
    return None
