"""
Consent Template Schemas
"""
from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import datetime
from salon_core.models.consent import ConsentStatus

SectionType = Literal["header", "paragraph", "list", "declaration", "checkbox", "signature"]
Frequency = Literal["first_visit_only", "every_visit", "annually", "bi_annually"]


class ConsentSection(BaseModel):
    type: SectionType
    content: str = ""
    order: int = Field(0, ge=0)
    required: bool = False
    options: Optional[list[str]] = None


class RequiredFor(BaseModel):
    services: list[str] = []
    frequency: Frequency = "first_visit_only"


class ConsentTemplateCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    sections: list[ConsentSection] = []
    required_for: RequiredFor = RequiredFor()


class ConsentTemplateUpdate(BaseModel):
    """Draft edits. Status and version change only through lifecycle actions."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    sections: Optional[list[ConsentSection]] = None
    required_for: Optional[RequiredFor] = None


class ConsentTemplateResponse(BaseModel):
    id: str
    tenant_id: str
    name: str
    description: str
    version: int
    status: ConsentStatus
    sections: list[ConsentSection]
    required_for: RequiredFor
    created_at: datetime
    updated_at: datetime
    published_at: Optional[datetime]
    archived_at: Optional[datetime]

    class Config:
        from_attributes = True


class ConsentTemplateListResponse(BaseModel):
    templates: list[ConsentTemplateResponse]
    total: int
