"""
Waitlist Schemas
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import date, datetime
from salon_core.models.waitlist import WaitlistStatus


class WaitlistEntryResponse(BaseModel):
    id: str
    tenant_id: str
    client_name: str
    client_email: str
    client_phone: Optional[str]
    service_id: str
    specialist_id: Optional[str]
    variant_name: str
    desired_date: Optional[date]
    time_preference: Optional[str]
    status: WaitlistStatus
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class WaitlistCounts(BaseModel):
    active: int = 0
    converted: int = 0
    expired: int = 0
    removed: int = 0


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int
    has_more: bool


class WaitlistListResponse(BaseModel):
    entries: list[WaitlistEntryResponse]
    counts: WaitlistCounts
    pagination: Pagination


class StatusUpdate(BaseModel):
    status: WaitlistStatus


class BulkStatusUpdate(BaseModel):
    ids: list[str] = Field(..., min_length=1, max_length=500)
    status: WaitlistStatus


class BulkStatusResponse(BaseModel):
    success: bool = True
    modified_count: int


class WaitlistJoinRequest(BaseModel):
    """Public join request. Status and salon are never taken from the body."""
    client_name: str = Field(..., min_length=1, max_length=255)
    client_email: EmailStr
    client_phone: Optional[str] = Field(None, max_length=50)
    service_id: str
    specialist_id: Optional[str] = None
    variant_name: str = Field("", max_length=255)
    desired_date: Optional[date] = None
    time_preference: Optional[str] = Field(None, pattern="^(morning|afternoon|evening|any)$")
    notes: Optional[str] = Field(None, max_length=2000)


class WaitlistJoinResponse(BaseModel):
    success: bool = True
    id: str
    status: WaitlistStatus
