"""
Service and Specialist Schemas
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal


def _not_null(value):
    # Omit a field to leave it unchanged; null would clear a required column
    if value is None:
        raise ValueError("may not be null")
    return value


class ServiceBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    duration_minutes: int = Field(60, ge=5, le=24 * 60)
    price: Decimal = Field(Decimal("0"), ge=0)
    is_active: bool = True


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(BaseModel):
    """All fields optional; a field that is sent may not be null."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, ge=5, le=24 * 60)
    price: Optional[Decimal] = Field(None, ge=0)
    is_active: Optional[bool] = None

    @field_validator("name", "duration_minutes", "price", "is_active")
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)


class ServiceResponse(ServiceBase):
    id: str
    tenant_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PublicServiceResponse(BaseModel):
    """Fields a salon's booking page may show. No ownership data."""
    id: str
    name: str
    category: Optional[str]
    description: Optional[str]
    duration_minutes: int
    price: Decimal

    class Config:
        from_attributes = True


class SpecialistBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    title: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    is_active: bool = True


class SpecialistCreate(SpecialistBase):
    pass


class SpecialistUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    title: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None

    @field_validator("name", "is_active")
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)


class SpecialistResponse(SpecialistBase):
    id: str
    tenant_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class PublicSpecialistResponse(BaseModel):
    id: str
    name: str
    title: Optional[str]

    class Config:
        from_attributes = True
