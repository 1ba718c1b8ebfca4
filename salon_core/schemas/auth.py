"""
Authentication Schemas

Request/response models for authentication endpoints.

None of the request models declare role or tenant fields. Pydantic drops
unknown keys, so a client that sends them has them ignored.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from salon_core.models.admin import AdminRole


class LoginRequest(BaseModel):
    """Login request body."""
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class SignupRequest(BaseModel):
    """Self-service salon signup."""
    salon_name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=2, max_length=100, pattern="^[a-z0-9][a-z0-9-]*$")
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)
    full_name: Optional[str] = Field(None, max_length=255)

    class Config:
        json_schema_extra = {
            "example": {
                "salon_name": "Luna Beauty Studio",
                "slug": "luna-beauty",
                "email": "owner@lunabeauty.com",
                "password": "securepassword123",
                "full_name": "Ana Luna"
            }
        }


class AdminResponse(BaseModel):
    """Admin account as shown to its owner (no password hash)."""
    id: str
    email: str
    full_name: Optional[str]
    role: AdminRole
    tenant_id: Optional[str]
    is_active: bool
    last_login_at: Optional[datetime]

    class Config:
        from_attributes = True


class SessionResponse(BaseModel):
    """Login / refresh response. The token itself only travels in the cookie."""
    success: bool = True
    admin: AdminResponse
    expires_at: datetime


class MeResponse(BaseModel):
    success: bool = True
    admin: AdminResponse
