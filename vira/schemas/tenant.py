"""Tenant schemas"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID
from pydantic import BaseModel, Field, field_validator


class TenantCreate(BaseModel):
    """Create tenant request"""
    name: str = Field(min_length=1)
    slug: Optional[str] = None
    phone: Optional[str] = None


class TenantUpdate(BaseModel):
    """Update tenant request; name and is_active may be omitted but not cleared"""
    name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "is_active")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class TenantResponse(BaseModel):
    """Tenant response"""
    id: UUID
    slug: str
    name: str
    phone: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RestaurantInfoUpdate(BaseModel):
    """Replace restaurant info; omitted fields are cleared"""
    address: Optional[str] = None
    work_schedule: Optional[Dict[str, Any]] = None
    about: Optional[str] = None


class RestaurantInfoResponse(BaseModel):
    """Restaurant info response"""
    tenant_id: UUID
    address: Optional[str]
    work_schedule: Optional[Dict[str, Any]]
    about: Optional[str]
    updated_at: datetime

    class Config:
        from_attributes = True
