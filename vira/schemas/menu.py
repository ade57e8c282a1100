"""Menu schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field, field_validator


class MenuCategoryCreate(BaseModel):
    """Create menu category"""
    name: str = Field(min_length=1)
    sort_order: int = 0
    is_active: bool = True


class MenuCategoryUpdate(BaseModel):
    """Update menu category"""
    name: Optional[str] = Field(default=None, min_length=1)
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("name", "sort_order", "is_active")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class MenuCategoryResponse(BaseModel):
    """Menu category response"""
    id: UUID
    tenant_id: UUID
    name: str
    sort_order: int
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class MenuItemCreate(BaseModel):
    """Create menu item request"""
    category_id: UUID
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price_cents: int = Field(ge=0)
    image_url: Optional[str] = None
    is_available: bool = True
    sort_order: int = 0


class MenuItemUpdate(BaseModel):
    """Update menu item request"""
    category_id: Optional[UUID] = None
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price_cents: Optional[int] = Field(default=None, ge=0)
    image_url: Optional[str] = None
    is_available: Optional[bool] = None
    sort_order: Optional[int] = None

    @field_validator("category_id", "name", "price_cents", "is_available", "sort_order")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class MenuItemResponse(BaseModel):
    """Menu item response"""
    id: UUID
    tenant_id: UUID
    category_id: UUID
    name: str
    description: Optional[str]
    price_cents: int
    image_url: Optional[str]
    is_available: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PublicMenuCategory(BaseModel):
    """Category with its available items, as shown to guests"""
    id: UUID
    name: str
    items: List[MenuItemResponse]
