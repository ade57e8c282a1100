"""Floor plan and table schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field


class TableInput(BaseModel):
    """Table as submitted by the layout editor; no id means a new table"""
    id: Optional[UUID] = None
    number: str = Field(min_length=1, max_length=20)
    label: Optional[str] = None
    seats: int = Field(ge=1)
    x: float = Field(ge=0)
    y: float = Field(ge=0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    rotation: Optional[float] = None


class TableResponse(BaseModel):
    """Table response"""
    id: UUID
    floor_plan_id: UUID
    number: str
    label: Optional[str]
    seats: int
    x: float
    y: float
    width: float
    height: float
    rotation: Optional[float]

    class Config:
        from_attributes = True


class FloorPlanCreate(BaseModel):
    """Create floor plan request"""
    name: str = Field(min_length=1, max_length=100)
    canvas_width: Optional[int] = Field(default=None, gt=0)
    canvas_height: Optional[int] = Field(default=None, gt=0)


class FloorPlanUpdate(BaseModel):
    """Rename or resize a floor plan"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    canvas_width: Optional[int] = Field(default=None, gt=0)
    canvas_height: Optional[int] = Field(default=None, gt=0)


class FloorPlanSave(BaseModel):
    """Full layout submitted on save; replaces the plan's table set"""
    name: Optional[str] = None
    canvas_width: Optional[int] = Field(default=None, gt=0)
    canvas_height: Optional[int] = Field(default=None, gt=0)
    tables: List[TableInput]


class FloorPlanResponse(BaseModel):
    """Floor plan with its tables"""
    id: UUID
    name: str
    is_active: bool
    canvas_width: int
    canvas_height: int
    tables: List[TableResponse] = []
    created_at: datetime

    class Config:
        from_attributes = True


class FloorPlanSummary(BaseModel):
    """Floor plan list entry"""
    id: UUID
    name: str
    is_active: bool
    canvas_width: int
    canvas_height: int
    table_count: int


class LayoutValidationResponse(BaseModel):
    """Result of the pre-save layout check"""
    valid: bool
    table_count: int
