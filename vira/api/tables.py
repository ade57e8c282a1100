"""Active floor plan layout endpoints used by the seating map editor"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vira.api.deps import require_tenant
from vira.database import get_db
from vira.engine.layout import check_table_geometry, validate_layout
from vira.models.tenant import Tenant
from vira.schemas.floor import FloorPlanSave, FloorPlanResponse, LayoutValidationResponse
from vira.services import floors as floor_service

router = APIRouter()


@router.get("", response_model=FloorPlanResponse)
async def get_layout(
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Load the active floor plan, creating the default one if needed"""
    return await floor_service.ensure_active_floor_plan(db, tenant.id)


@router.put("", response_model=FloorPlanResponse)
async def save_layout(
    layout: FloorPlanSave,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Save the full table set of the active floor plan"""
    return await floor_service.save_floor_plan(db, tenant.id, layout)


@router.post("/validate", response_model=LayoutValidationResponse)
async def validate(
    layout: FloorPlanSave,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Check a layout against the active plan's canvas before saving it"""
    validate_layout(layout.tables)
    plan = await floor_service.ensure_active_floor_plan(db, tenant.id)
    check_table_geometry(
        layout.tables,
        layout.canvas_width or plan.canvas_width,
        layout.canvas_height or plan.canvas_height,
    )
    return LayoutValidationResponse(valid=True, table_count=len(layout.tables))
