"""Floor plan API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from vira.api.deps import require_tenant
from vira.database import get_db
from vira.models.floor import FloorPlan
from vira.models.tenant import Tenant
from vira.schemas.floor import (
    FloorPlanCreate,
    FloorPlanUpdate,
    FloorPlanSave,
    FloorPlanResponse,
    FloorPlanSummary,
)
from vira.services import floors as floor_service

router = APIRouter()


def _summary(plan: FloorPlan) -> FloorPlanSummary:
    return FloorPlanSummary(
        id=plan.id,
        name=plan.name,
        is_active=plan.is_active,
        canvas_width=plan.canvas_width,
        canvas_height=plan.canvas_height,
        table_count=len(plan.tables),
    )


@router.get("", response_model=List[FloorPlanSummary])
async def list_floor_plans(
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """List floor plans, active first"""
    await floor_service.ensure_active_floor_plan(db, tenant.id)
    plans = await floor_service.list_floor_plans(db, tenant.id)
    return [_summary(plan) for plan in plans]


@router.post("", response_model=FloorPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_floor_plan(
    plan_data: FloorPlanCreate,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Create an additional (inactive) floor plan"""
    return await floor_service.create_floor_plan(db, tenant.id, plan_data)


@router.get("/{floor_plan_id}", response_model=FloorPlanResponse)
async def get_floor_plan(
    floor_plan_id: UUID,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Get a floor plan with its tables"""
    return await floor_service.get_floor_plan(db, tenant.id, floor_plan_id)


@router.patch("/{floor_plan_id}", response_model=FloorPlanResponse)
async def update_floor_plan(
    floor_plan_id: UUID,
    plan_data: FloorPlanUpdate,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Rename or resize a floor plan"""
    return await floor_service.update_floor_plan(db, tenant.id, floor_plan_id, plan_data)


@router.post("/{floor_plan_id}/activate", response_model=FloorPlanResponse)
async def activate_floor_plan(
    floor_plan_id: UUID,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Make this the tenant's active floor plan"""
    return await floor_service.activate_floor_plan(db, tenant.id, floor_plan_id)


@router.put("/{floor_plan_id}/layout", response_model=FloorPlanResponse)
async def save_floor_plan_layout(
    floor_plan_id: UUID,
    layout: FloorPlanSave,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Replace the tables of a specific floor plan"""
    return await floor_service.save_floor_plan(db, tenant.id, layout, floor_plan_id=floor_plan_id)


@router.delete("/{floor_plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_floor_plan(
    floor_plan_id: UUID,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Delete a floor plan; the last one cannot be deleted"""
    await floor_service.delete_floor_plan(db, tenant.id, floor_plan_id)
