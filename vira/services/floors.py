"""Floor plan persistence"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import structlog

from vira.config import settings
from vira.engine.layout import check_table_geometry, validate_layout
from vira.errors import LastFloorPlan, NotFound
from vira.models.floor import DiningTable, FloorPlan
from vira.schemas.floor import FloorPlanCreate, FloorPlanSave, FloorPlanUpdate

logger = structlog.get_logger()


def _plan_query(tenant_id: UUID):
    return (
        select(FloorPlan)
        .where(FloorPlan.tenant_id == tenant_id)
        .options(selectinload(FloorPlan.tables))
        .execution_options(populate_existing=True)
    )


async def get_active_floor_plan(db: AsyncSession, tenant_id: UUID) -> Optional[FloorPlan]:
    result = await db.execute(_plan_query(tenant_id).where(FloorPlan.is_active == True))
    return result.scalars().first()


async def ensure_active_floor_plan(db: AsyncSession, tenant_id: UUID) -> FloorPlan:
    """Return the active plan, creating the default one on first access"""
    plan = await get_active_floor_plan(db, tenant_id)
    if plan:
        return plan

    plan = FloorPlan(
        tenant_id=tenant_id,
        name=settings.floor_default_plan_name,
        is_active=True,
        canvas_width=settings.floor_default_canvas_width,
        canvas_height=settings.floor_default_canvas_height,
    )
    db.add(plan)
    await db.commit()
    logger.info("Default floor plan created", tenant_id=str(tenant_id), floor_plan_id=str(plan.id))
    return await get_floor_plan(db, tenant_id, plan.id)


async def list_floor_plans(db: AsyncSession, tenant_id: UUID) -> List[FloorPlan]:
    result = await db.execute(
        _plan_query(tenant_id).order_by(FloorPlan.is_active.desc(), FloorPlan.created_at)
    )
    return list(result.scalars().all())


async def get_floor_plan(db: AsyncSession, tenant_id: UUID, floor_plan_id: UUID) -> FloorPlan:
    result = await db.execute(_plan_query(tenant_id).where(FloorPlan.id == floor_plan_id))
    plan = result.scalar_one_or_none()
    if not plan:
        raise NotFound("Floor plan not found", floor_plan_id=floor_plan_id)
    return plan


async def create_floor_plan(db: AsyncSession, tenant_id: UUID, data: FloorPlanCreate) -> FloorPlan:
    """Additional plans start inactive"""
    plan = FloorPlan(
        tenant_id=tenant_id,
        name=data.name.strip(),
        is_active=False,
        canvas_width=data.canvas_width or settings.floor_default_canvas_width,
        canvas_height=data.canvas_height or settings.floor_default_canvas_height,
    )
    db.add(plan)
    await db.commit()
    logger.info("Floor plan created", tenant_id=str(tenant_id), floor_plan_id=str(plan.id))
    return await get_floor_plan(db, tenant_id, plan.id)


async def update_floor_plan(
    db: AsyncSession, tenant_id: UUID, floor_plan_id: UUID, data: FloorPlanUpdate
) -> FloorPlan:
    plan = await get_floor_plan(db, tenant_id, floor_plan_id)
    if data.name is not None:
        plan.name = data.name.strip()
    if data.canvas_width is not None:
        plan.canvas_width = data.canvas_width
    if data.canvas_height is not None:
        plan.canvas_height = data.canvas_height
    await db.commit()
    return await get_floor_plan(db, tenant_id, floor_plan_id)


async def activate_floor_plan(db: AsyncSession, tenant_id: UUID, floor_plan_id: UUID) -> FloorPlan:
    """Make one plan active and every other plan of the tenant inactive"""
    plan = await get_floor_plan(db, tenant_id, floor_plan_id)
    await db.execute(
        update(FloorPlan)
        .where(FloorPlan.tenant_id == tenant_id, FloorPlan.id != plan.id)
        .values(is_active=False)
    )
    plan.is_active = True
    await db.commit()
    logger.info("Floor plan activated", tenant_id=str(tenant_id), floor_plan_id=str(plan.id))
    return await get_floor_plan(db, tenant_id, floor_plan_id)


async def delete_floor_plan(db: AsyncSession, tenant_id: UUID, floor_plan_id: UUID) -> None:
    """Delete a plan and its tables; the last remaining plan is kept"""
    plan = await get_floor_plan(db, tenant_id, floor_plan_id)
    count = (
        await db.execute(select(func.count(FloorPlan.id)).where(FloorPlan.tenant_id == tenant_id))
    ).scalar()
    if count <= 1:
        raise LastFloorPlan()

    was_active = plan.is_active
    await db.delete(plan)
    await db.flush()

    if was_active:
        # Keep exactly one plan active: promote the oldest remaining one
        result = await db.execute(
            select(FloorPlan)
            .where(FloorPlan.tenant_id == tenant_id)
            .order_by(FloorPlan.created_at)
            .limit(1)
        )
        result.scalar_one().is_active = True

    await db.commit()
    logger.info("Floor plan deleted", tenant_id=str(tenant_id), floor_plan_id=str(floor_plan_id))


async def save_floor_plan(
    db: AsyncSession,
    tenant_id: UUID,
    data: FloorPlanSave,
    floor_plan_id: Optional[UUID] = None,
) -> FloorPlan:
    """Replace a plan's table set with the submitted layout.

    Tables with a known id are updated in place, tables without an id are
    inserted and the rest are deleted, all in one transaction. Without
    ``floor_plan_id`` the active plan is used (created if missing). Every
    table must fit the canvas in effect after the save.
    """
    validate_layout(data.tables)

    try:
        if floor_plan_id:
            plan = await get_floor_plan(db, tenant_id, floor_plan_id)
        else:
            plan = await get_active_floor_plan(db, tenant_id)
            if plan is None:
                plan = FloorPlan(
                    tenant_id=tenant_id,
                    name=settings.floor_default_plan_name,
                    is_active=True,
                    canvas_width=settings.floor_default_canvas_width,
                    canvas_height=settings.floor_default_canvas_height,
                )
                db.add(plan)
                await db.flush()

        if data.name and data.name.strip():
            plan.name = data.name.strip()
        if data.canvas_width:
            plan.canvas_width = data.canvas_width
        if data.canvas_height:
            plan.canvas_height = data.canvas_height

        check_table_geometry(data.tables, plan.canvas_width, plan.canvas_height)

        result = await db.execute(
            select(DiningTable).where(
                DiningTable.floor_plan_id == plan.id,
                DiningTable.tenant_id == tenant_id,
            )
        )
        existing = {table.id: table for table in result.scalars().all()}

        incoming_ids = {table.id for table in data.tables if table.id is not None}
        unknown = incoming_ids - existing.keys()
        if unknown:
            raise NotFound("Table not found on this floor plan", table_ids=sorted(map(str, unknown)))

        removed = [table for table_id, table in existing.items() if table_id not in incoming_ids]
        for table in removed:
            await db.delete(table)

        for item in data.tables:
            values = dict(
                number=item.number.strip(),
                label=(item.label or "").strip() or None,
                seats=item.seats,
                x=item.x,
                y=item.y,
                width=item.width,
                height=item.height,
                rotation=item.rotation,
            )
            if item.id is not None:
                table = existing[item.id]
                for field, value in values.items():
                    setattr(table, field, value)
            else:
                db.add(DiningTable(tenant_id=tenant_id, floor_plan_id=plan.id, **values))

        await db.commit()
    except BaseException:
        await db.rollback()
        raise

    logger.info(
        "Floor plan saved",
        tenant_id=str(tenant_id),
        floor_plan_id=str(plan.id),
        tables=len(data.tables),
        removed=len(removed),
    )
    return await get_floor_plan(db, tenant_id, plan.id)
