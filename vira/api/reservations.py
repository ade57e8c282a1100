"""Reservation management API endpoints"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vira.api.deps import require_tenant
from vira.database import get_db
from vira.models.tenant import Tenant
from vira.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    ReservationListResponse,
)
from vira.services import reservations as reservation_service

router = APIRouter()


@router.get("", response_model=ReservationListResponse)
async def list_reservations(
    on_date: Optional[date] = Query(None, alias="date"),
    include_cancelled: bool = False,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """List reservations for a tenant, optionally for a single day"""
    reservations = await reservation_service.list_reservations(
        db, tenant.id, on_date=on_date, include_cancelled=include_cancelled
    )
    return ReservationListResponse(items=reservations, total=len(reservations))


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Create a new reservation"""
    return await reservation_service.create_reservation(db, tenant.id, reservation_data)


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: UUID,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Get reservation details"""
    return await reservation_service.get_reservation(db, tenant.id, reservation_id)


@router.patch("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: UUID,
    reservation_data: ReservationUpdate,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Update reservation time, table, guests or status"""
    return await reservation_service.update_reservation(
        db,
        tenant.id,
        reservation_id,
        reservation_data.model_dump(exclude_unset=True),
    )


@router.delete("/{reservation_id}", status_code=204)
async def delete_reservation(
    reservation_id: UUID,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Delete a reservation"""
    await reservation_service.delete_reservation(db, tenant.id, reservation_id)
