"""Reservation persistence around the scheduling rules"""

import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from datetime import date, datetime, time, timedelta
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from vira.config import settings
from vira.engine.scheduler import (
    ReservationRequest,
    ReservationStatus,
    ScheduledReservation,
    reschedule_reservation,
    schedule_reservation,
)
from vira.errors import NotFound, TableConflict
from vira.models.reservation import Reservation
from vira.models.tenant import Tenant
from vira.schemas.reservation import ReservationCreate

logger = structlog.get_logger()

# Serializes check-and-write per tenant inside this process; the row lock
# taken in booking_guard does the same across processes on PostgreSQL.
_tenant_locks: Dict[UUID, asyncio.Lock] = defaultdict(asyncio.Lock)


class SqlReservationRepository:
    """Overlap lookups against the reservations table"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_overlapping(
        self,
        tenant_id: UUID,
        table_label: str,
        start_at: datetime,
        end_at: datetime,
        exclude_id: Optional[UUID] = None,
    ) -> Optional[Reservation]:
        query = select(Reservation).where(
            Reservation.tenant_id == tenant_id,
            Reservation.table_label == table_label,
            Reservation.status != ReservationStatus.CANCELLED,
            Reservation.start_at < end_at,
            Reservation.end_at > start_at,
        )
        if exclude_id is not None:
            query = query.where(Reservation.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none()


@asynccontextmanager
async def booking_guard(db: AsyncSession, tenant_id: UUID) -> AsyncIterator[None]:
    """Hold the tenant's booking lock from the overlap check until commit"""
    async with _tenant_locks[tenant_id]:
        try:
            await db.execute(
                select(Tenant.id).where(Tenant.id == tenant_id).with_for_update()
            )
            yield
        except BaseException:
            await db.rollback()
            raise


async def list_reservations(
    db: AsyncSession,
    tenant_id: UUID,
    on_date: Optional[date] = None,
    include_cancelled: bool = False,
) -> List[Reservation]:
    """Reservations of a tenant, optionally for one calendar day (UTC)"""
    query = select(Reservation).where(Reservation.tenant_id == tenant_id)

    if on_date:
        day_start = datetime.combine(on_date, time.min)
        query = query.where(
            Reservation.start_at >= day_start,
            Reservation.start_at < day_start + timedelta(days=1),
        )

    if not include_cancelled:
        query = query.where(Reservation.status != ReservationStatus.CANCELLED)

    result = await db.execute(query.order_by(Reservation.start_at, Reservation.created_at))
    return list(result.scalars().all())


async def get_reservation(db: AsyncSession, tenant_id: UUID, reservation_id: UUID) -> Reservation:
    result = await db.execute(
        select(Reservation).where(
            Reservation.id == reservation_id,
            Reservation.tenant_id == tenant_id,
        )
    )
    reservation = result.scalar_one_or_none()
    if not reservation:
        raise NotFound("Reservation not found", reservation_id=reservation_id)
    return reservation


def _apply(reservation: Reservation, scheduled: ScheduledReservation) -> None:
    for field, value in scheduled.as_dict().items():
        if field != "tenant_id":
            setattr(reservation, field, value)


async def create_reservation(
    db: AsyncSession,
    tenant_id: UUID,
    data: ReservationCreate,
) -> Reservation:
    """Schedule and insert a reservation in one locked transaction"""
    request = ReservationRequest(**data.model_dump())
    if request.end_at is None and request.duration_minutes is None:
        request.duration_minutes = settings.reservation_default_duration_minutes
    async with booking_guard(db, tenant_id):
        try:
            scheduled = await schedule_reservation(
                SqlReservationRepository(db), tenant_id, request
            )
        except TableConflict:
            logger.warning(
                "Reservation conflict",
                tenant_id=str(tenant_id),
                table_label=request.table_label,
                start_at=request.start_at.isoformat(),
            )
            raise
        reservation = Reservation(tenant_id=tenant_id)
        _apply(reservation, scheduled)
        db.add(reservation)
        await db.commit()

    await db.refresh(reservation)
    logger.info(
        "Reservation created",
        tenant_id=str(tenant_id),
        reservation_id=str(reservation.id),
        table_label=reservation.table_label,
        party_size=reservation.party_size,
    )
    return reservation


async def update_reservation(
    db: AsyncSession,
    tenant_id: UUID,
    reservation_id: UUID,
    patch: Mapping[str, Any],
) -> Reservation:
    """Re-validate the merged reservation and write it back"""
    async with booking_guard(db, tenant_id):
        reservation = await get_reservation(db, tenant_id, reservation_id)
        previous_status = reservation.status
        scheduled = await reschedule_reservation(
            SqlReservationRepository(db), tenant_id, reservation, patch
        )
        _apply(reservation, scheduled)
        await db.commit()

    await db.refresh(reservation)
    if reservation.status != previous_status:
        logger.info(
            "Reservation status changed",
            tenant_id=str(tenant_id),
            reservation_id=str(reservation.id),
            from_status=ReservationStatus(previous_status).value,
            to_status=ReservationStatus(reservation.status).value,
        )
    return reservation


async def delete_reservation(db: AsyncSession, tenant_id: UUID, reservation_id: UUID) -> None:
    reservation = await get_reservation(db, tenant_id, reservation_id)
    await db.delete(reservation)
    await db.commit()
    logger.info("Reservation deleted", tenant_id=str(tenant_id), reservation_id=str(reservation_id))
