"""
Reservation scheduling rules.

Decides whether a booking request can be accepted and produces the normalized
record to persist. Storage is reached only through the injected
``ReservationRepository``; nothing here writes.
"""

import enum
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional, Protocol

from vira.errors import (
    CapacityExceeded,
    InvalidInterval,
    InvalidPartySize,
    MissingContact,
    TableConflict,
)

DEFAULT_DURATION_MINUTES = 120


class ReservationStatus(str, enum.Enum):
    """Reservation lifecycle states"""
    NEW = "new"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


# Admin edits may move a reservation between any two states; nothing expires
# or advances on its own.
ALLOWED_TRANSITIONS = {
    ReservationStatus.NEW: {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED},
    ReservationStatus.CONFIRMED: {ReservationStatus.CANCELLED, ReservationStatus.NEW},
    ReservationStatus.CANCELLED: {ReservationStatus.NEW, ReservationStatus.CONFIRMED},
}


def can_transition(current: ReservationStatus, target: ReservationStatus) -> bool:
    """Check whether ``current`` may be changed to ``target``"""
    current = ReservationStatus(current)
    target = ReservationStatus(target)
    return current == target or target in ALLOWED_TRANSITIONS[current]


class ReservationRepository(Protocol):
    """Read capability the scheduler needs from storage"""

    async def find_overlapping(
        self,
        tenant_id: Any,
        table_label: str,
        start_at: datetime,
        end_at: datetime,
        exclude_id: Optional[Any] = None,
    ) -> Optional[Any]:
        """Return a non-cancelled reservation on the table overlapping ``[start_at, end_at)``"""
        ...


@dataclass
class ReservationRequest:
    """Booking request as received from a guest or an admin"""
    party_size: int
    start_at: datetime
    name: str
    phone: str
    table_label: Optional[str] = None
    table_seats: Optional[int] = None
    end_at: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    comment: Optional[str] = None
    status: Optional[ReservationStatus] = None


@dataclass
class ScheduledReservation:
    """Normalized reservation ready to be written"""
    tenant_id: Any
    table_label: Optional[str]
    table_seats: Optional[int]
    start_at: datetime
    end_at: datetime
    party_size: int
    name: str
    phone: str
    comment: Optional[str]
    status: ReservationStatus

    def as_dict(self) -> dict:
        return asdict(self)


def compute_end(
    start_at: datetime,
    end_at: Optional[datetime] = None,
    duration_minutes: Optional[int] = None,
) -> datetime:
    """Explicit end wins; otherwise start plus the duration (default 120 minutes)"""
    if end_at is not None:
        return end_at
    if duration_minutes is None:
        duration_minutes = DEFAULT_DURATION_MINUTES
    return start_at + timedelta(minutes=duration_minutes)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


async def _validate(
    repository: ReservationRepository,
    tenant_id: Any,
    *,
    party_size: Any,
    table_label: Optional[str],
    table_seats: Optional[int],
    start_at: datetime,
    end_at: datetime,
    name: Optional[str],
    phone: Optional[str],
    comment: Optional[str],
    status: Optional[Any],
    exclude_id: Optional[Any] = None,
) -> ScheduledReservation:
    # Checks run in a fixed order and the first failure wins
    if isinstance(party_size, bool) or not isinstance(party_size, int) or party_size <= 0:
        raise InvalidPartySize(party_size=party_size)

    if table_seats is not None and party_size > table_seats:
        raise CapacityExceeded(
            f"Party of {party_size} does not fit a table for {table_seats}",
            party_size=party_size,
            table_seats=table_seats,
        )

    if not end_at > start_at:
        raise InvalidInterval(start_at=start_at, end_at=end_at)

    table_label = _clean(table_label)
    if table_label:
        overlapping = await repository.find_overlapping(
            tenant_id, table_label, start_at, end_at, exclude_id=exclude_id
        )
        if overlapping is not None:
            raise TableConflict(
                f"Table {table_label} is already booked for the selected time",
                table_label=table_label,
                conflicting_id=getattr(overlapping, "id", None),
            )

    name = _clean(name)
    phone = _clean(phone)
    if not name or not phone:
        raise MissingContact()

    return ScheduledReservation(
        tenant_id=tenant_id,
        table_label=table_label,
        table_seats=table_seats,
        start_at=start_at,
        end_at=end_at,
        party_size=party_size,
        name=name,
        phone=phone,
        comment=_clean(comment),
        status=ReservationStatus(status) if status else ReservationStatus.NEW,
    )


async def schedule_reservation(
    repository: ReservationRepository,
    tenant_id: Any,
    request: ReservationRequest,
) -> ScheduledReservation:
    """Validate a new booking and return the record to persist.

    Raises InvalidPartySize, CapacityExceeded, InvalidInterval, TableConflict
    or MissingContact, in that order of precedence.
    """
    end_at = compute_end(request.start_at, request.end_at, request.duration_minutes)
    return await _validate(
        repository,
        tenant_id,
        party_size=request.party_size,
        table_label=request.table_label,
        table_seats=request.table_seats,
        start_at=request.start_at,
        end_at=end_at,
        name=request.name,
        phone=request.phone,
        comment=request.comment,
        status=request.status,
    )


async def reschedule_reservation(
    repository: ReservationRepository,
    tenant_id: Any,
    existing: Any,
    patch: Mapping[str, Any],
) -> ScheduledReservation:
    """Merge ``patch`` over ``existing`` and validate the result.

    ``patch`` holds only the fields the caller set. An explicit ``None`` clears
    the table label, table seats or comment. The length of the existing booking
    is kept when only the start moves. The conflict lookup always skips the
    reservation being edited.
    """
    start_at = patch.get("start_at") or existing.start_at
    duration = patch.get("duration_minutes")
    if duration is None:
        duration = int((existing.end_at - existing.start_at).total_seconds() // 60)
    end_at = compute_end(start_at, patch.get("end_at"), duration)

    def merged(field: str) -> Any:
        return patch[field] if field in patch else getattr(existing, field)

    def patched(field: str) -> Any:
        value = patch.get(field)
        return getattr(existing, field) if value is None else value

    return await _validate(
        repository,
        tenant_id,
        party_size=patched("party_size"),
        table_label=merged("table_label"),
        table_seats=merged("table_seats"),
        start_at=start_at,
        end_at=end_at,
        name=patched("name"),
        phone=patched("phone"),
        comment=merged("comment"),
        status=patched("status"),
        exclude_id=existing.id,
    )
