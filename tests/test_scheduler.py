"""Tests for reservation scheduling rules"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID, uuid4

import pytest

from vira.engine.geometry import intervals_overlap
from vira.engine.scheduler import (
    ReservationRequest,
    ReservationStatus,
    can_transition,
    reschedule_reservation,
    schedule_reservation,
)
from vira.errors import (
    CapacityExceeded,
    InvalidInterval,
    InvalidPartySize,
    MissingContact,
    TableConflict,
)

TENANT = uuid4()


@dataclass
class StoredReservation:
    tenant_id: UUID
    table_label: Optional[str]
    table_seats: Optional[int]
    start_at: datetime
    end_at: datetime
    party_size: int
    name: str
    phone: str
    comment: Optional[str] = None
    status: ReservationStatus = ReservationStatus.NEW
    id: UUID = None

    def __post_init__(self):
        self.id = self.id or uuid4()


class InMemoryReservations:
    """Repository double that records every lookup"""

    def __init__(self, *reservations):
        self.reservations = list(reservations)
        self.lookups = []

    async def find_overlapping(self, tenant_id, table_label, start_at, end_at, exclude_id=None):
        self.lookups.append((tenant_id, table_label, start_at, end_at, exclude_id))
        for reservation in self.reservations:
            if (
                reservation.tenant_id == tenant_id
                and reservation.table_label == table_label
                and reservation.status != ReservationStatus.CANCELLED
                and reservation.id != exclude_id
                and intervals_overlap(reservation.start_at, reservation.end_at, start_at, end_at)
            ):
                return reservation
        return None


def booked(table_label, start_hour, end_hour, status=ReservationStatus.CONFIRMED, tenant_id=TENANT):
    return StoredReservation(
        tenant_id=tenant_id,
        table_label=table_label,
        table_seats=4,
        start_at=datetime(2024, 1, 1, start_hour),
        end_at=datetime(2024, 1, 1, end_hour),
        party_size=2,
        name="Existing guest",
        phone="+77000000000",
        status=status,
    )


def request(**overrides) -> ReservationRequest:
    values = dict(
        table_label="A1",
        table_seats=2,
        party_size=2,
        start_at=datetime(2024, 1, 1, 19, tzinfo=timezone.utc),
        duration_minutes=120,
        name="Aigul",
        phone="+77001112233",
    )
    values.update(overrides)
    return ReservationRequest(**values)


async def test_schedule_on_empty_table_computes_end():
    scheduled = await schedule_reservation(InMemoryReservations(), TENANT, request())

    assert scheduled.start_at == datetime(2024, 1, 1, 19, tzinfo=timezone.utc)
    assert scheduled.end_at == datetime(2024, 1, 1, 21, tzinfo=timezone.utc)
    assert scheduled.status == ReservationStatus.NEW
    assert scheduled.table_label == "A1"
    assert scheduled.tenant_id == TENANT


async def test_default_duration_is_two_hours():
    scheduled = await schedule_reservation(
        InMemoryReservations(), TENANT, request(duration_minutes=None)
    )
    assert scheduled.end_at - scheduled.start_at == timedelta(minutes=120)


async def test_explicit_end_wins_over_duration():
    end_at = datetime(2024, 1, 1, 20, 30, tzinfo=timezone.utc)
    scheduled = await schedule_reservation(
        InMemoryReservations(), TENANT, request(end_at=end_at, duration_minutes=240)
    )
    assert scheduled.end_at == end_at


async def test_strings_are_trimmed_and_blank_comment_dropped():
    scheduled = await schedule_reservation(
        InMemoryReservations(),
        TENANT,
        request(table_label=" A1 ", name="  Aigul ", phone=" +77001112233 ", comment="   "),
    )
    assert scheduled.table_label == "A1"
    assert scheduled.name == "Aigul"
    assert scheduled.phone == "+77001112233"
    assert scheduled.comment is None


async def test_explicit_status_is_kept():
    scheduled = await schedule_reservation(
        InMemoryReservations(), TENANT, request(status=ReservationStatus.CONFIRMED)
    )
    assert scheduled.status == ReservationStatus.CONFIRMED


@pytest.mark.parametrize("party_size", [0, -1, 2.5, True])
async def test_party_size_must_be_positive_integer(party_size):
    with pytest.raises(InvalidPartySize):
        await schedule_reservation(InMemoryReservations(), TENANT, request(party_size=party_size))


async def test_party_larger_than_table_is_rejected():
    with pytest.raises(CapacityExceeded):
        await schedule_reservation(
            InMemoryReservations(), TENANT, request(party_size=5, table_seats=4)
        )


async def test_unknown_seats_do_not_limit_party():
    scheduled = await schedule_reservation(
        InMemoryReservations(), TENANT, request(party_size=12, table_seats=None)
    )
    assert scheduled.party_size == 12


@pytest.mark.parametrize("duration", [0, -30])
async def test_end_must_follow_start(duration):
    with pytest.raises(InvalidInterval):
        await schedule_reservation(
            InMemoryReservations(), TENANT, request(duration_minutes=duration)
        )


async def test_overlapping_booking_on_same_table_conflicts():
    repository = InMemoryReservations(booked("A1", 10, 12))

    with pytest.raises(TableConflict):
        await schedule_reservation(
            repository,
            TENANT,
            request(start_at=datetime(2024, 1, 1, 11), duration_minutes=120),
        )


async def test_booking_that_touches_previous_one_is_accepted():
    repository = InMemoryReservations(booked("A1", 10, 12))

    scheduled = await schedule_reservation(
        repository,
        TENANT,
        request(start_at=datetime(2024, 1, 1, 12), duration_minutes=120),
    )
    assert scheduled.end_at == datetime(2024, 1, 1, 14)


async def test_cancelled_bookings_and_other_tables_do_not_block():
    repository = InMemoryReservations(
        booked("A1", 10, 12, status=ReservationStatus.CANCELLED),
        booked("B2", 10, 12),
        booked("A1", 10, 12, tenant_id=uuid4()),
    )

    scheduled = await schedule_reservation(
        repository, TENANT, request(start_at=datetime(2024, 1, 1, 11))
    )
    assert scheduled.table_label == "A1"


async def test_no_table_skips_the_conflict_lookup():
    repository = InMemoryReservations(booked("A1", 10, 12))

    await schedule_reservation(
        repository, TENANT, request(table_label=None, start_at=datetime(2024, 1, 1, 11))
    )
    assert repository.lookups == []


@pytest.mark.parametrize("field", ["name", "phone"])
async def test_contact_is_required(field):
    with pytest.raises(MissingContact):
        await schedule_reservation(InMemoryReservations(), TENANT, request(**{field: "   "}))


async def test_first_failing_check_wins():
    repository = InMemoryReservations(booked("A1", 10, 12))

    # Over capacity, overlapping and without a name: capacity is reported
    with pytest.raises(CapacityExceeded):
        await schedule_reservation(
            repository,
            TENANT,
            request(party_size=6, table_seats=2, start_at=datetime(2024, 1, 1, 11), name=""),
        )

    # Overlapping and without a name: the conflict is reported
    with pytest.raises(TableConflict):
        await schedule_reservation(
            repository, TENANT, request(start_at=datetime(2024, 1, 1, 11), name="")
        )


async def test_reschedule_excludes_own_reservation():
    existing = booked("A1", 10, 12)
    repository = InMemoryReservations(existing)

    scheduled = await reschedule_reservation(
        repository, TENANT, existing, {"start_at": datetime(2024, 1, 1, 11)}
    )

    assert scheduled.start_at == datetime(2024, 1, 1, 11)
    # Existing length is kept when only the start moves
    assert scheduled.end_at == datetime(2024, 1, 1, 13)
    assert repository.lookups[0][-1] == existing.id


async def test_reschedule_into_another_booking_conflicts():
    existing = booked("A1", 10, 12)
    other = booked("A1", 18, 20)
    repository = InMemoryReservations(existing, other)

    with pytest.raises(TableConflict):
        await reschedule_reservation(
            repository, TENANT, existing, {"start_at": datetime(2024, 1, 1, 17)}
        )


async def test_reschedule_merges_patch_and_clears_nullable_fields():
    existing = booked("A1", 10, 12)
    existing.comment = "Window seat"

    scheduled = await reschedule_reservation(
        InMemoryReservations(existing),
        TENANT,
        existing,
        {"table_label": None, "table_seats": None, "comment": None, "party_size": 8},
    )

    assert scheduled.table_label is None
    assert scheduled.table_seats is None
    assert scheduled.comment is None
    assert scheduled.party_size == 8
    assert scheduled.name == "Existing guest"
    assert scheduled.status == ReservationStatus.CONFIRMED


async def test_reschedule_checks_capacity_against_merged_fields():
    existing = booked("A1", 10, 12)

    with pytest.raises(CapacityExceeded):
        await reschedule_reservation(
            InMemoryReservations(existing), TENANT, existing, {"party_size": 5}
        )


async def test_reschedule_with_new_duration():
    existing = booked("A1", 10, 12)

    scheduled = await reschedule_reservation(
        InMemoryReservations(existing), TENANT, existing, {"duration_minutes": 90}
    )
    assert scheduled.end_at == datetime(2024, 1, 1, 11, 30)


async def test_reactivating_cancelled_reservation_is_checked_for_conflicts():
    cancelled = booked("A1", 10, 12, status=ReservationStatus.CANCELLED)
    repository = InMemoryReservations(cancelled, booked("A1", 11, 13))

    with pytest.raises(TableConflict):
        await reschedule_reservation(
            repository, TENANT, cancelled, {"status": ReservationStatus.NEW}
        )


@pytest.mark.parametrize("current", list(ReservationStatus))
@pytest.mark.parametrize("target", list(ReservationStatus))
def test_admin_may_move_between_any_statuses(current, target):
    assert can_transition(current, target)


async def test_unguarded_scheduling_admits_double_booking():
    """Known check-then-act race.

    Two requests checked before either is written both pass. The scheduler
    alone cannot prevent this; the reservation service wraps check and insert
    in a per-tenant lock (see test_reservations_api).
    """
    repository = InMemoryReservations()

    first, second = await asyncio.gather(
        schedule_reservation(repository, TENANT, request()),
        schedule_reservation(repository, TENANT, request()),
    )

    assert first.table_label == second.table_label == "A1"
    assert first.start_at == second.start_at
