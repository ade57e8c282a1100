"""Tests for reservation endpoints and the booking service"""

import asyncio
from datetime import datetime, timezone
from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from vira.database import Base
from vira.errors import TableConflict
from vira.models.reservation import Reservation
from vira.models.tenant import Tenant
from vira.schemas.reservation import ReservationCreate
from vira.services import reservations as reservation_service


def parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def booking(**overrides):
    payload = {
        "table_label": "A1",
        "table_seats": 2,
        "party_size": 2,
        "start_at": "2024-01-01T19:00:00Z",
        "duration_minutes": 120,
        "name": "Aigul",
        "phone": "+77001112233",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def reservations_url(test_tenant):
    return f"/tenants/{test_tenant.id}/reservations"


async def test_create_reservation(client, reservations_url):
    response = await client.post(reservations_url, json=booking())

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "new"
    assert data["table_label"] == "A1"
    assert parse(data["start_at"]) == datetime(2024, 1, 1, 19, tzinfo=timezone.utc)
    assert parse(data["end_at"]) == datetime(2024, 1, 1, 21, tzinfo=timezone.utc)


async def test_create_uses_default_duration(client, reservations_url):
    response = await client.post(reservations_url, json=booking(duration_minutes=None))

    assert response.status_code == 201
    assert parse(response.json()["end_at"]) == datetime(2024, 1, 1, 21, tzinfo=timezone.utc)


async def test_offset_times_are_stored_as_utc(client, reservations_url):
    response = await client.post(
        reservations_url, json=booking(start_at="2024-01-02T01:00:00+06:00")
    )

    assert response.status_code == 201
    assert parse(response.json()["start_at"]) == datetime(2024, 1, 1, 19, tzinfo=timezone.utc)


async def test_overlapping_booking_is_rejected(client, reservations_url, test_db):
    first = await client.post(
        reservations_url, json=booking(start_at="2024-01-01T10:00:00Z")
    )
    assert first.status_code == 201

    response = await client.post(
        reservations_url, json=booking(start_at="2024-01-01T11:00:00Z", name="Daniyar")
    )

    assert response.status_code == 409
    assert response.json()["code"] == "table_conflict"

    result = await test_db.execute(select(Reservation))
    assert len(result.scalars().all()) == 1


async def test_adjacent_booking_is_accepted(client, reservations_url):
    await client.post(reservations_url, json=booking(start_at="2024-01-01T10:00:00Z"))

    response = await client.post(
        reservations_url, json=booking(start_at="2024-01-01T12:00:00Z")
    )

    assert response.status_code == 201


@pytest.mark.parametrize(
    "overrides, status_code, code",
    [
        ({"party_size": 0}, 400, "invalid_party_size"),
        ({"party_size": 3}, 422, "capacity_exceeded"),
        ({"end_at": "2024-01-01T18:00:00Z"}, 422, "invalid_interval"),
        ({"name": "  "}, 422, "missing_contact"),
        ({"phone": ""}, 422, "missing_contact"),
    ],
)
async def test_validation_errors(client, reservations_url, overrides, status_code, code):
    response = await client.post(reservations_url, json=booking(**overrides))

    assert response.status_code == status_code
    assert response.json()["code"] == code


@pytest.mark.parametrize(
    "overrides",
    [{"table_seats": 0}, {"table_seats": -2}, {"duration_minutes": 0}, {"duration_minutes": -30}],
)
async def test_non_positive_seats_and_duration_are_rejected(client, reservations_url, overrides):
    response = await client.post(reservations_url, json=booking(**overrides))

    assert response.status_code == 422
    assert "code" not in response.json()


async def test_patch_rejects_zero_duration(client, reservations_url):
    created = (await client.post(reservations_url, json=booking())).json()

    response = await client.patch(
        f"{reservations_url}/{created['id']}", json={"duration_minutes": 0}
    )

    assert response.status_code == 422


async def test_list_reservations_by_day(client, reservations_url):
    await client.post(reservations_url, json=booking(start_at="2024-01-01T18:00:00Z"))
    await client.post(
        reservations_url, json=booking(start_at="2024-01-01T10:00:00Z", table_label="B2")
    )
    await client.post(reservations_url, json=booking(start_at="2024-01-02T18:00:00Z"))

    response = await client.get(reservations_url, params={"date": "2024-01-01"})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [item["table_label"] for item in data["items"]] == ["B2", "A1"]


async def test_cancelled_reservations_are_hidden_by_default(client, reservations_url):
    created = (await client.post(reservations_url, json=booking())).json()
    await client.patch(f"{reservations_url}/{created['id']}", json={"status": "cancelled"})

    assert (await client.get(reservations_url)).json()["total"] == 0

    response = await client.get(reservations_url, params={"include_cancelled": "true"})
    assert response.json()["total"] == 1


async def test_cancelled_reservation_frees_the_table(client, reservations_url):
    created = (await client.post(reservations_url, json=booking())).json()
    await client.patch(f"{reservations_url}/{created['id']}", json={"status": "cancelled"})

    response = await client.post(reservations_url, json=booking(name="Daniyar"))

    assert response.status_code == 201


async def test_update_reservation(client, reservations_url):
    created = (await client.post(reservations_url, json=booking())).json()

    response = await client.patch(
        f"{reservations_url}/{created['id']}",
        json={"start_at": "2024-01-01T20:00:00Z", "status": "confirmed", "comment": "Birthday"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "confirmed"
    assert data["comment"] == "Birthday"
    assert parse(data["start_at"]) == datetime(2024, 1, 1, 20, tzinfo=timezone.utc)
    assert parse(data["end_at"]) == datetime(2024, 1, 1, 22, tzinfo=timezone.utc)


async def test_update_into_conflict_is_rejected(client, reservations_url):
    await client.post(reservations_url, json=booking(start_at="2024-01-01T10:00:00Z"))
    later = (
        await client.post(reservations_url, json=booking(start_at="2024-01-01T14:00:00Z"))
    ).json()

    response = await client.patch(
        f"{reservations_url}/{later['id']}", json={"start_at": "2024-01-01T11:00:00Z"}
    )

    assert response.status_code == 409
    assert response.json()["code"] == "table_conflict"

    unchanged = await client.get(f"{reservations_url}/{later['id']}")
    assert parse(unchanged.json()["start_at"]) == datetime(2024, 1, 1, 14, tzinfo=timezone.utc)


async def test_delete_reservation(client, reservations_url):
    created = (await client.post(reservations_url, json=booking())).json()

    response = await client.delete(f"{reservations_url}/{created['id']}")
    assert response.status_code == 204

    response = await client.get(f"{reservations_url}/{created['id']}")
    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


async def test_reservations_are_scoped_to_tenant(client, test_tenant, other_tenant):
    tenant_id, other_id = test_tenant.id, other_tenant.id
    created = (
        await client.post(f"/tenants/{tenant_id}/reservations", json=booking())
    ).json()

    response = await client.get(f"/tenants/{other_id}/reservations/{created['id']}")
    assert response.status_code == 404

    # Same table and time at another restaurant is not a conflict
    response = await client.post(f"/tenants/{other_id}/reservations", json=booking())
    assert response.status_code == 201

    listing = await client.get(f"/tenants/{other_id}/reservations")
    assert listing.json()["total"] == 1


async def test_unknown_tenant(client):
    response = await client.get(f"/tenants/{uuid4()}/reservations")

    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


async def test_concurrent_bookings_for_same_slot(tmp_path):
    """Two sessions racing for one table: exactly one booking wins"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'race.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    tenant_id = uuid4()
    async with session_factory() as session:
        session.add(Tenant(id=tenant_id, slug="race", name="Race"))
        await session.commit()

    data = ReservationCreate(
        table_label="A1",
        table_seats=2,
        party_size=2,
        start_at=datetime(2024, 1, 1, 19),
        name="Aigul",
        phone="+77001112233",
    )

    async def book():
        async with session_factory() as session:
            return await reservation_service.create_reservation(session, tenant_id, data)

    try:
        results = await asyncio.gather(book(), book(), return_exceptions=True)

        created = [r for r in results if isinstance(r, Reservation)]
        conflicts = [r for r in results if isinstance(r, TableConflict)]
        assert len(created) == 1
        assert len(conflicts) == 1

        async with session_factory() as session:
            result = await session.execute(select(Reservation))
            assert len(result.scalars().all()) == 1
    finally:
        await engine.dispose()
