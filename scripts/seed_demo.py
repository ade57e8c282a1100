#!/usr/bin/env python3
"""
Seed script to create a demo restaurant with a floor plan, menu and bookings
"""

import asyncio
from datetime import datetime, timedelta, time


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from vira.database import SessionLocal, storage
    from vira.models.menu import MenuCategory, MenuItem
    from vira.models.tenant import Tenant
    from vira.schemas.floor import FloorPlanSave, TableInput
    from vira.schemas.reservation import ReservationCreate
    from vira.models.integration import IntegrationType
    from vira.schemas.tenant import RestaurantInfoUpdate, TenantCreate
    from vira.services.floors import save_floor_plan
    from vira.services.reservations import create_reservation
    from vira.services.integrations import upsert_integration
    from vira.services.tenants import create_tenant, upsert_restaurant_info

    await storage.initialize()

    async with SessionLocal() as db:
        # Check if demo tenant already exists
        result = await db.execute(select(Tenant).where(Tenant.slug == "dastarkhan"))
        if result.scalar_one_or_none():
            print("Demo data already exists. Skipping...")
            return

        print("Creating demo tenant...")
        tenant = await create_tenant(
            db, TenantCreate(name="Dastarkhan", slug="dastarkhan", phone="+77001234567")
        )
        print(f"Created tenant: {tenant.name} (ID: {tenant.id})")

        await upsert_restaurant_info(
            db,
            tenant.id,
            RestaurantInfoUpdate(
                address="Abay Ave 10, Almaty",
                work_schedule={day: {"open": "10:00", "close": "23:00"} for day in
                               ("mon", "tue", "wed", "thu", "fri", "sat", "sun")},
                about="Kazakh home cooking",
            ),
        )
        await upsert_integration(db, tenant.id, IntegrationType.WHATSAPP, {"phone": "+77001234567"})

        print("Creating floor plan...")
        tables = [
            TableInput(number="1", seats=2, x=48, y=48, width=72, height=72, label="window"),
            TableInput(number="2", seats=2, x=168, y=48, width=72, height=72, label="window"),
            TableInput(number="3", seats=4, x=48, y=192, width=96, height=96),
            TableInput(number="4", seats=4, x=192, y=192, width=96, height=96),
            TableInput(number="5", seats=8, x=384, y=144, width=192, height=96, label="hall"),
            TableInput(number="T1", seats=6, x=624, y=312, width=144, height=96, label="terrace"),
        ]
        plan = await save_floor_plan(db, tenant.id, FloorPlanSave(tables=tables))
        print(f"Saved floor plan '{plan.name}' with {len(plan.tables)} tables")

        print("Creating menu...")
        menu = {
            "Salads": [
                ("Achichuk", "Tomato and onion salad", 1500),
                ("Olivier", "Potato salad with pickles", 1800),
            ],
            "Mains": [
                ("Beshbarmak", "Hand-cut noodles with lamb and onion broth", 4500),
                ("Plov", "Rice with lamb, carrots and chickpeas", 3200),
                ("Lagman", "Pulled noodles with beef and vegetables", 2800),
                ("Shashlik", "Grilled lamb skewers", 3900),
            ],
            "Drinks": [
                ("Kumis", "Fermented mare's milk", 1200),
                ("Black tea", "With milk and baursaks", 800),
            ],
        }
        for sort_order, (category_name, items) in enumerate(menu.items()):
            category = MenuCategory(tenant_id=tenant.id, name=category_name, sort_order=sort_order)
            db.add(category)
            await db.flush()
            for item_order, (name, description, price_cents) in enumerate(items):
                db.add(
                    MenuItem(
                        tenant_id=tenant.id,
                        category_id=category.id,
                        name=name,
                        description=description,
                        price_cents=price_cents,
                        sort_order=item_order,
                    )
                )
        await db.commit()
        print(f"Created {sum(len(items) for items in menu.values())} menu items")

        print("Creating reservations...")
        tomorrow = datetime.combine(datetime.utcnow().date() + timedelta(days=1), time(13, 0))
        bookings = [
            dict(table_label="1", table_seats=2, party_size=2, start_at=tomorrow,
                 name="Aigul", phone="+77001112233"),
            dict(table_label="5", table_seats=8, party_size=7, start_at=tomorrow,
                 duration_minutes=180, name="Daniyar", phone="+77004445566",
                 comment="Birthday dinner"),
            dict(table_label="1", table_seats=2, party_size=2,
                 start_at=tomorrow + timedelta(hours=2), name="Madina", phone="+77007778899"),
        ]
        for booking in bookings:
            reservation = await create_reservation(db, tenant.id, ReservationCreate(**booking))
            print(f"  {reservation.name}: table {reservation.table_label} at {reservation.start_at}")

    print("\nDemo data created successfully!")
    print(f"\nTenant ID: {tenant.id}")
    print("Guest menu: GET /tenants/{tenant_id}/menu")
    print("Seating map: GET /tenants/{tenant_id}/tables")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
