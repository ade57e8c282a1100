"""Test configuration and fixtures"""

import os

# Keep the application engine off PostgreSQL during tests
os.environ.setdefault("VIRA_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from uuid import uuid4

import vira.models  # noqa: F401
from vira.main import app
from vira.database import Base, get_db
from vira.models.tenant import Tenant
from vira.models.menu import MenuCategory, MenuItem


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Create test database engine"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield engine
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    
    await engine.dispose()


@pytest.fixture
async def test_db(test_engine):
    """Create test database session"""
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    
    async with session_factory() as session:
        yield session


@pytest.fixture
async def test_tenant(test_db):
    """Create a test tenant"""
    tenant = Tenant(
        id=uuid4(),
        slug="test-restaurant",
        name="Test Restaurant",
        phone="+77001234567",
    )
    test_db.add(tenant)
    await test_db.commit()
    
    return tenant


@pytest.fixture
async def other_tenant(test_db):
    """Create a second tenant for isolation checks"""
    tenant = Tenant(
        id=uuid4(),
        slug="other-restaurant",
        name="Other Restaurant",
    )
    test_db.add(tenant)
    await test_db.commit()
    
    return tenant


@pytest.fixture
async def test_menu(test_db, test_tenant):
    """Create a category with two items, one of them unavailable"""
    category = MenuCategory(tenant_id=test_tenant.id, name="Mains", sort_order=1)
    test_db.add(category)
    await test_db.flush()
    
    items = [
        MenuItem(
            tenant_id=test_tenant.id,
            category_id=category.id,
            name="Beshbarmak",
            description="Hand-cut noodles with lamb",
            price_cents=4500,
        ),
        MenuItem(
            tenant_id=test_tenant.id,
            category_id=category.id,
            name="Plov",
            price_cents=3200,
            is_available=False,
        ),
    ]
    for item in items:
        test_db.add(item)
    
    await test_db.commit()
    return category, items


@pytest.fixture
async def client(test_db):
    """Create test client with overridden database"""
    async def override_get_db():
        yield test_db
    
    app.dependency_overrides[get_db] = override_get_db
    
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    
    app.dependency_overrides.clear()
