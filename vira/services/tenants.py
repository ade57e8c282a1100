"""Tenant lookup and provisioning"""

import re
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from vira.errors import NotFound, StorageUnavailable
from vira.models.tenant import RestaurantInfo, Tenant
from vira.schemas.tenant import RestaurantInfoUpdate, TenantCreate

logger = structlog.get_logger()

DEFAULT_SLUG = "restaurant"


def slugify(value: str) -> str:
    """Lowercase and collapse everything but ``a-z0-9`` into single dashes"""
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


async def _unique_slug(db: AsyncSession, base: str) -> str:
    normalized = slugify(base) or DEFAULT_SLUG
    candidate = normalized
    counter = 1
    while (await db.execute(select(Tenant.id).where(Tenant.slug == candidate))).first():
        counter += 1
        candidate = f"{normalized}-{counter}"
    return candidate


async def create_tenant(db: AsyncSession, data: TenantCreate) -> Tenant:
    """Create a tenant with a unique slug derived from the name unless one is given"""
    slug = await _unique_slug(db, data.slug or data.name)
    tenant = Tenant(slug=slug, name=data.name.strip(), phone=data.phone)
    db.add(tenant)
    await db.commit()
    await db.refresh(tenant)
    logger.info("Tenant created", tenant_id=str(tenant.id), slug=slug)
    return tenant


async def get_tenant(db: AsyncSession, tenant_id: UUID) -> Tenant:
    """Load an active tenant or raise NotFound / StorageUnavailable"""
    try:
        result = await db.execute(
            select(Tenant).where(Tenant.id == tenant_id, Tenant.is_active == True)
        )
    except OperationalError as e:
        logger.error("Tenant lookup failed", tenant_id=str(tenant_id), error=str(e))
        raise StorageUnavailable() from e
    tenant = result.scalar_one_or_none()
    if not tenant:
        raise NotFound("Tenant not found", tenant_id=tenant_id)
    return tenant


async def get_tenant_by_slug(db: AsyncSession, slug: Optional[str]) -> Tenant:
    """Resolve the tenant behind a guest-facing URL.

    An unreachable database is reported as StorageUnavailable; the caller
    decides what to render instead.
    """
    normalized = slugify(slug or "")
    if not normalized:
        raise NotFound("Tenant not found", slug=slug)
    try:
        result = await db.execute(
            select(Tenant).where(Tenant.slug == normalized, Tenant.is_active == True)
        )
    except OperationalError as e:
        logger.error("Tenant lookup failed", slug=normalized, error=str(e))
        raise StorageUnavailable() from e
    tenant = result.scalar_one_or_none()
    if not tenant:
        raise NotFound("Tenant not found", slug=normalized)
    return tenant


def _clean_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


async def get_restaurant_info(db: AsyncSession, tenant_id: UUID) -> Optional[RestaurantInfo]:
    result = await db.execute(select(RestaurantInfo).where(RestaurantInfo.tenant_id == tenant_id))
    return result.scalar_one_or_none()


async def upsert_restaurant_info(
    db: AsyncSession, tenant_id: UUID, data: RestaurantInfoUpdate
) -> RestaurantInfo:
    """Create or replace the tenant's info; blank text is stored as null"""
    info = await get_restaurant_info(db, tenant_id)
    if info is None:
        info = RestaurantInfo(tenant_id=tenant_id)
        db.add(info)

    info.address = _clean_text(data.address)
    info.work_schedule = data.work_schedule or None
    info.about = _clean_text(data.about)

    await db.commit()
    await db.refresh(info)
    logger.info("Restaurant info saved", tenant_id=str(tenant_id))
    return info
