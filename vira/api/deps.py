"""Shared router dependencies"""

from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vira.database import get_db
from vira.models.tenant import Tenant
from vira.services.tenants import get_tenant


async def require_tenant(
    tenant_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Tenant:
    """Resolve the tenant from the path; every tenant route goes through here"""
    return await get_tenant(db, tenant_id)
