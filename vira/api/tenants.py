"""Tenant management API endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vira.api.deps import require_tenant
from vira.database import get_db
from vira.models.tenant import Tenant
from vira.schemas.tenant import (
    RestaurantInfoResponse,
    RestaurantInfoUpdate,
    TenantCreate,
    TenantResponse,
    TenantUpdate,
)
from vira.services import tenants as tenant_service

router = APIRouter()


@router.get("", response_model=List[TenantResponse])
async def list_tenants(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
):
    """List active tenants"""
    result = await db.execute(
        select(Tenant)
        .where(Tenant.is_active == True)
        .order_by(Tenant.created_at)
        .offset(skip)
        .limit(limit)
    )
    return result.scalars().all()


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    tenant_data: TenantCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new tenant"""
    return await tenant_service.create_tenant(db, tenant_data)


@router.get("/by-slug/{slug}", response_model=TenantResponse)
async def get_tenant_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db),
):
    """Resolve a tenant from its public slug"""
    return await tenant_service.get_tenant_by_slug(db, slug)


@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant(tenant: Tenant = Depends(require_tenant)):
    """Get tenant details"""
    return tenant


@router.put("/{tenant_id}", response_model=TenantResponse)
async def update_tenant(
    tenant_data: TenantUpdate,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Update tenant"""
    for field, value in tenant_data.model_dump(exclude_unset=True).items():
        setattr(tenant, field, value)
    
    await db.commit()
    await db.refresh(tenant)
    
    return tenant


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tenant(
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Delete tenant (soft delete)"""
    tenant.is_active = False
    await db.commit()


@router.get("/{tenant_id}/info", response_model=Optional[RestaurantInfoResponse])
async def get_restaurant_info(
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Get restaurant info, or null when none is saved"""
    return await tenant_service.get_restaurant_info(db, tenant.id)


@router.put("/{tenant_id}/info", response_model=RestaurantInfoResponse)
async def update_restaurant_info(
    info_data: RestaurantInfoUpdate,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Replace restaurant info"""
    return await tenant_service.upsert_restaurant_info(db, tenant.id, info_data)
