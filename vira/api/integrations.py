"""Integration settings API endpoints"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vira.api.deps import require_tenant
from vira.database import get_db
from vira.models.integration import IntegrationType
from vira.models.tenant import Tenant
from vira.schemas.integration import IntegrationResponse, IntegrationUpdate
from vira.services import integrations as integration_service

router = APIRouter()


@router.get("", response_model=List[IntegrationResponse])
async def list_integrations(
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """List configured integrations"""
    return await integration_service.list_integrations(db, tenant.id)


@router.get("/{integration_type}", response_model=IntegrationResponse)
async def get_integration(
    integration_type: IntegrationType,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Get one integration by type"""
    return await integration_service.get_integration(db, tenant.id, integration_type)


@router.put("", response_model=IntegrationResponse)
async def save_integration(
    integration_data: IntegrationUpdate,
    tenant: Tenant = Depends(require_tenant),
    db: AsyncSession = Depends(get_db),
):
    """Create or replace the config of one integration"""
    return await integration_service.upsert_integration(
        db, tenant.id, integration_data.type, integration_data.config
    )
