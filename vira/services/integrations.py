"""Integration settings per tenant"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from vira.errors import NotFound
from vira.models.integration import Integration, IntegrationStatus, IntegrationType

logger = structlog.get_logger()


def resolve_status(config: Optional[Dict[str, Any]]) -> IntegrationStatus:
    """An empty configuration means the integration is disconnected"""
    return IntegrationStatus.CONFIGURED if config else IntegrationStatus.DISCONNECTED


async def list_integrations(db: AsyncSession, tenant_id: UUID) -> List[Integration]:
    result = await db.execute(
        select(Integration).where(Integration.tenant_id == tenant_id).order_by(Integration.type)
    )
    return list(result.scalars().all())


async def find_integration(
    db: AsyncSession, tenant_id: UUID, integration_type: IntegrationType
) -> Optional[Integration]:
    result = await db.execute(
        select(Integration).where(
            Integration.tenant_id == tenant_id,
            Integration.type == integration_type,
        )
    )
    return result.scalar_one_or_none()


async def get_integration(
    db: AsyncSession, tenant_id: UUID, integration_type: IntegrationType
) -> Integration:
    integration = await find_integration(db, tenant_id, integration_type)
    if not integration:
        raise NotFound("Integration is not configured", type=integration_type.value)
    return integration


async def upsert_integration(
    db: AsyncSession,
    tenant_id: UUID,
    integration_type: IntegrationType,
    config: Optional[Dict[str, Any]],
) -> Integration:
    """Store the config for one integration type and derive its status"""
    config = config or {}
    integration = await find_integration(db, tenant_id, integration_type)
    if integration is None:
        integration = Integration(tenant_id=tenant_id, type=integration_type)
        db.add(integration)

    integration.config = config
    integration.status = resolve_status(config)

    await db.commit()
    await db.refresh(integration)
    logger.info(
        "Integration saved",
        tenant_id=str(tenant_id),
        type=integration_type.value,
        status=integration.status.value,
    )
    return integration
