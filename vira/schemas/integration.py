"""Integration schemas"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID
from pydantic import BaseModel

from vira.models.integration import IntegrationStatus, IntegrationType


class IntegrationUpdate(BaseModel):
    """Store the configuration of one integration type"""
    type: IntegrationType
    config: Optional[Dict[str, Any]] = None


class IntegrationResponse(BaseModel):
    """Integration response"""
    id: UUID
    type: IntegrationType
    status: IntegrationStatus
    config: Optional[Dict[str, Any]]
    updated_at: datetime

    class Config:
        from_attributes = True
