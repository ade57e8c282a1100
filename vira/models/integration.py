"""Third-party integration settings"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, Enum, ForeignKey, JSON, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from vira.database import Base


class IntegrationType(str, enum.Enum):
    """Supported integrations"""
    POS_IIKO = "POS_IIKO"
    POS_RKEEPER = "POS_RKEEPER"
    WHATSAPP = "WHATSAPP"
    KASPI = "KASPI"


class IntegrationStatus(str, enum.Enum):
    """Integration state"""
    DISCONNECTED = "DISCONNECTED"
    CONFIGURED = "CONFIGURED"
    ACTIVE = "ACTIVE"


class Integration(Base):
    """Per-tenant configuration of one integration type"""
    __tablename__ = "integrations"
    __table_args__ = (
        UniqueConstraint("tenant_id", "type", name="uq_integrations_tenant_type"),
    )
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, ForeignKey("tenants.id"), nullable=False, index=True)
    type = Column(
        Enum(IntegrationType, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
    )
    status = Column(
        Enum(IntegrationStatus, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
        default=IntegrationStatus.DISCONNECTED,
    )
    config = Column(JSON)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    tenant = relationship("Tenant", back_populates="integrations")
