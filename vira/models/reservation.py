"""Reservation model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Enum, Index, Uuid
from sqlalchemy.orm import relationship

from vira.database import Base
from vira.engine.scheduler import ReservationStatus


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"
    __table_args__ = (
        Index("ix_reservations_tenant_table_start", "tenant_id", "table_label", "start_at"),
    )
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, ForeignKey("tenants.id"), nullable=False, index=True)
    
    # Table (free-form label, seats copied at booking time)
    table_label = Column(String(50))
    table_seats = Column(Integer)
    
    # Time window, stored as naive UTC
    start_at = Column(DateTime, nullable=False)
    end_at = Column(DateTime, nullable=False)
    
    # Guest
    party_size = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=False)
    comment = Column(Text)
    
    status = Column(
        Enum(ReservationStatus, values_callable=lambda e: [m.value for m in e], native_enum=False),
        default=ReservationStatus.NEW,
        nullable=False,
    )
    
    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    tenant = relationship("Tenant", back_populates="reservations")
