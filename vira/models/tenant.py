"""Tenant models"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, JSON, Text, Uuid
from sqlalchemy.orm import relationship

from vira.database import Base


class Tenant(Base):
    """Restaurant tenant"""
    __tablename__ = "tenants"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slug = Column(String(100), unique=True, nullable=False)  # URL-safe, used by the guest micro-site
    name = Column(String(255), nullable=False)
    phone = Column(String(20))
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    info = relationship("RestaurantInfo", back_populates="tenant", uselist=False)
    integrations = relationship("Integration", back_populates="tenant")
    reservations = relationship("Reservation", back_populates="tenant")
    floor_plans = relationship("FloorPlan", back_populates="tenant")
    menu_categories = relationship("MenuCategory", back_populates="tenant")


class RestaurantInfo(Base):
    """Public facts about a restaurant shown to guests"""
    __tablename__ = "restaurant_info"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, ForeignKey("tenants.id"), unique=True, nullable=False)
    
    address = Column(Text)
    
    # Opening hours (JSON: {"monday": {"open": "09:00", "close": "21:00"}, ...})
    work_schedule = Column(JSON)
    
    about = Column(Text)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    tenant = relationship("Tenant", back_populates="info")
