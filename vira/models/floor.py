"""Floor plan and table models"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Float, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from vira.database import Base


class FloorPlan(Base):
    """Seating map of a restaurant; one per tenant is active"""
    __tablename__ = "floor_plans"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, ForeignKey("tenants.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=False, nullable=False)
    canvas_width = Column(Integer, nullable=False, default=800)
    canvas_height = Column(Integer, nullable=False, default=480)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    tenant = relationship("Tenant", back_populates="floor_plans")
    tables = relationship(
        "DiningTable",
        back_populates="floor_plan",
        cascade="all, delete-orphan",
        order_by="DiningTable.number",
    )


class DiningTable(Base):
    """A table placed on a floor plan"""
    __tablename__ = "dining_tables"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, ForeignKey("tenants.id"), nullable=False, index=True)
    floor_plan_id = Column(Uuid, ForeignKey("floor_plans.id"), nullable=False, index=True)
    number = Column(String(20), nullable=False)  # Display label, unique within the plan
    label = Column(String(100))  # Zone: terrace, window, bar...
    seats = Column(Integer, nullable=False, default=2)
    
    # Geometry in canvas units
    x = Column(Float, nullable=False, default=0)
    y = Column(Float, nullable=False, default=0)
    width = Column(Float, nullable=False, default=72)
    height = Column(Float, nullable=False, default=72)
    rotation = Column(Float)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    floor_plan = relationship("FloorPlan", back_populates="tables")
