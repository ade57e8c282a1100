"""Reservation schemas"""

from datetime import datetime, timezone
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field, field_serializer, field_validator

from vira.engine.scheduler import ReservationStatus


def to_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Store instants as naive UTC; naive input is taken to be UTC already"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class ReservationCreate(BaseModel):
    """Create reservation request"""
    table_label: Optional[str] = None
    table_seats: Optional[int] = Field(default=None, gt=0)
    party_size: int
    start_at: datetime
    end_at: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    name: str
    phone: str
    comment: Optional[str] = None
    status: Optional[ReservationStatus] = None

    @field_validator("start_at", "end_at")
    @classmethod
    def normalize_times(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_utc_naive(value)


class ReservationUpdate(BaseModel):
    """Update reservation request; only fields that are sent are applied"""
    table_label: Optional[str] = None
    table_seats: Optional[int] = Field(default=None, gt=0)
    party_size: Optional[int] = None
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    name: Optional[str] = None
    phone: Optional[str] = None
    comment: Optional[str] = None
    status: Optional[ReservationStatus] = None

    @field_validator("start_at", "end_at")
    @classmethod
    def normalize_times(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_utc_naive(value)


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: UUID
    tenant_id: UUID
    table_label: Optional[str]
    table_seats: Optional[int]
    start_at: datetime
    end_at: datetime
    party_size: int
    name: str
    phone: str
    comment: Optional[str]
    status: ReservationStatus
    created_at: datetime
    updated_at: datetime

    @field_serializer("start_at", "end_at", "created_at", "updated_at")
    def serialize_utc(self, value: datetime) -> datetime:
        return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value

    class Config:
        from_attributes = True


class ReservationListResponse(BaseModel):
    """Reservation list"""
    items: List[ReservationResponse]
    total: int
