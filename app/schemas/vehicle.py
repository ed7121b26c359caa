# app/schemas/vehicle.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from app.models.vehicle import VehicleType


class VehicleIn(BaseModel):
    """Request body for POST/PUT /vehicles. `id` must be absent on create."""
    id: Optional[int] = None
    plate: str = Field(..., min_length=1, max_length=20)
    vehicle_type: VehicleType
    owner_name: Optional[str] = None
    entry_time: Optional[datetime] = None
    notes: Optional[str] = None


class VehicleOut(BaseModel):
    id: int
    plate: str
    vehicle_type: VehicleType
    owner_name: Optional[str] = None
    entry_time: Optional[datetime] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class CapacityStatus(BaseModel):
    vehicle_type: VehicleType
    current_count: int
    max_capacity: Optional[int] = None
    available: Optional[int] = None
    occupancy_percent: Optional[float] = None
    is_full: bool = False
