# app/models/vehicle.py
"""
Registered vehicles table.
One row per vehicle currently admitted to the parking lot.
(plate, vehicle_type) is unique; capacity per type is derived from row counts.
"""

import enum

from sqlalchemy import Column, Integer, String, DateTime, Text, Enum, UniqueConstraint
from app.database import Base


class VehicleType(str, enum.Enum):
    CAR = "CAR"
    MOTORCYCLE = "MOTORCYCLE"


class Vehicle(Base):
    __tablename__ = "vehicles"
    __table_args__ = (
        UniqueConstraint("plate", "vehicle_type", name="uq_vehicles_plate_type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    plate = Column(String(20), nullable=False, index=True)
    vehicle_type = Column(Enum(VehicleType, name="vehicle_type"), nullable=False, index=True)
    owner_name = Column(String(200))
    entry_time = Column(DateTime)
    notes = Column(Text)

    def __repr__(self):
        return f"<Vehicle {self.id} plate={self.plate} type={self.vehicle_type}>"
