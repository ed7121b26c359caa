# app/services/vehicle_store.py
"""
Record store for vehicles.

VehicleStore is the storage port the registry talks to. Two adapters:
  - SqlVehicleStore:      SQLAlchemy session (used by the API)
  - InMemoryVehicleStore: dict keyed by id (tests and local experiments)

Both enforce the (plate, vehicle_type) uniqueness on write, so a duplicate
that slips past the registry's check-then-act window surfaces as
DuplicateVehicle instead of a second record.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.vehicle import Vehicle, VehicleType
from app.schemas.vehicle import VehicleIn, VehicleOut
from app.services.errors import DuplicateVehicle


class VehicleStore(ABC):
    """Port interface for the vehicle record store."""

    @abstractmethod
    def find_by_plate_and_type(self, plate: str, vehicle_type: VehicleType) -> List[VehicleOut]:
        """All records matching plate + type (at most one while the constraint holds)."""
        raise NotImplementedError

    @abstractmethod
    def count_by_type(self, vehicle_type: VehicleType) -> int:
        """Number of records currently present with this type."""
        raise NotImplementedError

    @abstractmethod
    def save(self, record: VehicleIn) -> VehicleOut:
        """Insert when record.id is unset (assigning a fresh id), else overwrite by id."""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, vehicle_id: int) -> Optional[VehicleOut]:
        raise NotImplementedError

    @abstractmethod
    def find_all(self, vehicle_type: Optional[VehicleType] = None) -> List[VehicleOut]:
        """All records in ascending id order, optionally restricted to one type."""
        raise NotImplementedError

    @abstractmethod
    def delete_by_id(self, vehicle_id: int) -> bool:
        """Remove a record. Returns False if nothing was stored under that id."""
        raise NotImplementedError


# PostgreSQL names the constraint; SQLite only lists the columns
_PLATE_TYPE_MARKERS = ("uq_vehicles_plate_type", "vehicles.plate, vehicles.vehicle_type")


def _is_plate_type_violation(error: IntegrityError) -> bool:
    message = str(error.orig)
    return any(marker in message for marker in _PLATE_TYPE_MARKERS)


class SqlVehicleStore(VehicleStore):
    """SQLAlchemy implementation. Each write commits immediately."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_plate_and_type(self, plate, vehicle_type):
        rows = (
            self.db.query(Vehicle)
            .filter(Vehicle.plate == plate, Vehicle.vehicle_type == vehicle_type)
            .all()
        )
        return [VehicleOut.model_validate(row) for row in rows]

    def count_by_type(self, vehicle_type):
        return self.db.query(func.count(Vehicle.id)).filter(Vehicle.vehicle_type == vehicle_type).scalar() or 0

    def save(self, record):
        data = record.model_dump()
        if record.id is None:
            data.pop("id")
            entity = Vehicle(**data)
            self.db.add(entity)
        else:
            entity = self.db.merge(Vehicle(**data))

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if _is_plate_type_violation(e):
                raise DuplicateVehicle(record.plate, record.vehicle_type)
            raise

        self.db.refresh(entity)
        return VehicleOut.model_validate(entity)

    def find_by_id(self, vehicle_id):
        entity = self.db.get(Vehicle, vehicle_id)
        return VehicleOut.model_validate(entity) if entity else None

    def find_all(self, vehicle_type=None):
        q = self.db.query(Vehicle)
        if vehicle_type:
            q = q.filter(Vehicle.vehicle_type == vehicle_type)
        return [VehicleOut.model_validate(row) for row in q.order_by(Vehicle.id).all()]

    def delete_by_id(self, vehicle_id):
        entity = self.db.get(Vehicle, vehicle_id)
        if not entity:
            return False
        self.db.delete(entity)
        self.db.commit()
        return True


class InMemoryVehicleStore(VehicleStore):
    """In-memory implementation for testing and development."""

    def __init__(self):
        self._vehicles: Dict[int, VehicleOut] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def find_by_plate_and_type(self, plate, vehicle_type):
        return [v.model_copy() for v in self._vehicles.values()
                if v.plate == plate and v.vehicle_type == vehicle_type]

    def count_by_type(self, vehicle_type):
        return sum(1 for v in self._vehicles.values() if v.vehicle_type == vehicle_type)

    def save(self, record):
        with self._lock:
            for existing in self._vehicles.values():
                if (existing.id != record.id and existing.plate == record.plate
                        and existing.vehicle_type == record.vehicle_type):
                    raise DuplicateVehicle(record.plate, record.vehicle_type)

            vehicle_id = record.id if record.id is not None else self._next_id
            self._next_id = max(self._next_id, vehicle_id + 1)
            stored = VehicleOut(**{**record.model_dump(), "id": vehicle_id})
            self._vehicles[vehicle_id] = stored
            return stored.model_copy()

    def find_by_id(self, vehicle_id):
        vehicle = self._vehicles.get(vehicle_id)
        return vehicle.model_copy() if vehicle else None

    def find_all(self, vehicle_type=None):
        return [self._vehicles[k].model_copy() for k in sorted(self._vehicles)
                if vehicle_type is None or self._vehicles[k].vehicle_type == vehicle_type]

    def delete_by_id(self, vehicle_id):
        with self._lock:
            return self._vehicles.pop(vehicle_id, None) is not None
