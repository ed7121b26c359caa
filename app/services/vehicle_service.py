# app/services/vehicle_service.py
"""
Vehicle registry: admission control for the parking lot.

Rules checked on registration, in order:
  1. a new vehicle must not carry an id          → AlreadyIdentified (idexists)
  2. (plate, type) must not already be present   → DuplicateVehicle  (placaexist)
  3. the type must have a free slot              → CapacityExceeded  (carromax | motomax)

Checks run before the store is touched, so a rejection leaves it unchanged.
Capacity is derived from the live count on every call, never cached; a
delete frees a slot immediately. Check and insert are separate steps: two
concurrent registrations can both pass the capacity check (duplicates are
caught by the store's unique constraint).

Updates with an id are written as-is without re-running the rules; the id
must already exist (unknown ids raise VehicleNotFound).
"""

from datetime import datetime
from typing import Dict, List, Optional

from app.config import settings
from app.models.vehicle import VehicleType
from app.schemas.vehicle import VehicleIn, VehicleOut, CapacityStatus
from app.services.errors import AlreadyIdentified, DuplicateVehicle, CapacityExceeded, VehicleNotFound
from app.services.vehicle_store import VehicleStore
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _capacity_for(vehicle_type: VehicleType, capacities: Optional[Dict[str, int]]) -> Optional[int]:
    """Configured capacity for a type, or None when the type is unlimited."""
    caps = settings.CAPACITIES if capacities is None else capacities
    return caps.get(VehicleType(vehicle_type).value)


def register_vehicle(store: VehicleStore, candidate: VehicleIn,
                     capacities: Optional[Dict[str, int]] = None) -> VehicleOut:
    """Admit a new vehicle or raise the AdmissionError describing why not."""
    if candidate.id is not None:
        logger.warning(f"[Registry] Rejected {candidate.plate}: id {candidate.id} supplied on create")
        raise AlreadyIdentified()

    if store.find_by_plate_and_type(candidate.plate, candidate.vehicle_type):
        logger.warning(f"[Registry] Rejected {candidate.plate}: already parked as {candidate.vehicle_type.value}")
        raise DuplicateVehicle(candidate.plate, candidate.vehicle_type)

    capacity = _capacity_for(candidate.vehicle_type, capacities)
    if capacity is not None:
        current = store.count_by_type(candidate.vehicle_type)
        if current >= capacity:
            logger.warning(f"[Registry] Rejected {candidate.plate}: {candidate.vehicle_type.value} full ({current}/{capacity})")
            raise CapacityExceeded(candidate.vehicle_type, capacity)

    if candidate.entry_time is None:
        candidate = candidate.model_copy(update={"entry_time": datetime.utcnow()})

    vehicle = store.save(candidate)
    logger.info(f"[Registry] Admitted {vehicle.plate} ({vehicle.vehicle_type.value}) as id={vehicle.id}")
    return vehicle


def update_vehicle(store: VehicleStore, record: VehicleIn,
                   capacities: Optional[Dict[str, int]] = None) -> VehicleOut:
    """
    Overwrite a vehicle by id. Without an id this is a registration.
    Ids are only ever assigned by the store, so an id that is not present
    raises VehicleNotFound instead of creating a record.
    """
    if record.id is None:
        return register_vehicle(store, record, capacities)

    if store.find_by_id(record.id) is None:
        logger.warning(f"[Registry] Update of unknown id={record.id} refused")
        raise VehicleNotFound(record.id)

    vehicle = store.save(record)
    logger.info(f"[Registry] Updated id={vehicle.id} plate={vehicle.plate}")
    return vehicle


def get_vehicle(store: VehicleStore, vehicle_id: int) -> VehicleOut:
    vehicle = store.find_by_id(vehicle_id)
    if vehicle is None:
        raise VehicleNotFound(vehicle_id)
    return vehicle


def list_vehicles(store: VehicleStore, vehicle_type: Optional[VehicleType] = None) -> List[VehicleOut]:
    return store.find_all(vehicle_type)


def delete_vehicle(store: VehicleStore, vehicle_id: int) -> None:
    """Remove a vehicle, freeing its slot. Raises VehicleNotFound for unknown ids."""
    if not store.delete_by_id(vehicle_id):
        raise VehicleNotFound(vehicle_id)
    logger.info(f"[Registry] Removed id={vehicle_id}")


def capacity_status(store: VehicleStore, capacities: Optional[Dict[str, int]] = None) -> List[CapacityStatus]:
    """Current count vs capacity for every vehicle type."""
    result = []
    for vehicle_type in VehicleType:
        count = store.count_by_type(vehicle_type)
        capacity = _capacity_for(vehicle_type, capacities)
        if capacity is None:
            result.append(CapacityStatus(vehicle_type=vehicle_type, current_count=count))
            continue
        result.append(CapacityStatus(
            vehicle_type=vehicle_type,
            current_count=count,
            max_capacity=capacity,
            available=max(0, capacity - count),
            occupancy_percent=round((count / capacity) * 100, 1) if capacity else 100.0,
            is_full=count >= capacity,
        ))
    return result
