# app/services/errors.py
"""
Registry errors. All are client-facing and never retried.
AdmissionError subclasses → 400 with an error key; VehicleNotFound → 404.
"""

from typing import Optional

ENTITY_NAME = "vehicle"


class AdmissionError(Exception):
    """A vehicle was refused entry to the registry."""

    error_key = "admission"

    def __init__(self, message: str, entity_name: str = ENTITY_NAME, error_key: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.entity_name = entity_name
        if error_key:
            self.error_key = error_key


class AlreadyIdentified(AdmissionError):
    error_key = "idexists"

    def __init__(self):
        super().__init__("A new vehicle cannot already have an ID")


class DuplicateVehicle(AdmissionError):
    error_key = "placaexist"

    def __init__(self, plate: str, vehicle_type):
        super().__init__(f"Vehicle {plate} ({getattr(vehicle_type, 'value', vehicle_type)}) is already in the parking lot")
        self.plate = plate
        self.vehicle_type = vehicle_type


_CAPACITY_KEYS = {"CAR": "carromax", "MOTORCYCLE": "motomax"}


class CapacityExceeded(AdmissionError):
    def __init__(self, vehicle_type, capacity: int):
        type_name = getattr(vehicle_type, "value", vehicle_type)
        super().__init__(
            f"No free slots left for {type_name} (capacity {capacity})",
            error_key=_CAPACITY_KEYS[type_name],
        )
        self.vehicle_type = vehicle_type
        self.capacity = capacity


class VehicleNotFound(Exception):
    def __init__(self, vehicle_id: int):
        super().__init__(f"Vehicle {vehicle_id} not found")
        self.vehicle_id = vehicle_id
