# app/routers/vehicles.py
"""
Vehicle registry CRUD.
Admission errors are raised from the registry and turned into 400/404
responses by the exception handlers in app.main.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.vehicle import VehicleType
from app.schemas.vehicle import VehicleIn, VehicleOut, CapacityStatus
from app.services import vehicle_service
from app.services.errors import ENTITY_NAME, VehicleNotFound
from app.services.vehicle_store import SqlVehicleStore, VehicleStore
from app.utils.alert_headers import entity_creation_alert, entity_update_alert, entity_deletion_alert
from app.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


def get_store(db: Session = Depends(get_db)) -> VehicleStore:
    """FastAPI dependency — record store bound to the request's DB session."""
    return SqlVehicleStore(db)


def _created(vehicle: VehicleOut, response: Response) -> VehicleOut:
    response.status_code = status.HTTP_201_CREATED
    response.headers["Location"] = f"/api/v1/vehicles/{vehicle.id}"
    response.headers.update(entity_creation_alert(ENTITY_NAME, str(vehicle.id)))
    return vehicle


@router.post("/vehicles", response_model=VehicleOut, status_code=status.HTTP_201_CREATED,
             summary="Register a vehicle entering the lot")
def create_vehicle(body: VehicleIn, response: Response, store: VehicleStore = Depends(get_store)):
    """400 with idexists | placaexist | motomax | carromax when admission is refused."""
    logger.debug(f"Request to save vehicle: {body}")
    vehicle = vehicle_service.register_vehicle(store, body)
    return _created(vehicle, response)


@router.put("/vehicles", response_model=VehicleOut, summary="Update a vehicle (creates it when id is absent)")
def update_vehicle(body: VehicleIn, response: Response, store: VehicleStore = Depends(get_store)):
    logger.debug(f"Request to update vehicle: {body}")
    vehicle = vehicle_service.update_vehicle(store, body)
    if body.id is None:
        return _created(vehicle, response)
    response.headers.update(entity_update_alert(ENTITY_NAME, str(vehicle.id)))
    return vehicle


@router.get("/vehicles", response_model=list[VehicleOut], summary="List vehicles in the lot")
def list_vehicles(vehicle_type: Optional[VehicleType] = None, store: VehicleStore = Depends(get_store)):
    return vehicle_service.list_vehicles(store, vehicle_type)


@router.get("/vehicles/capacity", response_model=list[CapacityStatus], summary="Free slots per vehicle type")
def get_capacity(store: VehicleStore = Depends(get_store)):
    return vehicle_service.capacity_status(store)


@router.get("/vehicles/{vehicle_id}", response_model=VehicleOut, summary="Get one vehicle")
def get_vehicle(vehicle_id: int, store: VehicleStore = Depends(get_store)):
    return vehicle_service.get_vehicle(store, vehicle_id)


@router.delete("/vehicles/{vehicle_id}", summary="Remove a vehicle, freeing its slot")
def delete_vehicle(vehicle_id: int, store: VehicleStore = Depends(get_store)):
    """Empty 200. Idempotent unless STRICT_DELETE is set, in which case unknown ids give 404."""
    logger.debug(f"Request to delete vehicle: {vehicle_id}")
    try:
        vehicle_service.delete_vehicle(store, vehicle_id)
    except VehicleNotFound:
        if settings.STRICT_DELETE:
            raise
        logger.info(f"Delete of unknown vehicle id={vehicle_id} ignored")
    return Response(status_code=status.HTTP_200_OK,
                    headers=entity_deletion_alert(ENTITY_NAME, str(vehicle_id)))
