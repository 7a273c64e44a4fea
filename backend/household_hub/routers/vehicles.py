"""
API endpoints for vehicles, their service intervals and service history.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from household_hub.database import get_db
from household_hub.errors import NotFound, translate_integrity_error
from household_hub.models.vehicle import Vehicle
from household_hub.schemas import (
    MessageResponse,
    NamedWrite,
    ServiceIntervalCreate,
    ServiceIntervalResponse,
    ServiceIntervalUpdate,
    ServiceLogResponse,
    VehicleResponse,
)
from household_hub.services.maintenance_service import (
    interval_to_dict,
    maintenance_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()

DUPLICATE_VEHICLE = "Vehicle with this name already exists"


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise translate_integrity_error(e, conflict_message=DUPLICATE_VEHICLE)


@router.get("", response_model=List[VehicleResponse])
def list_vehicles(db: Session = Depends(get_db)):
    return db.query(Vehicle).order_by(Vehicle.name).all()


@router.get("/{vehicle_id}", response_model=VehicleResponse)
def get_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    vehicle = db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise NotFound("Vehicle not found")
    return vehicle


@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
def create_vehicle(payload: NamedWrite, db: Session = Depends(get_db)):
    vehicle = Vehicle(name=payload.name.strip())
    db.add(vehicle)
    _commit(db)
    db.refresh(vehicle)
    logger.info(f"Vehicle created: {vehicle.id} {vehicle.name!r}")
    return vehicle


@router.put("/{vehicle_id}", response_model=VehicleResponse)
def update_vehicle(vehicle_id: int, payload: NamedWrite, db: Session = Depends(get_db)):
    vehicle = db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise NotFound("Vehicle not found")
    vehicle.name = payload.name.strip()
    vehicle.modified = func.now()
    _commit(db)
    db.refresh(vehicle)
    return vehicle


@router.delete("/{vehicle_id}", response_model=MessageResponse)
def delete_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    deleted = db.query(Vehicle).filter(Vehicle.id == vehicle_id).delete(synchronize_session=False)
    if not deleted:
        raise NotFound("Vehicle not found")
    db.commit()
    logger.info(f"Vehicle deleted: {vehicle_id}")
    return {"message": "Vehicle deleted successfully"}


# ---------- Service intervals ----------


@router.get("/{vehicle_id}/service-intervals", response_model=List[ServiceIntervalResponse])
def list_service_intervals(vehicle_id: int, db: Session = Depends(get_db)):
    return maintenance_service.list_intervals(db, vehicle_id)


@router.post(
    "/{vehicle_id}/service-intervals",
    response_model=ServiceIntervalResponse,
    status_code=status.HTTP_201_CREATED,
)
def upsert_service_interval(
    vehicle_id: int, payload: ServiceIntervalCreate, db: Session = Depends(get_db)
):
    interval = maintenance_service.upsert_interval(
        db,
        vehicle_id,
        payload.service_id,
        months=payload.months,
        miles=payload.miles,
        notes=payload.notes,
    )
    return interval_to_dict(interval)


@router.put(
    "/{vehicle_id}/service-intervals/{service_id}", response_model=ServiceIntervalResponse
)
def update_service_interval(
    vehicle_id: int,
    service_id: int,
    payload: ServiceIntervalUpdate,
    db: Session = Depends(get_db),
):
    interval = maintenance_service.update_interval(
        db, vehicle_id, service_id, **payload.model_dump()
    )
    return interval_to_dict(interval)


@router.delete("/{vehicle_id}/service-intervals/{service_id}", response_model=MessageResponse)
def delete_service_interval(vehicle_id: int, service_id: int, db: Session = Depends(get_db)):
    maintenance_service.delete_interval(db, vehicle_id, service_id)
    return {"message": "Service interval deleted successfully"}


# ---------- Service log ----------


@router.get("/{vehicle_id}/service-log", response_model=List[ServiceLogResponse])
def list_vehicle_service_log(vehicle_id: int, db: Session = Depends(get_db)):
    """Newest first."""
    return maintenance_service.list_log(db, vehicle_id=vehicle_id)
