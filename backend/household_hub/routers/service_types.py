"""
API endpoints for service types (oil change, tire rotation, ...).
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from household_hub.database import get_db
from household_hub.errors import NotFound, translate_integrity_error
from household_hub.models.vehicle import ServiceType
from household_hub.schemas import MessageResponse, NamedWrite, ServiceTypeResponse

router = APIRouter()


def _get_or_404(db: Session, service_type_id: int) -> ServiceType:
    service_type = db.get(ServiceType, service_type_id)
    if service_type is None:
        raise NotFound("Service type not found")
    return service_type


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise translate_integrity_error(
            e, conflict_message="Service type with this name already exists"
        )


@router.get("", response_model=List[ServiceTypeResponse])
def list_service_types(db: Session = Depends(get_db)):
    return db.query(ServiceType).order_by(ServiceType.name).all()


@router.get("/{service_type_id}", response_model=ServiceTypeResponse)
def get_service_type(service_type_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, service_type_id)


@router.post("", response_model=ServiceTypeResponse, status_code=status.HTTP_201_CREATED)
def create_service_type(payload: NamedWrite, db: Session = Depends(get_db)):
    service_type = ServiceType(name=payload.name.strip())
    db.add(service_type)
    _commit(db)
    db.refresh(service_type)
    return service_type


@router.put("/{service_type_id}", response_model=ServiceTypeResponse)
def update_service_type(service_type_id: int, payload: NamedWrite, db: Session = Depends(get_db)):
    service_type = _get_or_404(db, service_type_id)
    service_type.name = payload.name.strip()
    service_type.modified = func.now()
    _commit(db)
    db.refresh(service_type)
    return service_type


@router.delete("/{service_type_id}", response_model=MessageResponse)
def delete_service_type(service_type_id: int, db: Session = Depends(get_db)):
    service_type = _get_or_404(db, service_type_id)
    db.delete(service_type)
    db.commit()
    return {"message": "Service type deleted successfully"}
