"""
API endpoints for the cross-vehicle service log and upcoming services.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from household_hub.config import Settings
from household_hub.database import get_db
from household_hub.dependencies import get_settings
from household_hub.schemas import (
    MessageResponse,
    ServiceIntervalResponse,
    ServiceLogCreate,
    ServiceLogResponse,
    ServiceLogUpdate,
)
from household_hub.services.maintenance_service import maintenance_service

router = APIRouter()
upcoming_router = APIRouter()


@router.get("", response_model=List[ServiceLogResponse])
def list_service_log(
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
):
    """Most recent entries across all vehicles."""
    return maintenance_service.list_log(db, limit=app_settings.SERVICE_LOG_LIMIT)


@router.get("/{entry_id}", response_model=ServiceLogResponse)
def get_service_log_entry(entry_id: int, db: Session = Depends(get_db)):
    return maintenance_service.get_log_entry(db, entry_id)


@router.post("", response_model=ServiceLogResponse, status_code=status.HTTP_201_CREATED)
def create_service_log_entry(payload: ServiceLogCreate, db: Session = Depends(get_db)):
    return maintenance_service.create_log_entry(db, **payload.model_dump())


@router.put("/{entry_id}", response_model=ServiceLogResponse)
def update_service_log_entry(
    entry_id: int, payload: ServiceLogUpdate, db: Session = Depends(get_db)
):
    return maintenance_service.update_log_entry(db, entry_id, **payload.model_dump())


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_service_log_entry(entry_id: int, db: Session = Depends(get_db)):
    maintenance_service.delete_log_entry(db, entry_id)
    return {"message": "Service log entry deleted successfully"}


@upcoming_router.get("", response_model=List[ServiceIntervalResponse])
def upcoming_services(
    days: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
):
    """Services due within the next `days` days (default from settings)."""
    if days is None:
        days = app_settings.UPCOMING_SERVICES_DAYS
    return maintenance_service.upcoming(db, days)
