"""
API endpoints for stores and their zone layouts.

The virtual "All" store (id -1) is listed first and is read-only.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from household_hub.core.limiter import limiter, write_rate_limit
from household_hub.database import get_db
from household_hub.errors import NotFound
from household_hub.models.store import Store
from household_hub.schemas import (
    ErrorResponse,
    MessageResponse,
    StoreResponse,
    StoreWrite,
    StoreZoneResponse,
    ZoneAssignmentCreate,
    ZoneSwapRequest,
)
from household_hub.services.virtual_store import (
    ALL_STORE,
    ALL_STORE_NAME,
    forbid_virtual,
    is_virtual,
    parse_store_id,
)
from household_hub.services.zone_service import zone_service

logger = logging.getLogger(__name__)

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    }
)


def _get_store_or_404(db: Session, store_id: str) -> Store:
    parsed = parse_store_id(store_id)
    store = db.get(Store, parsed) if parsed is not None else None
    if store is None:
        raise NotFound("Store not found")
    return store


@router.get("", response_model=List[StoreResponse])
def list_stores(db: Session = Depends(get_db)):
    """Virtual store first, then persisted stores by name."""
    stores = (
        db.query(Store)
        .filter(Store.name != ALL_STORE_NAME)
        .order_by(Store.name)
        .all()
    )
    return [ALL_STORE.as_dict(), *stores]


@router.get("/{store_id}", response_model=StoreResponse)
def get_store(store_id: str, db: Session = Depends(get_db)):
    if is_virtual(store_id):
        return ALL_STORE.as_dict()
    return _get_store_or_404(db, store_id)


@router.post("", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
def create_store(payload: StoreWrite, db: Session = Depends(get_db)):
    store = Store(name=payload.name.strip())
    db.add(store)
    db.commit()
    db.refresh(store)
    logger.info(f"Store created: {store.id} {store.name!r}")
    return store


@router.put("/{store_id}", response_model=StoreResponse)
def rename_store(store_id: str, payload: StoreWrite, db: Session = Depends(get_db)):
    forbid_virtual(store_id)
    store = _get_store_or_404(db, store_id)
    store.name = payload.name.strip()
    store.modified = func.now()
    db.commit()
    db.refresh(store)
    logger.info(f"Store renamed: {store.id} {store.name!r}")
    return store


@router.delete("/{store_id}", response_model=MessageResponse)
def delete_store(store_id: str, db: Session = Depends(get_db)):
    forbid_virtual(store_id, action="deleted")
    store = _get_store_or_404(db, store_id)
    db.delete(store)
    db.commit()
    logger.info(f"Store deleted: {store_id}")
    return {"message": "Store deleted successfully"}


# ---------- Zones ----------


@router.get("/{store_id}/zones", response_model=List[StoreZoneResponse])
def list_zones(store_id: str, db: Session = Depends(get_db)):
    return zone_service.list_zones(db, store_id)


@router.post(
    "/{store_id}/zones",
    response_model=StoreZoneResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
@limiter.limit(write_rate_limit)
def upsert_zone(
    request: Request,
    store_id: str,
    payload: ZoneAssignmentCreate,
    db: Session = Depends(get_db),
):
    """Create a zone row, or rename it when (store, sequence, department) exists."""
    return zone_service.upsert_zone_assignment(
        db,
        store_id,
        sequence=payload.zone_sequence,
        name=payload.zone_name,
        department_id=payload.department_id,
    )


@router.post("/{store_id}/zones/swap", response_model=MessageResponse)
@limiter.limit(write_rate_limit)
def swap_zones(
    request: Request,
    store_id: str,
    payload: ZoneSwapRequest,
    db: Session = Depends(get_db),
):
    """Exchange the order of two zones."""
    zone_service.swap(db, store_id, payload.seq_a, payload.seq_b)
    return {"message": "Store zones reordered successfully"}


@router.delete(
    "/{store_id}/zones/{zone_sequence}/{department_id}", response_model=MessageResponse
)
def delete_zone(
    store_id: str,
    zone_sequence: int,
    department_id: int,
    db: Session = Depends(get_db),
):
    zone_service.delete_zone_assignment(db, store_id, zone_sequence, department_id)
    return {"message": "Store zone deleted successfully"}
