"""
API endpoints for the item catalog.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from household_hub.database import get_db
from household_hub.errors import NotFound, translate_integrity_error
from household_hub.models.department import Department
from household_hub.models.item import Item
from household_hub.schemas import ItemResponse, ItemWrite, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _item_query(db: Session):
    return db.query(Item, Department.name.label("department_name")).outerjoin(
        Department, Item.department_id == Department.id
    )


def _to_response(item: Item, department_name) -> dict:
    return {
        "id": item.id,
        "name": item.name,
        "department_id": item.department_id,
        "qty": item.qty,
        "department_name": department_name,
    }


def _save(db: Session, item: Item) -> dict:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise translate_integrity_error(e, not_found_message="Department not found")
    db.refresh(item)
    return _to_response(item, item.department.name if item.department else None)


@router.get("", response_model=List[ItemResponse])
def list_items(db: Session = Depends(get_db)):
    """List items grouped by department name, then item name."""
    rows = _item_query(db).order_by(Department.name, Item.name).all()
    return [_to_response(item, department_name) for item, department_name in rows]


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: int, db: Session = Depends(get_db)):
    row = _item_query(db).filter(Item.id == item_id).first()
    if row is None:
        raise NotFound("Item not found")
    item, department_name = row
    return _to_response(item, department_name)


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(payload: ItemWrite, db: Session = Depends(get_db)):
    item = Item(
        name=payload.name.strip(),
        department_id=payload.department_id or None,
        qty=payload.qty or 0,
    )
    db.add(item)
    return _save(db, item)


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(item_id: int, payload: ItemWrite, db: Session = Depends(get_db)):
    item = db.get(Item, item_id)
    if item is None:
        raise NotFound("Item not found")
    item.name = payload.name.strip()
    item.department_id = payload.department_id or None
    item.qty = payload.qty or 0
    return _save(db, item)


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_item(item_id: int, db: Session = Depends(get_db)):
    deleted = db.query(Item).filter(Item.id == item_id).delete(synchronize_session=False)
    if not deleted:
        raise NotFound("Item not found")
    db.commit()
    return {"message": "Item deleted successfully"}
