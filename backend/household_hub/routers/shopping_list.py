"""
API endpoints for the shopping list.

Both read endpoints run the purchased-item janitor before reading.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from household_hub.core.limiter import limiter, write_rate_limit
from household_hub.database import get_db
from household_hub.dependencies import get_janitor
from household_hub.schemas import (
    MessageResponse,
    ProjectedShoppingListRow,
    PurchasedUpdate,
    ShoppingListEntryCreate,
    ShoppingListEntryResponse,
    ShoppingListEntryUpdate,
)
from household_hub.services.janitor import PurchasedItemJanitor
from household_hub.services.shopping_list_service import (
    entry_to_dict,
    shopping_list_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[ShoppingListEntryResponse])
def list_entries(
    db: Session = Depends(get_db),
    janitor: PurchasedItemJanitor = Depends(get_janitor),
):
    """All entries, for the list management page."""
    janitor.run_cleanup_if_due(db)
    return shopping_list_service.list_entries(db)


@router.get("/{store_id}", response_model=List[ProjectedShoppingListRow])
def get_store_shopping_list(
    store_id: str,
    show_purchased: Optional[str] = Query(None, alias="showPurchased"),
    db: Session = Depends(get_db),
    janitor: PurchasedItemJanitor = Depends(get_janitor),
):
    """
    Shopping list ordered by the store's zones (store -1: everything under General).

    Purchased entries are included only for showPurchased=true.
    """
    janitor.run_cleanup_if_due(db)
    return shopping_list_service.project(db, store_id, include_purchased=show_purchased == "true")


@router.post("", response_model=ShoppingListEntryResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(write_rate_limit)
def add_entry(
    request: Request,
    payload: ShoppingListEntryCreate,
    db: Session = Depends(get_db),
):
    """Add an entry; an existing entry with the same name is overwritten."""
    entry = shopping_list_service.add_entry(
        db,
        payload.name,
        description=payload.description,
        quantity=payload.quantity,
        department_id=payload.department_id,
        item_id=payload.item_id,
    )
    return entry_to_dict(entry)


@router.put("/{name}", response_model=ShoppingListEntryResponse)
def update_entry(name: str, payload: ShoppingListEntryUpdate, db: Session = Depends(get_db)):
    entry = shopping_list_service.update_entry(
        db, name, quantity=payload.quantity, purchased=payload.purchased
    )
    return entry_to_dict(entry)


@router.patch("/{name}/purchased", response_model=ShoppingListEntryResponse)
def mark_purchased(name: str, payload: PurchasedUpdate, db: Session = Depends(get_db)):
    entry = shopping_list_service.set_purchased(db, name, payload.purchased)
    return entry_to_dict(entry)


@router.delete("/{name}", response_model=MessageResponse)
def remove_entry(name: str, db: Session = Depends(get_db)):
    shopping_list_service.remove_entry(db, name)
    return {"message": "Item removed from shopping list"}
