"""
Shopping list service: store-aware projection and entry management.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import Integer, String, and_, literal, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from household_hub.errors import InvalidArgument, NotFound, translate_integrity_error
from household_hub.models.department import Department
from household_hub.models.item import Item
from household_hub.models.shopping_list import ShoppingListEntry
from household_hub.models.store import StoreZone
from household_hub.services.virtual_store import (
    GENERAL_ZONE_NAME,
    UNCATEGORIZED_ZONE_NAME,
    UNCATEGORIZED_ZONE_SEQUENCE,
    is_virtual,
    parse_store_id,
)

logger = logging.getLogger(__name__)

ENTRY_COLUMNS = (
    ShoppingListEntry.name,
    ShoppingListEntry.description,
    ShoppingListEntry.quantity,
    ShoppingListEntry.purchased,
    ShoppingListEntry.department_id,
    ShoppingListEntry.item_id,
)


def _unpurchased():
    return or_(ShoppingListEntry.purchased.is_(None), ShoppingListEntry.purchased == 0)


def entry_to_dict(entry: ShoppingListEntry) -> Dict[str, Any]:
    return {
        "name": entry.name,
        "description": entry.description,
        "quantity": entry.quantity,
        "department_id": entry.department_id,
        "item_id": entry.item_id,
        "purchased": entry.purchased,
        "modified": entry.modified,
    }


class ShoppingListService:
    def project(
        self, db: Session, store_id: Any, include_purchased: bool = False
    ) -> List[Dict[str, Any]]:
        """
        Ordered, zone-annotated shopping list for one store.

        Virtual store: every entry in zone "General" (sequence 0), ordered by
        name; store_zones is never read. Real store: entries LEFT JOIN the
        store's zones, falling back to "Uncategorized"/999, ordered by zone
        sequence then name. Read-only.
        """
        if is_virtual(store_id):
            query = (
                db.query(
                    *ENTRY_COLUMNS,
                    literal(GENERAL_ZONE_NAME, String).label("zone"),
                    literal(0, Integer).label("zone_seq"),
                    Department.name.label("department_name"),
                )
                .outerjoin(Department, ShoppingListEntry.department_id == Department.id)
            )
            order_by = [ShoppingListEntry.name]
        else:
            store_pk = parse_store_id(store_id)
            if store_pk is None:
                raise InvalidArgument("Invalid store id", detail=str(store_id))

            zone_seq = func.coalesce(StoreZone.zone_sequence, UNCATEGORIZED_ZONE_SEQUENCE)
            query = (
                db.query(
                    *ENTRY_COLUMNS,
                    func.coalesce(StoreZone.zone_name, UNCATEGORIZED_ZONE_NAME).label("zone"),
                    zone_seq.label("zone_seq"),
                    Department.name.label("department_name"),
                )
                .outerjoin(
                    StoreZone,
                    and_(
                        StoreZone.department_id == ShoppingListEntry.department_id,
                        StoreZone.store_id == store_pk,
                    ),
                )
                .outerjoin(Department, ShoppingListEntry.department_id == Department.id)
            )
            order_by = [zone_seq, ShoppingListEntry.name]

        if not include_purchased:
            query = query.filter(_unpurchased())

        return [row._asdict() for row in query.order_by(*order_by).all()]

    def list_entries(self, db: Session) -> List[Dict[str, Any]]:
        """Every entry with its department and item names, for list management."""
        rows = (
            db.query(
                ShoppingListEntry,
                Department.name.label("department_name"),
                Item.name.label("item_name"),
            )
            .outerjoin(Department, ShoppingListEntry.department_id == Department.id)
            .outerjoin(Item, ShoppingListEntry.item_id == Item.id)
            .order_by(ShoppingListEntry.name)
            .all()
        )
        return [
            {**entry_to_dict(entry), "department_name": department_name, "item_name": item_name}
            for entry, department_name, item_name in rows
        ]

    def add_entry(
        self,
        db: Session,
        name: str,
        description: Optional[str] = None,
        quantity: Optional[str] = None,
        department_id: Optional[int] = None,
        item_id: Optional[int] = None,
    ) -> ShoppingListEntry:
        """Add an entry, or overwrite the one with the same name (its purchased flag is kept)."""
        name = (name or "").strip()
        if not name:
            raise InvalidArgument("name is required")

        try:
            entry = db.get(ShoppingListEntry, name)
            if entry is None:
                entry = ShoppingListEntry(name=name, purchased=0)
                db.add(entry)
            else:
                entry.modified = func.now()
            entry.description = description or None
            entry.quantity = quantity or "1"
            entry.department_id = department_id or None
            entry.item_id = item_id or None
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise translate_integrity_error(
                e,
                not_found_message="Department or item not found",
                conflict_message="Shopping list item already exists",
            )
        db.refresh(entry)
        logger.info(f"Shopping list entry saved: {name!r}")
        return entry

    def update_entry(
        self,
        db: Session,
        name: str,
        quantity: Optional[str] = None,
        purchased: Optional[bool] = None,
    ) -> ShoppingListEntry:
        if quantity is None and purchased is None:
            raise InvalidArgument("No fields to update")

        entry = db.get(ShoppingListEntry, name)
        if entry is None:
            raise NotFound("Shopping list item not found")
        if quantity is not None:
            entry.quantity = quantity
        if purchased is not None:
            entry.purchased = 1 if purchased else 0
        entry.modified = func.now()
        db.commit()
        db.refresh(entry)
        return entry

    def set_purchased(self, db: Session, name: str, purchased: bool) -> ShoppingListEntry:
        entry = db.get(ShoppingListEntry, name)
        if entry is None:
            raise NotFound("Shopping list item not found")
        entry.purchased = 1 if purchased else 0
        entry.modified = func.now()
        db.commit()
        db.refresh(entry)
        return entry

    def remove_entry(self, db: Session, name: str) -> None:
        deleted = (
            db.query(ShoppingListEntry)
            .filter(ShoppingListEntry.name == name)
            .delete(synchronize_session=False)
        )
        if not deleted:
            db.rollback()
            raise NotFound("Shopping list item not found")
        db.commit()
        logger.info(f"Shopping list entry removed: {name!r}")


shopping_list_service = ShoppingListService()
