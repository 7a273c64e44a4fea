"""
The virtual "All" store.

It is never persisted and is recognized by its id alone. Its shopping list
flattens every department into a single "General" zone.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from household_hub.errors import Forbidden, InvalidArgument

ALL_STORE_ID = -1
ALL_STORE_NAME = "All"
GENERAL_ZONE_NAME = "General"
UNCATEGORIZED_ZONE_NAME = "Uncategorized"
UNCATEGORIZED_ZONE_SEQUENCE = 999


@dataclass(frozen=True)
class VirtualStore:
    id: int
    name: str
    modified: Optional[datetime] = None

    def as_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "modified": self.modified}


ALL_STORE = VirtualStore(id=ALL_STORE_ID, name=ALL_STORE_NAME)


def parse_store_id(store_id: Any) -> Optional[int]:
    """Coerce a path/body value to an int store id, or None if it is not numeric."""
    if isinstance(store_id, bool):
        return None
    if isinstance(store_id, int):
        return store_id
    try:
        return int(str(store_id).strip())
    except (TypeError, ValueError):
        return None


def is_virtual(store_id: Any) -> bool:
    return parse_store_id(store_id) == ALL_STORE_ID


def forbid_virtual(store_id: Any, action: str = "modified") -> None:
    if is_virtual(store_id):
        raise Forbidden(f"The {ALL_STORE_NAME} store cannot be {action}")


def require_real_store_id(store_id: Any, action: str = "modified") -> int:
    """
    Return the integer id of a real store for a write operation.

    Raises Forbidden for the virtual store and InvalidArgument for anything
    that is not a positive integer.
    """
    forbid_virtual(store_id, action)
    parsed = parse_store_id(store_id)
    if parsed is None or parsed < 1:
        raise InvalidArgument("Invalid store id", detail=str(store_id))
    return parsed
