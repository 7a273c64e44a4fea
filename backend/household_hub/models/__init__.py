"""
Database models for Household Hub.

All SQLAlchemy models are imported here so Base.metadata knows every table.
"""

from household_hub.models.department import Department
from household_hub.models.store import Store, StoreZone
from household_hub.models.item import Item
from household_hub.models.shopping_list import ShoppingListEntry
from household_hub.models.setting import AppSetting
from household_hub.models.vehicle import (
    Vehicle,
    ServiceType,
    ServiceInterval,
    ServiceLogEntry,
)

__all__ = [
    "Department",
    "Store",
    "StoreZone",
    "Item",
    "ShoppingListEntry",
    "AppSetting",
    "Vehicle",
    "ServiceType",
    "ServiceInterval",
    "ServiceLogEntry",
]
