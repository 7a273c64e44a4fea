"""
ShoppingListEntry database model.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from household_hub.database import Base


class ShoppingListEntry(Base):
    """
    A line on the shopping list, keyed by name.

    Adding the same name twice updates the existing row. purchased is 0/1;
    purchased rows are purged lazily by the janitor.
    """

    __tablename__ = "shopping_list"

    name = Column(String, primary_key=True)
    description = Column(Text, nullable=True)
    quantity = Column(String, nullable=True, default="1")
    department_id = Column(
        Integer, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True, index=True
    )
    item_id = Column(Integer, ForeignKey("items.id", ondelete="SET NULL"), nullable=True)
    purchased = Column(Integer, nullable=False, default=0)
    modified = Column(DateTime, server_default=func.now(), nullable=True)
