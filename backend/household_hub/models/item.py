"""
Item database model.
"""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from household_hub.database import Base


class Item(Base):
    """Catalog of purchasable things, independent of any list."""

    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    department_id = Column(
        Integer, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True
    )
    qty = Column(Integer, nullable=False, default=0)

    # Relationships
    department = relationship("Department", back_populates="items")
