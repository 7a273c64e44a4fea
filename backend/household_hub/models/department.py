"""
Department database model.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from household_hub.database import Base


class Department(Base):
    """Global catalog of departments, shared by every store."""

    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)

    # Relationships
    zones = relationship("StoreZone", back_populates="department", passive_deletes=True)
    items = relationship("Item", back_populates="department", passive_deletes=True)
