"""
Store and StoreZone database models.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from household_hub.database import Base


class Store(Base):
    """A physical store. The virtual "All" store is never persisted."""

    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    modified = Column(DateTime, server_default=func.now(), nullable=True)

    # Relationships
    zones = relationship(
        "StoreZone",
        back_populates="store",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class StoreZone(Base):
    """
    One (sequence, department) row of a store layout.

    Rows sharing a store and sequence form one logical zone. zone_sequence is
    at least 1 for stored rows; the swap routine parks rows at -1 mid-transaction.
    """

    __tablename__ = "store_zones"
    __table_args__ = (
        Index("idx_store_zone_department", "store_id", "department_id"),
    )

    store_id = Column(
        Integer, ForeignKey("stores.id", ondelete="CASCADE"), primary_key=True
    )
    zone_sequence = Column(Integer, primary_key=True)
    department_id = Column(
        Integer, ForeignKey("departments.id", ondelete="CASCADE"), primary_key=True
    )
    zone_name = Column(String, nullable=False, default="General")
    modified = Column(DateTime, server_default=func.now(), nullable=True)

    # Relationships
    store = relationship("Store", back_populates="zones")
    department = relationship("Department", back_populates="zones")

    @property
    def department_name(self):
        return self.department.name if self.department else None
