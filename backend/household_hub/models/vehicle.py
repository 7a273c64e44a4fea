"""
Vehicle maintenance models: vehicles, service types, intervals and log.
"""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, Float
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from household_hub.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    modified = Column(DateTime, server_default=func.now(), nullable=True)

    # Relationships
    intervals = relationship("ServiceInterval", back_populates="vehicle", passive_deletes=True)
    log_entries = relationship("ServiceLogEntry", back_populates="vehicle", passive_deletes=True)


class ServiceType(Base):
    __tablename__ = "service_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    modified = Column(DateTime, server_default=func.now(), nullable=True)


class ServiceInterval(Base):
    """How often a service is due for one vehicle, and when it is next due."""

    __tablename__ = "service_intervals"

    vehicle_id = Column(
        Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), primary_key=True
    )
    service_id = Column(
        Integer, ForeignKey("service_types.id", ondelete="CASCADE"), primary_key=True
    )
    months = Column(Integer, nullable=True)
    miles = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    next_date = Column(Date, nullable=True, index=True)
    next_miles = Column(Integer, nullable=True)
    modified = Column(DateTime, server_default=func.now(), nullable=True)

    # Relationships
    vehicle = relationship("Vehicle", back_populates="intervals")
    service = relationship("ServiceType")


class ServiceLogEntry(Base):
    """A service that was performed."""

    __tablename__ = "service_log"

    id = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(
        Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    service_id = Column(
        Integer, ForeignKey("service_types.id", ondelete="CASCADE"), nullable=False
    )
    service_date = Column(Date, nullable=False)
    service_miles = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    qty = Column(Float, nullable=True)
    modified = Column(DateTime, server_default=func.now(), nullable=True)

    # Relationships
    vehicle = relationship("Vehicle", back_populates="log_entries")
    service = relationship("ServiceType")
