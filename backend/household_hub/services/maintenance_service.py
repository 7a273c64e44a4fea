"""
Vehicle maintenance queries: service intervals, the service log and what is due.
"""

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from household_hub.errors import NotFound, translate_integrity_error
from household_hub.models.vehicle import (
    ServiceInterval,
    ServiceLogEntry,
    ServiceType,
    Vehicle,
)

logger = logging.getLogger(__name__)


def interval_to_dict(interval: ServiceInterval, service_name=None, vehicle_name=None) -> Dict[str, Any]:
    return {
        "vehicle_id": interval.vehicle_id,
        "service_id": interval.service_id,
        "months": interval.months,
        "miles": interval.miles,
        "notes": interval.notes,
        "next_date": interval.next_date,
        "next_miles": interval.next_miles,
        "modified": interval.modified,
        "service_name": service_name,
        "vehicle_name": vehicle_name,
    }


def log_entry_to_dict(entry: ServiceLogEntry, service_name=None, vehicle_name=None) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "vehicle_id": entry.vehicle_id,
        "service_id": entry.service_id,
        "service_date": entry.service_date,
        "service_miles": entry.service_miles,
        "notes": entry.notes,
        "qty": entry.qty,
        "modified": entry.modified,
        "service_name": service_name,
        "vehicle_name": vehicle_name,
    }


class MaintenanceService:
    # --- Intervals ---

    def list_intervals(self, db: Session, vehicle_id: int) -> List[Dict[str, Any]]:
        rows = (
            db.query(ServiceInterval, ServiceType.name)
            .join(ServiceType, ServiceInterval.service_id == ServiceType.id)
            .filter(ServiceInterval.vehicle_id == vehicle_id)
            .order_by(ServiceType.name)
            .all()
        )
        return [interval_to_dict(i, service_name=name) for i, name in rows]

    def upsert_interval(
        self,
        db: Session,
        vehicle_id: int,
        service_id: int,
        months: Optional[int] = None,
        miles: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> ServiceInterval:
        """Create the interval for (vehicle, service) or overwrite its schedule."""
        try:
            interval = db.get(ServiceInterval, (vehicle_id, service_id))
            if interval is None:
                interval = ServiceInterval(vehicle_id=vehicle_id, service_id=service_id)
                db.add(interval)
            else:
                interval.modified = func.now()
            interval.months = months or None
            interval.miles = miles or None
            interval.notes = notes or None
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise translate_integrity_error(
                e, not_found_message="Vehicle or service type not found"
            )
        db.refresh(interval)
        return interval

    def update_interval(self, db: Session, vehicle_id: int, service_id: int, **fields) -> ServiceInterval:
        interval = db.get(ServiceInterval, (vehicle_id, service_id))
        if interval is None:
            raise NotFound("Service interval not found")
        for key in ("months", "miles", "notes", "next_date", "next_miles"):
            setattr(interval, key, fields.get(key) or None)
        interval.modified = func.now()
        db.commit()
        db.refresh(interval)
        return interval

    def delete_interval(self, db: Session, vehicle_id: int, service_id: int) -> None:
        deleted = (
            db.query(ServiceInterval)
            .filter(
                ServiceInterval.vehicle_id == vehicle_id,
                ServiceInterval.service_id == service_id,
            )
            .delete(synchronize_session=False)
        )
        if not deleted:
            raise NotFound("Service interval not found")
        db.commit()

    def upcoming(self, db: Session, days: int, today: Optional[date] = None) -> List[Dict[str, Any]]:
        """Intervals whose next due date falls on or before today + days."""
        horizon = (today or date.today()) + timedelta(days=days)
        rows = (
            db.query(ServiceInterval, ServiceType.name, Vehicle.name)
            .join(ServiceType, ServiceInterval.service_id == ServiceType.id)
            .join(Vehicle, ServiceInterval.vehicle_id == Vehicle.id)
            .filter(ServiceInterval.next_date.isnot(None), ServiceInterval.next_date <= horizon)
            .order_by(ServiceInterval.next_date.asc(), ServiceInterval.next_miles.asc())
            .all()
        )
        return [
            interval_to_dict(i, service_name=service_name, vehicle_name=vehicle_name)
            for i, service_name, vehicle_name in rows
        ]

    # --- Service log ---

    def _log_query(self, db: Session):
        return (
            db.query(ServiceLogEntry, ServiceType.name, Vehicle.name)
            .join(ServiceType, ServiceLogEntry.service_id == ServiceType.id)
            .join(Vehicle, ServiceLogEntry.vehicle_id == Vehicle.id)
            .order_by(ServiceLogEntry.service_date.desc(), ServiceLogEntry.service_miles.desc())
        )

    def list_log(self, db: Session, vehicle_id: Optional[int] = None, limit: Optional[int] = None):
        query = self._log_query(db)
        if vehicle_id is not None:
            query = query.filter(ServiceLogEntry.vehicle_id == vehicle_id)
        if limit:
            query = query.limit(limit)
        return [
            log_entry_to_dict(entry, service_name=service_name, vehicle_name=vehicle_name)
            for entry, service_name, vehicle_name in query.all()
        ]

    def get_log_entry(self, db: Session, entry_id: int) -> Dict[str, Any]:
        row = self._log_query(db).filter(ServiceLogEntry.id == entry_id).first()
        if row is None:
            raise NotFound("Service log entry not found")
        entry, service_name, vehicle_name = row
        return log_entry_to_dict(entry, service_name=service_name, vehicle_name=vehicle_name)

    def create_log_entry(self, db: Session, **fields) -> Dict[str, Any]:
        entry = ServiceLogEntry(**fields)
        db.add(entry)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise translate_integrity_error(
                e, not_found_message="Vehicle or service type not found"
            )
        logger.info(f"Service logged: vehicle={entry.vehicle_id} service={entry.service_id}")
        return self.get_log_entry(db, entry.id)

    def update_log_entry(self, db: Session, entry_id: int, **fields) -> Dict[str, Any]:
        entry = db.get(ServiceLogEntry, entry_id)
        if entry is None:
            raise NotFound("Service log entry not found")
        for key, value in fields.items():
            setattr(entry, key, value)
        entry.modified = func.now()
        db.commit()
        return self.get_log_entry(db, entry_id)

    def delete_log_entry(self, db: Session, entry_id: int) -> None:
        deleted = (
            db.query(ServiceLogEntry)
            .filter(ServiceLogEntry.id == entry_id)
            .delete(synchronize_session=False)
        )
        if not deleted:
            raise NotFound("Service log entry not found")
        db.commit()


maintenance_service = MaintenanceService()
