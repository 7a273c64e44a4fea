"""
Store zone service: layout listing, zone upserts, sequence swaps and removal.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from household_hub.errors import InvalidArgument, NotFound, translate_integrity_error
from household_hub.models.department import Department
from household_hub.models.store import StoreZone
from household_hub.services.virtual_store import (
    ALL_STORE_ID,
    GENERAL_ZONE_NAME,
    is_virtual,
    parse_store_id,
    require_real_store_id,
)

logger = logging.getLogger(__name__)

# Parking value for rows in flight during a swap. Real sequences are >= 1,
# so it can never collide; it happens to equal the virtual store id, but
# lives in a different column.
SWAP_SENTINEL_SEQUENCE = -1


def _positive_int(value: Any, field: str) -> int:
    """Coerce value to an int >= 1 or raise InvalidArgument naming the field."""
    if value is None or isinstance(value, bool):
        raise InvalidArgument(f"Invalid {field}")
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidArgument(f"Invalid {field}", detail=str(value))
        value = int(value)
    try:
        number = int(str(value).strip()) if not isinstance(value, int) else value
    except (TypeError, ValueError):
        raise InvalidArgument(f"Invalid {field}", detail=str(value))
    if number < 1:
        raise InvalidArgument(f"Invalid {field}", detail=str(value))
    return number


def normalize_zone_name(name: Optional[str]) -> str:
    if name is None:
        return GENERAL_ZONE_NAME
    cleaned = str(name).strip()
    return cleaned or GENERAL_ZONE_NAME


class ZoneService:
    def list_zones(self, db: Session, store_id: Any) -> List[Dict[str, Any]]:
        """
        Zone rows for a store, each with its department name.

        The virtual store has no rows; every department is presented under
        one implicit "General" zone at sequence 1.
        """
        if is_virtual(store_id):
            departments = db.query(Department).order_by(Department.name).all()
            return [
                {
                    "store_id": ALL_STORE_ID,
                    "zone_sequence": 1,
                    "zone_name": GENERAL_ZONE_NAME,
                    "department_id": d.id,
                    "department_name": d.name,
                    "modified": None,
                }
                for d in departments
            ]

        parsed = parse_store_id(store_id)
        if parsed is None:
            raise InvalidArgument("Invalid store id", detail=str(store_id))

        rows = (
            db.query(StoreZone, Department.name)
            .join(Department, StoreZone.department_id == Department.id)
            .filter(StoreZone.store_id == parsed)
            .order_by(StoreZone.zone_sequence, Department.name)
            .all()
        )
        return [
            {
                "store_id": zone.store_id,
                "zone_sequence": zone.zone_sequence,
                "zone_name": zone.zone_name,
                "department_id": zone.department_id,
                "department_name": department_name,
                "modified": zone.modified,
            }
            for zone, department_name in rows
        ]

    def upsert_zone_assignment(
        self,
        db: Session,
        store_id: Any,
        sequence: Any,
        name: Optional[str],
        department_id: Any,
    ) -> StoreZone:
        """
        Insert a (store, sequence, department) row, or rename it if it exists.

        All arguments are validated before the database is touched.
        """
        store_pk = require_real_store_id(store_id)
        zone_sequence = _positive_int(sequence, "zone_sequence")
        department_pk = _positive_int(department_id, "department_id")
        zone_name = normalize_zone_name(name)

        try:
            zone = db.get(StoreZone, (store_pk, zone_sequence, department_pk))
            if zone is None:
                zone = StoreZone(
                    store_id=store_pk,
                    zone_sequence=zone_sequence,
                    department_id=department_pk,
                    zone_name=zone_name,
                )
                db.add(zone)
            else:
                zone.zone_name = zone_name
                zone.modified = func.now()
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise translate_integrity_error(
                e,
                not_found_message="Store or department not found",
                conflict_message="Department already assigned to this zone",
            )
        except SQLAlchemyError:
            db.rollback()
            raise

        db.refresh(zone)
        logger.info(
            f"Zone upserted: store={store_pk} seq={zone_sequence} "
            f"department={department_pk} name={zone_name!r}"
        )
        return zone

    def swap(self, db: Session, store_id: Any, seq_a: Any, seq_b: Any) -> None:
        """
        Exchange the sequence of every row at seq_a with every row at seq_b.

        Runs as one transaction: A is parked at the sentinel, B moves to A,
        then the parked rows move to B. Any failure rolls everything back.
        """
        store_pk = require_real_store_id(store_id)
        if seq_a is None or seq_b is None:
            raise InvalidArgument("seqA and seqB are required")
        first = _positive_int(seq_a, "seqA")
        second = _positive_int(seq_b, "seqB")

        def _move(from_seq: int, to_seq: int) -> int:
            return (
                db.query(StoreZone)
                .filter(StoreZone.store_id == store_pk, StoreZone.zone_sequence == from_seq)
                .update(
                    {StoreZone.zone_sequence: to_seq, StoreZone.modified: func.now()},
                    synchronize_session=False,
                )
            )

        try:
            moved_a = _move(first, SWAP_SENTINEL_SEQUENCE)
            moved_b = _move(second, first)
            _move(SWAP_SENTINEL_SEQUENCE, second)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.error(f"Zone swap failed for store {store_pk} ({first} <-> {second})")
            raise

        logger.info(
            f"Swapped zones for store {store_pk}: {first} <-> {second} "
            f"({moved_a} and {moved_b} rows)"
        )

    def delete_zone_assignment(
        self, db: Session, store_id: Any, sequence: int, department_id: int
    ) -> None:
        store_pk = require_real_store_id(store_id)
        deleted = (
            db.query(StoreZone)
            .filter(
                StoreZone.store_id == store_pk,
                StoreZone.zone_sequence == sequence,
                StoreZone.department_id == department_id,
            )
            .delete(synchronize_session=False)
        )
        if not deleted:
            db.rollback()
            raise NotFound("Store zone not found")
        db.commit()
        logger.info(f"Zone row deleted: store={store_pk} seq={sequence} department={department_id}")


zone_service = ZoneService()
