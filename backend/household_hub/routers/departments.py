"""
API endpoints for the department catalog.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from household_hub.database import get_db
from household_hub.errors import NotFound, translate_integrity_error
from household_hub.models.department import Department
from household_hub.schemas import DepartmentCreate, DepartmentResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[DepartmentResponse])
def list_departments(db: Session = Depends(get_db)):
    return db.query(Department).order_by(Department.name).all()


@router.post("", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
def create_department(payload: DepartmentCreate, db: Session = Depends(get_db)):
    department = Department(name=payload.name.strip())
    db.add(department)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise translate_integrity_error(e, conflict_message="Department already exists")
    db.refresh(department)
    logger.info(f"Department created: {department.id} {department.name!r}")
    return department


@router.delete("/{department_id}", response_model=MessageResponse)
def delete_department(department_id: int, db: Session = Depends(get_db)):
    """Delete a department; its zone rows go with it, items keep a null department."""
    deleted = (
        db.query(Department)
        .filter(Department.id == department_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise NotFound("Department not found")
    db.commit()
    logger.info(f"Department deleted: {department_id}")
    return {"message": "Department deleted successfully"}
