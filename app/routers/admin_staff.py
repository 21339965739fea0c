from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.utils.auth import require_admin
from app.utils.ids import next_sequential_id

from app.models.schedule import Schedule
from app.models.staff import Staff, TEACHING_POSITIONS
from app.models.user import User
from app.schemas.staff import NextIdOut, Position, StaffCreate, StaffOut, StaffUpdate

import logging
logger = logging.getLogger("app.admin")


router = APIRouter(prefix="/admin/staff", tags=["Admin - Staff"])


def next_staff_id(db: Session) -> str:
    prefix = settings.STAFF_ID_PREFIX
    rows = db.query(Staff.id).filter(Staff.id.like(f"{prefix}-%")).all()
    return next_sequential_id(prefix, [r[0] for r in rows])


def get_staff_or_404(db: Session, staff_id: str) -> Staff:
    s = db.query(Staff).filter(Staff.id == staff_id).first()
    if not s:
        raise HTTPException(status_code=404, detail="Staff not found")
    return s


def count_schedules(db: Session, staff_id: str) -> int:
    return db.query(Schedule).filter(Schedule.teacher_id == staff_id).count()


@router.get("", response_model=List[StaffOut])
def list_staff(
    position: Optional[Position] = Query(None),
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    q = db.query(Staff)
    if position:
        q = q.filter(Staff.position == position)
    return [StaffOut.model_validate(s) for s in q.order_by(Staff.id.asc()).all()]


@router.get("/next-id", response_model=NextIdOut)
def peek_next_staff_id(db: Session = Depends(get_db), admin=Depends(require_admin)):
    return NextIdOut(next_id=next_staff_id(db))


@router.get("/{staff_id}", response_model=StaffOut)
def get_staff(staff_id: str, db: Session = Depends(get_db), admin=Depends(require_admin)):
    return StaffOut.model_validate(get_staff_or_404(db, staff_id))


@router.post("", response_model=StaffOut)
def create_staff(body: StaffCreate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    s = Staff(id=next_staff_id(db), **body.model_dump())
    db.add(s)
    try:
        db.commit()
    except IntegrityError as e:
        # two creates raced for the same number
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e.orig))

    db.refresh(s)
    logger.info("staff created id=%s position=%s", s.id, s.position)
    return StaffOut.model_validate(s)


@router.put("/{staff_id}", response_model=StaffOut)
def update_staff(
    staff_id: str,
    body: StaffUpdate,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    s = get_staff_or_404(db, staff_id)
    data = body.model_dump(exclude_unset=True)

    new_position = data.get("position")
    if new_position and new_position not in TEACHING_POSITIONS:
        n = count_schedules(db, staff_id)
        if n:
            raise HTTPException(
                status_code=400,
                detail=f"{s.full_name} still teaches {n} scheduled subject(s); reassign them first",
            )

    for k, v in data.items():
        setattr(s, k, v)

    db.commit()
    db.refresh(s)
    return StaffOut.model_validate(s)


@router.delete("/{staff_id}")
def delete_staff(staff_id: str, db: Session = Depends(get_db), admin=Depends(require_admin)):
    s = get_staff_or_404(db, staff_id)

    n = count_schedules(db, staff_id)
    if n:
        raise HTTPException(
            status_code=400,
            detail=f"{s.full_name} still teaches {n} scheduled subject(s); reassign them first",
        )
    if db.query(User.id).filter(User.staff_id == staff_id).first():
        raise HTTPException(status_code=400, detail="Staff member still has a login account")

    db.delete(s)
    db.commit()
    logger.info("staff deleted id=%s", staff_id)
    return {"detail": "deleted"}
