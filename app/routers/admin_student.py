from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import get_db
from app.utils.auth import require_admin
from app.utils.ids import next_sequential_id
from app.utils.timeslots import school_year_of

from app.models.student import Student
from app.schemas.staff import NextIdOut
from app.schemas.student import StudentCreate, StudentListOut, StudentOut, StudentUpdate

import logging
logger = logging.getLogger("app.admin")


router = APIRouter(prefix="/admin/students", tags=["Admin - Students"])


def next_student_id(db: Session, school_year: str) -> str:
    # "2026-2027" -> "2026-00001", "2026-00002", ...
    prefix = school_year.split("-")[0]
    rows = db.query(Student.student_id).filter(Student.school_year == school_year).all()
    return next_sequential_id(prefix, [r[0] for r in rows])


def get_student_or_404(db: Session, student_pk: int) -> Student:
    s = db.query(Student).filter(Student.id == student_pk).first()
    if not s:
        raise HTTPException(status_code=404, detail="Student not found")
    return s


@router.get("", response_model=StudentListOut)
def list_students(
    school_year: Optional[str] = Query(None, description="e.g. 2026-2027"),
    keyword: Optional[str] = Query(None, description="name or student id"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    q = db.query(Student)
    if school_year:
        q = q.filter(Student.school_year == school_year)
    if keyword:
        like = f"%{keyword}%"
        q = q.filter(or_(
            Student.first_name.ilike(like),
            Student.last_name.ilike(like),
            Student.student_id.ilike(like),
        ))

    total = q.count()
    items = (
        q.order_by(Student.student_id.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return StudentListOut(
        items=[StudentOut.model_validate(s) for s in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/next-id", response_model=NextIdOut)
def peek_next_student_id(db: Session = Depends(get_db), admin=Depends(require_admin)):
    return NextIdOut(next_id=next_student_id(db, school_year_of(date.today())))


@router.post("", response_model=StudentOut)
def create_student(body: StudentCreate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    school_year = school_year_of(date.today())
    s = Student(
        student_id=next_student_id(db, school_year),
        school_year=school_year,
        **body.model_dump(),
    )
    db.add(s)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e.orig))

    db.refresh(s)
    logger.info("student created student_id=%s", s.student_id)
    return StudentOut.model_validate(s)


@router.put("/{student_pk}", response_model=StudentOut)
def update_student(
    student_pk: int,
    body: StudentUpdate,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    s = get_student_or_404(db, student_pk)
    for k, v in body.model_dump(exclude_unset=True).items():
        setattr(s, k, v)
    db.commit()
    db.refresh(s)
    return StudentOut.model_validate(s)


@router.delete("/{student_pk}")
def delete_student(student_pk: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    s = get_student_or_404(db, student_pk)
    db.delete(s)
    db.commit()
    return {"detail": "deleted"}
