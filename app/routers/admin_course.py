import re
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import get_db
from app.utils.auth import require_admin

from app.models.course import Course
from app.models.subject import Subject
from app.schemas.course import (
    CourseCreate, CourseOut, CoursesByDepartmentOut,
    SubjectCreate, SubjectOut,
)
from app.schemas.schedule import Semester

import logging
logger = logging.getLogger("app.admin")


router = APIRouter(prefix="/admin/courses", tags=["Admin - Courses"])


def subject_key(course_id: str, subject_code: str) -> str:
    """("BSIT", "IT-101") -> "BSIT_IT101"; only [A-Za-z0-9_.] survive."""
    slug = re.sub(r"[^A-Za-z0-9_.]", "", subject_code)
    if not slug:
        raise HTTPException(status_code=422, detail=f"subject_code has no usable characters: {subject_code!r}")
    return f"{course_id}_{slug}"


def get_course_or_404(db: Session, course_id: str) -> Course:
    c = db.query(Course).filter(Course.id == course_id).first()
    if not c:
        raise HTTPException(status_code=404, detail="Course not found")
    return c


@router.get("", response_model=CoursesByDepartmentOut)
def list_courses(db: Session = Depends(get_db), admin=Depends(require_admin)):
    rows = db.query(Course).order_by(Course.department.asc(), Course.id.asc()).all()
    grouped: Dict[str, List[CourseOut]] = {}
    for c in rows:
        grouped.setdefault(c.department or "", []).append(CourseOut.model_validate(c))
    return CoursesByDepartmentOut(departments=grouped)


@router.post("", response_model=CourseOut)
def create_course(body: CourseCreate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    if db.query(Course.id).filter(Course.id == body.id).first():
        raise HTTPException(status_code=400, detail="Course id already exists")

    c = Course(id=body.id, name=body.name, department=body.department)
    db.add(c)
    db.commit()
    db.refresh(c)
    logger.info("course created id=%s", c.id)
    return CourseOut.model_validate(c)


@router.get("/{course_id}", response_model=CourseOut)
def get_course(course_id: str, db: Session = Depends(get_db), admin=Depends(require_admin)):
    return CourseOut.model_validate(get_course_or_404(db, course_id))


@router.get("/{course_id}/subjects", response_model=List[SubjectOut])
def list_subjects(
    course_id: str,
    semester: Optional[Semester] = Query(None),
    year_level: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    get_course_or_404(db, course_id)
    q = db.query(Subject).filter(Subject.course_id == course_id)
    if semester:
        q = q.filter(Subject.semester == semester)
    if year_level:
        q = q.filter(Subject.year_level == year_level)
    rows = q.order_by(Subject.year_level.asc(), Subject.subject_code.asc()).all()
    return [SubjectOut.model_validate(s) for s in rows]


@router.post("/{course_id}/subjects", response_model=SubjectOut)
def save_subject(
    course_id: str,
    body: SubjectCreate,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    """Adds a subject to the catalog; saving the same code again overwrites it."""
    get_course_or_404(db, course_id)

    s = (
        db.query(Subject)
        .filter(Subject.course_id == course_id, Subject.subject_code == body.subject_code)
        .first()
    )
    if s is None:
        key = subject_key(course_id, body.subject_code)
        taken = db.get(Subject, key)
        if taken is not None:
            raise HTTPException(
                status_code=400,
                detail=f"subject id {key} is already used by {taken.course_id}/{taken.subject_code}",
            )
        s = Subject(id=key, course_id=course_id, subject_code=body.subject_code)
        db.add(s)

    s.description = body.description
    s.units = body.units
    s.semester = body.semester
    s.year_level = body.year_level

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e.orig))

    db.refresh(s)
    return SubjectOut.model_validate(s)
